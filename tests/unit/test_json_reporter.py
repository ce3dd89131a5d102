import json
from io import StringIO

from memreport import CallTreeNode
from memreport import FunctionSummary
from memreport import LeakCandidate
from memreport import MemoryReport
from memreport import PageView
from memreport import TypeSummary
from memreport.reporters.json_report import JsonReporter


def _report():
    child = CallTreeNode("caller", "", 0, 1, 50, 50, 50)
    return MemoryReport(
        session_name="game",
        total_snapshots=2,
        total_allocations=10,
        total_size=100,
        leak_count=10,
        leak_size=100,
        memory_fragmentation=100.0,
        call_trees=(CallTreeNode("leaf", "a.cpp", 3, 10, 100, 100, 100, (child,)),),
        functions=(FunctionSummary("leaf", "a.cpp", 3, 10, 100, 10, 10, 10, 100.0),),
        leaks=(LeakCandidate("leaf", "a.cpp", 3, 100, 10, 2.0, "0x10", False),),
        page_views=(
            PageView(4096, "Committed", "Private", 4, 1, 64, 1, 32, "leaf", "0x10"),
        ),
        types=(
            TypeSummary("leaf", 10, 100, 10, 10, 10, 100.0, "leaf", "a.cpp", 3),
        ),
    )


def test_document_uses_camel_case_keys():
    # GIVEN
    reporter = JsonReporter(_report())
    output = StringIO()

    # WHEN
    reporter.render(output)

    # THEN
    document = json.loads(output.getvalue())
    assert list(document) == [
        "sessionName",
        "totalSnapshots",
        "totalAllocations",
        "totalSize",
        "leakCount",
        "leakSize",
        "memoryFragmentation",
        "callTrees",
        "functions",
        "leaks",
        "pageViews",
        "types",
    ]
    assert document["callTrees"] == [
        {
            "functionName": "leaf",
            "fileName": "a.cpp",
            "lineNumber": 3,
            "allocationCount": 10,
            "totalSize": 100,
            "selfSize": 100,
            "inclusiveSize": 100,
            "children": [
                {
                    "functionName": "caller",
                    "fileName": "",
                    "lineNumber": 0,
                    "allocationCount": 1,
                    "totalSize": 50,
                    "selfSize": 50,
                    "inclusiveSize": 50,
                    "children": [],
                }
            ],
        }
    ]
    assert document["leaks"][0] == {
        "functionName": "leaf",
        "fileName": "a.cpp",
        "lineNumber": 3,
        "leakSize": 100,
        "leakCount": 10,
        "leakScore": 2.0,
        "callStack": "0x10",
        "isSuspect": False,
    }
    assert document["pageViews"][0]["stackId"] == 1
    assert document["types"][0]["mostCommonLine"] == 3
    assert document["functions"][0]["averageSize"] == 10


def test_document_is_indented():
    output = StringIO()

    JsonReporter(_report(), indent=4).render(output)

    assert output.getvalue().startswith('{\n    "sessionName": "game",')
    assert output.getvalue().endswith("}\n")
