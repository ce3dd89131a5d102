from memreport import CallTreeNode
from memreport import Callstack
from memreport.builders import build_call_trees
from tests.utils import make_callstack
from tests.utils import make_candidate


def test_root_node_mirrors_the_accounting_record():
    # GIVEN
    callstack = make_callstack("Alloc (alloc.cpp(12))")
    candidates = [make_candidate(1, 4096, 8, callstack)]

    # WHEN
    trees = build_call_trees(candidates)

    # THEN
    assert trees == [
        CallTreeNode(
            function_name="Alloc (alloc.cpp(12))",
            file_name="alloc.cpp",
            line_number=12,
            allocation_count=8,
            total_size=4096,
            self_size=4096,
            inclusive_size=4096,
            children=(),
        )
    ]


def test_children_split_the_cost_evenly():
    # GIVEN
    symbols = [f"frame{i} (f{i}.cpp({i}))" for i in range(6)]
    candidates = [make_candidate(1, 1000, 13, make_callstack(*symbols))]

    # WHEN
    (tree,) = build_call_trees(candidates)

    # THEN
    assert [child.function_name for child in tree.children] == symbols[1:5]
    for i, child in enumerate(tree.children, start=1):
        assert child.file_name == f"f{i}.cpp"
        assert child.line_number == i
        assert child.total_size == child.self_size == child.inclusive_size == 200
        assert child.allocation_count == 2
        assert child.children == ()


def test_children_get_at_least_one_allocation():
    candidates = [make_candidate(1, 7, 1, make_callstack("a", "b", "c"))]

    (tree,) = build_call_trees(candidates)

    assert [child.allocation_count for child in tree.children] == [1, 1]
    assert [child.total_size for child in tree.children] == [3, 3]


def test_two_frame_stack_gives_the_caller_everything():
    candidates = [make_candidate(1, 999, 9, make_callstack("leaf", "caller"))]

    (tree,) = build_call_trees(candidates)

    (child,) = tree.children
    assert child.total_size == 999
    assert child.allocation_count == 4


def test_function_name_falls_back_to_address_then_unknown():
    candidates = [
        make_candidate(1, 10, 3, Callstack(symbols=(), addresses=(0xABC, 0x1))),
        make_candidate(2, 10, 2, Callstack(symbols=(), addresses=(0,))),
        make_candidate(3, 10, 1, Callstack()),
    ]

    trees = build_call_trees(candidates)

    assert [tree.function_name for tree in trees] == [
        "0xABC",
        "Unknown Function",
        "Unknown Function",
    ]
    assert all(tree.file_name == "" and tree.line_number == 0 for tree in trees)
    assert all(tree.children == () for tree in trees)


def test_keeps_the_ten_stacks_with_most_allocations():
    # GIVEN
    candidates = [
        make_candidate(i, 1, count, make_callstack(f"f{i}"))
        for i, count in enumerate([5, 1, 9, 5, 12, 3, 7, 8, 2, 11, 4, 6])
    ]

    # WHEN
    trees = build_call_trees(candidates)

    # THEN
    assert [tree.allocation_count for tree in trees] == [12, 11, 9, 8, 7, 6, 5, 5, 4, 3]
    assert [tree.function_name for tree in trees][6:8] == ["f0", "f3"]


def test_root_sizes_are_consistent():
    candidates = [
        make_candidate(i, 100 * i, i, make_callstack("a", "b", "c"))
        for i in range(1, 6)
    ]

    for tree in build_call_trees(candidates):
        assert tree.self_size == tree.inclusive_size == tree.total_size
