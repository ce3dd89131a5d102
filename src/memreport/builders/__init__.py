"""Transforms from merged accounting data into the individual reports."""
from memreport.builders.calltree import build_call_trees
from memreport.builders.common import Candidate
from memreport.builders.common import iter_candidates
from memreport.builders.functions import build_function_summaries
from memreport.builders.leaks import detect_leaks
from memreport.builders.pages import build_page_views
from memreport.builders.typesummary import build_type_summaries

__all__ = [
    "Candidate",
    "iter_candidates",
    "build_call_trees",
    "build_function_summaries",
    "detect_leaks",
    "build_page_views",
    "build_type_summaries",
]
