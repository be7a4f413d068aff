"""Shared fixture corpus and runners for the Python and JavaScript compilers."""

from .runner import (
    CORPUS_PATH,
    CaseResult,
    ConformanceReport,
    compare_runtimes,
    find_node,
    load_corpus,
    run_js_corpus,
    run_python_case,
    run_python_corpus,
)

__all__ = [
    "CORPUS_PATH",
    "CaseResult",
    "ConformanceReport",
    "compare_runtimes",
    "find_node",
    "load_corpus",
    "run_js_corpus",
    "run_python_case",
    "run_python_corpus",
]
