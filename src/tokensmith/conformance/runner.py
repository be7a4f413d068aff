"""
Conformance runners for the render-time and live-preview compilers.

Both runtimes execute the same fixture corpus (``corpus.json``). Every case
names a ``kind`` (which operation to call), an ``input`` and the
``expected`` output. The Python runner calls the compiler directly; the JS
runner spawns ``node harness.js corpus.json`` and reads its JSON report.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..compiler.class_names import compile_class_name, compile_responsive, compile_spacing_classes
from ..compiler.css_generator import generate, generate_all, process_value
from ..compiler.normalizer import normalize
from ..compiler.registry import (
    DEFAULT_CONTAINER,
    DEFAULT_GROUP,
    canonical_property_name,
    derive_label,
    load_presets,
)
from ..core.errors import ConformanceError

logger = logging.getLogger(__name__)

CONFORMANCE_DIR = Path(__file__).parent
CORPUS_PATH = CONFORMANCE_DIR / "corpus.json"
HARNESS_PATH = CONFORMANCE_DIR / "harness.js"

_NODE_TIMEOUT = 60


@dataclass
class CaseResult:
    """Outcome of one corpus case on one runtime."""

    case_id: str
    kind: str
    passed: bool
    expected: Any = None
    actual: Any = None
    error: str | None = None


@dataclass
class ConformanceReport:
    """All case results for one runtime."""

    runtime: str
    results: list[CaseResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> list[CaseResult]:
        return [result for result in self.results if not result.passed]

    def summary(self) -> str:
        total = len(self.results)
        return f"{self.runtime}: {total - len(self.failures)}/{total} cases passed"


# =============================================================================
# Corpus
# =============================================================================


def load_corpus(path: Path | None = None) -> list[dict[str, Any]]:
    """
    Read the fixture corpus.

    Raises:
        ConformanceError: If the corpus is missing or not valid JSON
    """
    corpus_path = path or CORPUS_PATH
    try:
        data = json.loads(corpus_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConformanceError(f"Cannot read corpus {corpus_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConformanceError(f"Invalid corpus {corpus_path}: {e}") from e

    cases = data.get("cases") if isinstance(data, dict) else None
    if not isinstance(cases, list):
        raise ConformanceError(f"Corpus {corpus_path} has no 'cases' list")
    return cases


def _as_json(value: Any) -> Any:
    """Round-trip through JSON so tuples and lists compare equal."""
    return json.loads(json.dumps(value, ensure_ascii=False))


# =============================================================================
# Python runtime
# =============================================================================


def _load_presets_case(data: dict[str, Any]) -> dict[str, Any]:
    registry = load_presets(
        data.get("document"),
        tuple(data.get("container") or DEFAULT_CONTAINER),
        data.get("default_group") or DEFAULT_GROUP,
    )
    return {
        "status": registry.source_status.value,
        "presets": [
            [
                preset_id,
                {
                    "label": preset.label,
                    "description": preset.description,
                    "group": preset.group,
                    "group_title": preset.group_title,
                    "properties": dict(preset.properties),
                },
            ]
            for preset_id, preset in registry.items()
        ],
    }


_PYTHON_HANDLERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "normalize": lambda data: normalize(data.get("raw")),
    "compile_class": lambda data: compile_class_name(
        data["property_abbrev"], data["breakpoint"], data["side"], data["value"]
    ),
    "compile_responsive": lambda data: compile_responsive(
        data["category"], data.get("value_map"), data.get("breakpoint_order")
    ),
    "compile_spacing": lambda data: compile_spacing_classes(
        data.get("attributes"), data.get("breakpoint_order")
    ),
    "canonical_property": lambda data: canonical_property_name(data["name"]),
    "derive_label": lambda data: derive_label(data["id"]),
    "process_value": lambda data: process_value(data["property"], data.get("value")),
    "generate": lambda data: generate(data["id"], data["preset"], bool(data.get("annotate"))),
    "generate_all": lambda data: generate_all(data["registry"], bool(data.get("annotate"))),
    "load_presets": _load_presets_case,
}


def run_python_case(case: dict[str, Any]) -> Any:
    """
    Execute one corpus case against the Python compiler.

    Raises:
        ConformanceError: If the case kind is unknown
    """
    handler = _PYTHON_HANDLERS.get(case.get("kind", ""))
    if handler is None:
        raise ConformanceError(f"Unknown case kind: {case.get('kind')!r}")
    return _as_json(handler(case.get("input") or {}))


def run_python_corpus(cases: list[dict[str, Any]] | None = None) -> ConformanceReport:
    """Run every case through the Python compiler and compare with ``expected``."""
    report = ConformanceReport(runtime="python")
    for case in cases if cases is not None else load_corpus():
        expected = case.get("expected")
        try:
            actual = run_python_case(case)
        except Exception as e:
            report.results.append(
                CaseResult(case["id"], case.get("kind", ""), False, expected, error=str(e))
            )
            continue
        report.results.append(
            CaseResult(case["id"], case.get("kind", ""), actual == _as_json(expected), expected, actual)
        )
    return report


# =============================================================================
# JavaScript runtime
# =============================================================================


def find_node(node: str | None = None) -> str | None:
    """Resolve the node binary (explicit path, or ``node`` on PATH)."""
    if node:
        return node if Path(node).exists() else shutil.which(node)
    return shutil.which("node")


def run_js_corpus(
    node: str | None = None,
    corpus_path: Path | None = None,
) -> ConformanceReport:
    """
    Run the corpus through the live-preview runtime under node.

    Args:
        node: Path or name of the node binary (defaults to ``node`` on PATH)
        corpus_path: Corpus to run (defaults to the bundled corpus)

    Returns:
        ConformanceReport for the ``js`` runtime

    Raises:
        ConformanceError: If node is unavailable or the harness fails
    """
    node_bin = find_node(node)
    if node_bin is None:
        raise ConformanceError("node executable not found; install Node.js or pass --node")

    corpus_path = corpus_path or CORPUS_PATH
    cases = load_corpus(corpus_path)

    try:
        result = subprocess.run(
            [node_bin, str(HARNESS_PATH), str(corpus_path)],
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=_NODE_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise ConformanceError(f"JS harness timed out after {_NODE_TIMEOUT}s") from e
    except OSError as e:
        raise ConformanceError(f"Cannot run JS harness: {e}") from e

    if result.returncode != 0:
        raise ConformanceError(f"JS harness failed ({result.returncode}): {result.stderr.strip()}")

    try:
        outputs = {item["id"]: item for item in json.loads(result.stdout)["results"]}
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ConformanceError(f"Unreadable JS harness output: {e}") from e

    report = ConformanceReport(runtime="js")
    for case in cases:
        expected = case.get("expected")
        item = outputs.get(case["id"])
        if item is None:
            report.results.append(
                CaseResult(case["id"], case.get("kind", ""), False, expected, error="no result")
            )
        elif "error" in item:
            report.results.append(
                CaseResult(case["id"], case.get("kind", ""), False, expected, error=item["error"])
            )
        else:
            actual = item.get("output")
            report.results.append(
                CaseResult(case["id"], case.get("kind", ""), actual == _as_json(expected), expected, actual)
            )
    logger.debug("%s", report.summary())
    return report


def compare_runtimes(python: ConformanceReport, js: ConformanceReport) -> list[str]:
    """Ids of cases where the two runtimes produced different output."""
    js_outputs = {result.case_id: result for result in js.results}
    mismatched: list[str] = []
    for result in python.results:
        other = js_outputs.get(result.case_id)
        if other is None or other.error or result.error or other.actual != result.actual:
            mismatched.append(result.case_id)
    return mismatched
