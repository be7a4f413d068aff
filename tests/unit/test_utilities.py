"""Tests for the spacing utility stylesheet generator."""

from __future__ import annotations

from tokensmith.compiler.utilities import (
    escape_selector,
    generate_utilities_css,
    normalize_spacing_sizes,
    sort_breakpoints,
)
from tokensmith.core.ir.tokens import Breakpoint, SpacingSize, StyleCategory

SCALE = [{"slug": "2", "name": "Small", "size": "0.5rem"}]
BREAKPOINTS = [
    Breakpoint(slug="lg", name="Large", value="1024px"),
    Breakpoint(slug="base", name="Base", value="0"),
    Breakpoint(slug="md", name="Medium", value="768px"),
]


class TestNormalizeSpacingSizes:
    def test_zero_step_inserted_first(self) -> None:
        sizes = normalize_spacing_sizes(SCALE)
        assert [s.slug for s in sizes] == ["0", "2"]
        assert sizes[0] == SpacingSize(slug="0", name="None", size="0")

    def test_existing_zero_not_duplicated(self) -> None:
        sizes = normalize_spacing_sizes([{"slug": "0", "size": "0"}, *SCALE])
        assert [s.slug for s in sizes] == ["0", "2"]

    def test_incomplete_entries_skipped(self) -> None:
        sizes = normalize_spacing_sizes([{"slug": "4"}, {"size": "1rem"}, "x", *SCALE])
        assert [s.slug for s in sizes] == ["0", "2"]

    def test_missing_name_defaulted(self) -> None:
        assert normalize_spacing_sizes([{"slug": "4", "size": "1rem"}])[1].name == "Size 4"


class TestBreakpoints:
    def test_sorted_by_min_width_without_base(self) -> None:
        assert [bp.slug for bp in sort_breakpoints(BREAKPOINTS)] == ["md", "lg"]

    def test_escape_selector(self) -> None:
        assert escape_selector("md:pt-2") == r"md\:pt-2"


class TestGenerateUtilitiesCss:
    def test_empty_scale(self) -> None:
        assert generate_utilities_css([]) == ""

    def test_base_rules(self) -> None:
        lines = generate_utilities_css(SCALE).splitlines()

        assert ".has-gap.gap-0 { gap: 0; }" in lines
        assert ".has-gap.gap-2 { gap: var(--spacing--2, 0.5rem); }" in lines
        assert ".has-gap.gapx-2 { column-gap: var(--spacing--2, 0.5rem); }" in lines
        assert ".has-gap.gapy-2 { row-gap: var(--spacing--2, 0.5rem); }" in lines
        assert ".p-2 { padding: var(--spacing--2, 0.5rem); }" in lines
        assert ".px-0 { padding-left: 0; padding-right: 0; }" in lines
        assert ".pt-2 { padding-top: var(--spacing--2, 0.5rem); }" in lines
        assert ".my-2 { margin-top: var(--spacing--2, 0.5rem); margin-bottom: var(--spacing--2, 0.5rem); }" in lines
        assert ".ml-0 { margin-left: 0; }" in lines

    def test_gap_has_no_single_side_rules(self) -> None:
        css = generate_utilities_css(SCALE)
        assert "gapt-" not in css
        assert "gapl-" not in css

    def test_rule_count(self) -> None:
        css = generate_utilities_css(SCALE)
        # 2 sizes x (3 gap sides + 7 padding sides + 7 margin sides)
        assert len(css.strip().splitlines()) == 34

    def test_media_queries_in_width_order(self) -> None:
        css = generate_utilities_css(SCALE, BREAKPOINTS)

        assert css.index("@media (min-width: 768px) {") < css.index("@media (min-width: 1024px) {")
        assert r"    .md\:pt-2 { padding-top: var(--spacing--2, 0.5rem); }" in css.splitlines()
        assert r"    .has-gap.lg\:gap-0 { gap: 0; }" in css.splitlines()
        assert css.endswith("}\n")

    def test_sections_separated_by_blank_line(self) -> None:
        css = generate_utilities_css(SCALE, BREAKPOINTS)
        assert css.count("\n\n@media") == 2

    def test_category_subset_and_prefix(self) -> None:
        css = generate_utilities_css(
            SCALE, categories=[StyleCategory.PADDING], variable_prefix="--wp--preset--spacing--"
        )
        assert ".p-2 { padding: var(--wp--preset--spacing--2, 0.5rem); }" in css.splitlines()
        assert "gap" not in css
        assert ".m-" not in css

    def test_selectors_match_compiled_class_names(self) -> None:
        from tokensmith.compiler.class_names import compile_responsive

        classes = compile_responsive("padding", {"md": {"type": "sides", "top": "2"}}).split()
        css = generate_utilities_css(SCALE, BREAKPOINTS)
        for class_name in classes:
            assert f".{escape_selector(class_name)} {{" in css
