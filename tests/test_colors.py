"""Tests for colors module."""

from __future__ import annotations

from types import MappingProxyType

from timetrack_summary.colors import filter_colors
from timetrack_summary.models import SummaryItem


class TestFilterColors:
    """Tests for restricting color tables to present categories."""

    def test_keeps_only_matching_entries(self) -> None:
        """Verifies unmatched table entries and unmatched names are both dropped.

        Business context:
        Only colors of categories shown on the page are shipped to the
        template; unknown categories fall back to a neutral color there.

        Arrangement:
        Table {a: red, b: blue}, present names {a, c}.

        Assertion Strategy:
        Result is exactly {a: red}.
        """
        result = filter_colors({"a": "red", "b": "blue"}, ["a", "c"])

        assert result == {"a": "red"}

    def test_matches_summary_items_case_insensitively(self) -> None:
        """Verifies summary item keys match lower-case table keys."""
        table = {"python": "#3572a5", "go": "#00add8"}
        items = [SummaryItem("Python", 60.0), SummaryItem("Haskell", 30.0)]

        result = filter_colors(table, items)

        assert result == {"python": "#3572a5"}

    def test_empty_present_yields_empty_mapping(self) -> None:
        assert filter_colors({"a": "red"}, []) == {}

    def test_accepts_read_only_table(self) -> None:
        """Verifies configured MappingProxyType tables work and stay unchanged."""
        table = MappingProxyType({"linux": "#f0db4f"})

        result = filter_colors(table, [SummaryItem("Linux", 1.0)])

        assert result == {"linux": "#f0db4f"}
        assert dict(table) == {"linux": "#f0db4f"}

    def test_result_is_a_new_dict(self) -> None:
        table = {"a": "red"}

        result = filter_colors(table, ["a"])
        result["b"] = "blue"

        assert "b" not in table
