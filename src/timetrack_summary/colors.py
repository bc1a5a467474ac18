"""
Color annotation for summary categories.

PURPOSE: Pick the colors a summary page actually needs out of the
configured color tables.
AI CONTEXT: Pure function, no I/O. Keys in the configured tables are
lower-case; category names are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import SummaryItem

__all__ = ["filter_colors"]


def filter_colors(
    full_table: Mapping[str, str],
    present: Iterable[SummaryItem | str],
) -> dict[str, str]:
    """
    Restrict a color table to the categories present in a summary.

    Business context: The full language table holds hundreds of entries,
    but the summary page only draws the handful of languages a user
    actually worked with. Shipping the filtered subset keeps the rendered
    page small.

    Args:
        full_table: Configured colors, lower-case category name -> color.
        present: Summary items (or bare names) found in the summary data.

    Returns:
        New dict holding only the table entries whose key matches a present
        name. Names without a configured color are omitted; table entries
        without matching data are omitted.

    Example:
        >>> filter_colors({"a": "red", "b": "blue"}, ["a", "c"])
        {'a': 'red'}
        >>> filter_colors({"python": "#3572a5"}, [SummaryItem("Python", 60)])
        {'python': '#3572a5'}
    """
    subset: dict[str, str] = {}
    for entry in present:
        name = (entry.key if isinstance(entry, SummaryItem) else entry).lower()
        color = full_table.get(name)
        if color is not None:
            subset[name] = color
    return subset
