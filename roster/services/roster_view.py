"""
Roster page controller.

RosterView owns the collection shown on the page and the active filter
state. Routers build one per request from StudentService data; nothing here
is module-global.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from roster.domain.filters import FilterState, apply_filters, compute_stats, filter_options


class RosterView:
    def __init__(self, students: Iterable[Mapping[str, Any]] = (), filters: FilterState | None = None) -> None:
        self.students: list[dict] = [dict(s) for s in students]
        self.filters = filters or FilterState()

    def visible(self) -> list[dict]:
        return apply_filters(self.students, self.filters)

    def stats(self) -> dict:
        return compute_stats(self.students)

    def options(self) -> dict:
        return filter_options(self.students)

    def table_info(self) -> str:
        shown = len(self.visible())
        total = len(self.students)
        if shown < total:
            return f"(Filtered: {shown} of {total})"
        return ""

    def context(self) -> dict:
        """Template variables for roster.html."""
        rows = self.visible()
        return {
            "students": rows,
            "display_count": len(rows),
            "total_count": len(self.students),
            "table_info": self.table_info(),
            "stats": self.stats(),
            "options": self.options(),
            "filters": self.filters.as_dict(),
            "filters_active": self.filters.is_active(),
        }
