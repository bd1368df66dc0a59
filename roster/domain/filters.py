"""
Filter engine and aggregate stats for the roster.

apply_filters() is a pure function over the collection: free-text search
matches any field value case-insensitively, categorical filters match exactly
unless set to ALL. Result order follows the input order.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Mapping

ALL = "all"
CATEGORY_FIELDS = ("program", "gender", "yearLevel", "university")


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    program: str = ALL
    gender: str = ALL
    yearLevel: str = ALL
    university: str = ALL

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "FilterState":
        """Build a state from query params/form data; blanks fall back to defaults."""
        values = values or {}
        kwargs = {}
        for f in fields(cls):
            raw = values.get(f.name)
            if raw is None:
                continue
            text = str(raw)
            if f.name != "search" and not text.strip():
                continue
            kwargs[f.name] = text
        return cls(**kwargs)

    def with_value(self, name: str, value: str) -> "FilterState":
        if name not in {f.name for f in fields(self)}:
            raise KeyError(name)
        return replace(self, **{name: value})

    def cleared(self) -> "FilterState":
        return FilterState()

    def is_active(self) -> bool:
        return self != FilterState()

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _matches_search(record: Mapping[str, Any], needle: str) -> bool:
    if not needle:
        return True
    needle = needle.lower()
    return any(needle in str(value).lower() for value in record.values())


def matches(record: Mapping[str, Any], state: FilterState) -> bool:
    if not _matches_search(record, state.search):
        return False
    for name in CATEGORY_FIELDS:
        wanted = getattr(state, name)
        if wanted != ALL and record.get(name) != wanted:
            return False
    return True


def apply_filters(records: Iterable[Mapping[str, Any]], state: FilterState | None = None) -> list:
    """Return the records satisfying every predicate of state, in input order."""
    state = state or FilterState()
    return [record for record in records if matches(record, state)]


def compute_stats(records: Iterable[Mapping[str, Any]]) -> dict:
    records = list(records)
    return {
        "total": len(records),
        "male": sum(1 for r in records if r.get("gender") == "Male"),
        "female": sum(1 for r in records if r.get("gender") == "Female"),
        "programs": len({r.get("program") for r in records}),
    }


def filter_options(records: Iterable[Mapping[str, Any]]) -> dict:
    """Sorted distinct values per categorical field, for dropdowns."""
    records = list(records)
    options = {}
    for name in CATEGORY_FIELDS:
        options[name] = sorted({str(r.get(name)) for r in records if r.get(name)})
    return options
