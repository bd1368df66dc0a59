from __future__ import annotations

import pytest

from roster.domain.filters import ALL, FilterState, apply_filters, compute_stats, filter_options


def _ids(records):
    return [r["id"] for r in records]


def test_default_state_returns_everything_in_order(sample_students):
    assert apply_filters(sample_students, FilterState()) == sample_students
    assert apply_filters(sample_students) == sample_students


def test_search_by_id_includes_record(sample_students):
    for record in sample_students:
        assert record in apply_filters(sample_students, FilterState(search=record["id"]))


def test_search_is_case_insensitive_across_fields(sample_students):
    assert _ids(apply_filters(sample_students, FilterState(search="LOVELACE"))) == ["S2"]
    assert _ids(apply_filters(sample_students, FilterState(search="navy"))) == ["S3"]
    assert _ids(apply_filters(sample_students, FilterState(search="example.com"))) == ["S1", "S2", "S3"]


def test_search_matches_string_form_of_non_string_values():
    records = [{"id": 7, "fullName": "Seven"}, {"id": 8, "fullName": "Eight"}]
    assert apply_filters(records, FilterState(search="7")) == [records[0]]


def test_categorical_filters_are_exact_and_case_sensitive(sample_students):
    assert _ids(apply_filters(sample_students, FilterState(program="CS"))) == ["S1", "S3"]
    assert apply_filters(sample_students, FilterState(program="cs")) == []
    assert apply_filters(sample_students, FilterState(program="C")) == []


def test_filters_are_conjunctive(sample_students):
    state = FilterState(program="CS", gender="Female")
    assert _ids(apply_filters(sample_students, state)) == ["S3"]
    state = FilterState(search="alan", gender="Female")
    assert apply_filters(sample_students, state) == []


def test_two_record_example():
    records = [
        {"id": "S1", "fullName": "A", "gender": "Male", "email": "a@x", "program": "CS", "yearLevel": "1", "university": "U"},
        {"id": "S2", "fullName": "B", "gender": "Female", "email": "b@x", "program": "Math", "yearLevel": "1", "university": "U"},
    ]
    assert compute_stats(records) == {"total": 2, "male": 1, "female": 1, "programs": 2}
    assert _ids(apply_filters(records, FilterState(program="CS", search=""))) == ["S1"]


def test_apply_filters_does_not_mutate_input(sample_students):
    before = [dict(r) for r in sample_students]
    state = FilterState(search="cs")
    first = apply_filters(sample_students, state)
    second = apply_filters(sample_students, state)
    assert first == second
    assert sample_students == before


def test_stats_on_empty_collection():
    assert compute_stats([]) == {"total": 0, "male": 0, "female": 0, "programs": 0}


def test_filter_options_are_sorted_and_distinct(sample_students):
    options = filter_options(sample_students)
    assert options["program"] == ["CS", "Math"]
    assert options["gender"] == ["Female", "Male"]
    assert options["university"] == ["Navy College", "State University"]


def test_from_mapping_ignores_unknown_and_blank_values():
    state = FilterState.from_mapping({"program": "CS", "gender": "", "page": "2", "search": "ada"})
    assert state == FilterState(search="ada", program="CS", gender=ALL)
    assert FilterState.from_mapping(None) == FilterState()


def test_state_helpers():
    state = FilterState().with_value("yearLevel", "2nd Year")
    assert state.is_active()
    assert state.as_dict()["yearLevel"] == "2nd Year"
    assert not state.cleared().is_active()
    with pytest.raises(KeyError):
        state.with_value("nope", "x")
