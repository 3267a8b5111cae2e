from datetime import date

from src.app.controllers.filters import Contains, DateRange, Equals, apply_filters
from src.domain.entities import TaskStatus

ROWS = [
    {"id": 1, "name": "Enterprises", "will_serve": True, "due": "2024-03-01", "status": "done"},
    {"id": 2, "name": "Startups", "will_serve": False, "due": "2024-03-15", "status": "to_do"},
    {"id": 3, "name": "Schools", "will_serve": True, "due": None, "status": "to_do"},
]


def ids(rows):
    return [row["id"] for row in rows]


def test_inactive_predicates_match_everything():
    predicates = [Contains("name", ""), Equals("status", "none"), DateRange("due", None, "")]

    assert ids(apply_filters(ROWS, predicates)) == [1, 2, 3]


def test_contains_ignores_case_and_surrounding_space():
    assert ids(apply_filters(ROWS, [Contains("name", " ENT ")])) == [1]


def test_equals_accepts_boolean_strings_and_enums():
    assert ids(apply_filters(ROWS, [Equals("will_serve", "false")])) == [2]
    assert ids(apply_filters(ROWS, [Equals("will_serve", True)])) == [1, 3]
    assert ids(apply_filters(ROWS, [Equals("status", TaskStatus.to_do)])) == [2, 3]


def test_date_range_is_inclusive_and_skips_undated_rows():
    assert ids(apply_filters(ROWS, [DateRange("due", "2024-03-01", "2024-03-15")])) == [1, 2]
    assert ids(apply_filters(ROWS, [DateRange("due", date(2024, 3, 2))])) == [2]
    assert ids(apply_filters(ROWS, [DateRange("due", end="2024-03-01")])) == [1]


def test_predicates_combine_with_and():
    predicates = [Equals("will_serve", "true"), Contains("name", "s")]

    assert ids(apply_filters(ROWS, predicates)) == [1, 3]
    assert ids(apply_filters(ROWS, list(reversed(predicates)))) == [1, 3]


def test_unparseable_date_bound_is_left_open():
    assert ids(apply_filters(ROWS, [DateRange("due", "05/01/2024")])) == [1, 2, 3]
    assert ids(apply_filters(ROWS, [DateRange("due", "not a date", "2024-03-01")])) == [1]


def test_rows_with_unparseable_dates_do_not_match_an_active_range():
    rows = ROWS + [{"id": 4, "name": "Clinics", "due": "next week", "status": "to_do"}]

    assert ids(apply_filters(rows, [DateRange("due", "2024-01-01")])) == [1, 2]


def test_contains_accepts_non_text_search_values():
    rows = [{"id": 1, "name": "Plan 2024"}, {"id": 2, "name": "Plan 2025"}]

    assert ids(apply_filters(rows, [Contains("name", 2024)])) == [1]
