from __future__ import annotations

from sales_query.stages import sorting
from sales_query.stages.sorting import apply_sorting, collation_key


def _ids(records):
    return [record.transaction_id for record in records]


def test_default_sort_is_date_descending_with_missing_dates_last(records) -> None:
    outcome = apply_sorting(records)

    assert outcome["sort_applied"] is True
    # 2 and 4 share a date and keep their incoming order.
    assert _ids(outcome["data"]) == ["2", "4", "3", "1", "5"]


def test_date_ascending_keeps_ties_stable(records) -> None:
    outcome = apply_sorting(records, "date", "asc")

    assert _ids(outcome["data"]) == ["5", "1", "3", "2", "4"]


def test_amount_alias_sorts_by_final_amount(records) -> None:
    outcome = apply_sorting(records, "amount", "desc")

    assert _ids(outcome["data"]) == ["4", "1", "2", "3", "5"]


def test_customer_name_sort_is_case_and_accent_insensitive(records) -> None:
    outcome = apply_sorting(records, "customerName", "asc")

    assert _ids(outcome["data"]) == ["4", "1", "2", "5", "3"]


def test_numeric_sort_treats_missing_as_zero(records) -> None:
    outcome = apply_sorting(records, "quantity", "asc")

    assert _ids(outcome["data"]) == ["5", "3", "1", "4", "2"]


def test_snake_case_key_and_age(records) -> None:
    outcome = apply_sorting(records, "age", "ASC")

    assert _ids(outcome["data"]) == ["5", "1", "4", "2", "3"]
    assert _ids(apply_sorting(records, "final_amount", "asc")["data"])[0] == "5"


def test_invalid_order_falls_back_to_descending(records) -> None:
    outcome = apply_sorting(records, "quantity", "sideways")

    assert _ids(outcome["data"]) == ["2", "4", "1", "3", "5"]


def test_unsupported_key_keeps_incoming_order(records) -> None:
    reversed_input = list(reversed(records))

    outcome = apply_sorting(reversed_input, "colour", "asc")

    assert outcome["sort_applied"] is False
    assert _ids(outcome["data"]) == _ids(reversed_input)
    assert outcome["data"] is not reversed_input


def test_sorting_does_not_mutate_input(records) -> None:
    original = list(records)

    apply_sorting(original, "customerName", "desc")

    assert _ids(original) == _ids(records)


def test_sort_empty_collection() -> None:
    assert apply_sorting([], "date", "asc") == {"data": [], "sort_applied": False}


def test_sorting_failure_returns_original_order(records, monkeypatch) -> None:
    def broken_key(record):
        raise ValueError("bad key")

    monkeypatch.setitem(sorting._SORT_KEYS, sorting.SortKey.AGE, broken_key)

    outcome = apply_sorting(records, "age", "asc")

    assert outcome["sort_applied"] is False
    assert _ids(outcome["data"]) == _ids(records)


def test_collation_key_folds_accents() -> None:
    assert collation_key("Émile")[0] == collation_key("emile")[0]
    assert sorted(["zoë", "Zoe", "ana"], key=collation_key) == ["ana", "Zoe", "zoë"]
