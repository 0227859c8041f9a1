from __future__ import annotations

from sales_query.stages.search import DEFAULT_SEARCH_FIELDS, perform_search


def _ids(records):
    return [record.transaction_id for record in records]


def test_search_matches_name_case_insensitively(records) -> None:
    outcome = perform_search(records, "ALICE")

    assert outcome["search_applied"] is True
    assert _ids(outcome["results"]) == ["1", "4"]
    assert outcome["result_count"] == 2


def test_search_trims_term_and_matches_phone(records) -> None:
    outcome = perform_search(records, "  555-03 ")

    assert _ids(outcome["results"]) == ["3"]


def test_blank_term_passes_collection_through(records) -> None:
    for term in ("", "   ", None, 42):
        outcome = perform_search(records, term)
        assert outcome["search_applied"] is False
        assert _ids(outcome["results"]) == _ids(records)


def test_search_on_empty_collection() -> None:
    outcome = perform_search([], "alice")

    assert outcome == {"results": [], "search_applied": False, "result_count": 0}


def test_records_missing_search_fields_never_match(records) -> None:
    # Record 5 has no phone number; searching a phone fragment must skip it.
    outcome = perform_search(records, "555")

    assert "5" not in _ids(outcome["results"])
    assert len(outcome["results"]) == 4


def test_custom_fields_and_invalid_fields_fallback(records) -> None:
    by_region = perform_search(records, "north", fields=["customerRegion"])
    assert _ids(by_region["results"]) == ["1", "3"]

    fallback = perform_search(records, "bob", fields="customerName")
    assert _ids(fallback["results"]) == ["2"]
    assert DEFAULT_SEARCH_FIELDS == ("customerName", "phoneNumber")


def test_search_works_on_plain_mappings(sample_rows) -> None:
    outcome = perform_search(sample_rows, "zola")

    assert [row["transactionId"] for row in outcome["results"]] == ["3"]


def test_no_match_returns_empty_with_search_applied(records) -> None:
    outcome = perform_search(records, "nobody")

    assert outcome["results"] == []
    assert outcome["search_applied"] is True
