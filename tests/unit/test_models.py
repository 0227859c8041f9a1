from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from sales_query.domain.models import PaginationInfo, Record
from sales_query.utils.fields import to_camel


def test_record_reads_camel_case_payload() -> None:
    record = Record.model_validate(
        {"transactionId": "T-1", "customerName": " Alice ", "finalAmount": "99.5", "date": "2023-01-15"}
    )

    assert record.transaction_id == "T-1"
    assert record.customer_name == "Alice"
    assert record.final_amount == 99.5
    assert record.date == date(2023, 1, 15)


def test_record_serializes_with_camel_case_keys() -> None:
    payload = Record(transaction_id="1", phone_number="555").model_dump(by_alias=True)

    assert payload["transactionId"] == "1"
    assert payload["phoneNumber"] == "555"


def test_aliases_use_shared_camel_case_helper() -> None:
    for name, info in Record.model_fields.items():
        assert info.alias == to_camel(name)
    for name, info in PaginationInfo.model_fields.items():
        assert info.alias == to_camel(name)


def test_numeric_identifier_becomes_string() -> None:
    assert Record.model_validate({"transactionId": 7}).transaction_id == "7"
    assert Record.model_validate({"transactionId": 7.0}).transaction_id == "7"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_identifier_is_rejected(value) -> None:
    with pytest.raises(ValidationError):
        Record.model_validate({"transactionId": value})


def test_malformed_optional_fields_become_none() -> None:
    record = Record.model_validate(
        {
            "transactionId": "1",
            "date": "not a date",
            "quantity": "-1",
            "age": "thirty",
            "finalAmount": "NaN",
            "gender": {"value": "Female"},
            "tags": 5,
        }
    )

    assert record.date is None
    assert record.quantity is None
    assert record.age is None
    assert record.final_amount is None
    assert record.gender is None
    assert record.tags is None


def test_tags_accept_delimited_strings_and_lists() -> None:
    assert Record.model_validate({"transactionId": "1", "tags": "a, b;c|"}).tags == ("a", "b", "c")
    assert Record.model_validate({"transactionId": "1", "tags": ["x", " ", None]}).tags == ("x",)
    assert Record.model_validate({"transactionId": "1", "tags": []}).tags is None


def test_timestamps_are_truncated_to_dates() -> None:
    record = Record.model_validate({"transactionId": "1", "date": "2023-01-15T22:10:00Z"})

    assert record.date == date(2023, 1, 15)


def test_records_are_immutable(records) -> None:
    with pytest.raises(ValidationError):
        records[0].customer_name = "Mallory"


def test_unknown_fields_are_ignored() -> None:
    record = Record.model_validate({"transactionId": "1", "loyaltyPoints": 40})

    assert not hasattr(record, "loyalty_points")
