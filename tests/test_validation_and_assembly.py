"""
Tests for the completeness validator, result assembler and result model
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from receipt_extractor.assembler import assemble_result
from receipt_extractor.models import VerificationResult
from receipt_extractor.validator import validate_completeness


def test_required_set_is_reference_and_amount(dashen_ruleset):
    assert [r.name for r in dashen_ruleset.required] == ["transaction_reference", "transaction_amount"]


def test_success_with_only_required_fields(dashen_ruleset):
    verdict = validate_completeness(
        {"transaction_reference": "ABC123", "transaction_amount": Decimal("1")}, dashen_ruleset,
    )
    assert verdict.success is True
    assert verdict.missing == []
    assert verdict.error is None


def test_zero_amount_is_defined(dashen_ruleset):
    verdict = validate_completeness(
        {"transaction_reference": "ABC123", "transaction_amount": Decimal("0")}, dashen_ruleset,
    )
    assert verdict.success is True


def test_missing_fields_are_named(dashen_ruleset):
    verdict = validate_completeness({"sender_name": "X", "transaction_amount": None}, dashen_ruleset)
    assert verdict.success is False
    assert verdict.missing == ["Transaction Reference", "Transaction Amount"]
    assert "Transaction Reference" in verdict.error
    assert "Transaction Amount" in verdict.error


def test_assemble_success_copies_all_defined_fields(dashen_ruleset):
    values = {
        "transaction_reference": "ABC123",
        "transaction_amount": Decimal("500.00"),
        "vat": Decimal("0.35"),
        "sender_name": "Abebe Kebede",
        "narrative": None,
    }
    result = assemble_result(values, validate_completeness(values, dashen_ruleset))

    assert result.success is True
    assert result.error is None
    assert result.transaction_amount == 500.0
    assert isinstance(result.transaction_amount, float)
    assert result.vat == 0.35
    assert result.sender_name == "Abebe Kebede"
    assert result.narrative is None


def test_assemble_failure_keeps_partial_fields(dashen_ruleset):
    values = {"transaction_reference": None, "transaction_amount": Decimal("5"), "receiver_name": "Jane"}
    result = assemble_result(values, validate_completeness(values, dashen_ruleset))

    assert result.success is False
    assert "Transaction Reference" in result.error
    assert result.transaction_amount == 5.0
    assert result.receiver_name == "Jane"


def test_response_is_camel_case_and_omits_none():
    eat = timezone(timedelta(hours=3))
    result = VerificationResult(
        success=True,
        transaction_reference="FT1",
        transaction_amount=12.5,
        transaction_date=datetime(2024, 1, 15, 10, 30, 45, tzinfo=eat),
        diagnostics={"provider": "dashen"},
    )
    body = result.to_response()

    assert body == {
        "success": True,
        "transactionReference": "FT1",
        "transactionAmount": 12.5,
        "transactionDate": "2024-01-15T10:30:45+03:00",
    }


def test_error_present_iff_failure():
    with pytest.raises(ValidationError):
        VerificationResult(success=False)
    with pytest.raises(ValidationError):
        VerificationResult(success=False, error="")
    with pytest.raises(ValidationError):
        VerificationResult(success=True, error="boom")


def test_failure_helper():
    result = VerificationResult.failure("Failed to fetch receipt: timeout")
    assert result.to_response() == {"success": False, "error": "Failed to fetch receipt: timeout"}


def test_negative_amount_rejected_by_model():
    with pytest.raises(ValidationError):
        VerificationResult(success=True, transaction_amount=-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
