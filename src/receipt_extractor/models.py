"""
Verification result schema.

Field names are snake_case in Python and camelCase on the wire
(senderName, transactionAmount, ...).  Absent fields are omitted when
serialized with to_response().
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class VerificationResult(BaseModel):
    """Outcome of verifying one receipt."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "senderName": "Abebe Kebede",
                "senderAccountNumber": "5036****011",
                "transactionChannel": "Mobile",
                "serviceType": "Account To Account",
                "receiverName": "Tigist Alemu",
                "transactionReference": "FT24015ABC12",
                "transactionDate": "2024-01-15T10:30:45+03:00",
                "transactionAmount": 500.0,
                "serviceCharge": 2.0,
                "vat": 0.3,
                "total": 502.3,
            }
        },
    )

    success: bool = Field(..., description="True only when every required field was extracted")

    # ── Parties ───────────────────────────────────────────────────────────────
    sender_name: Optional[str]            = Field(None, description="Sender full name, title-cased")
    sender_account_number: Optional[str]  = Field(None, description="Sender account (usually masked)")
    receiver_name: Optional[str]          = Field(None, description="Receiver full name, title-cased")
    phone_no: Optional[str]               = Field(None, description="Receiver phone number")
    institution_name: Optional[str]       = Field(None, description="Receiving institution, title-cased")

    # ── Transaction ───────────────────────────────────────────────────────────
    transaction_channel: Optional[str]    = Field(None, description="Channel, e.g. Mobile / USSD")
    service_type: Optional[str]           = Field(None, description="Service type as printed")
    narrative: Optional[str]              = Field(None, description="Free-text narrative")
    transaction_reference: Optional[str]  = Field(None, description="Provider transaction reference")
    transfer_reference: Optional[str]     = Field(None, description="Interbank transfer reference")
    transaction_date: Optional[datetime]  = Field(None, description="Absolute transaction timestamp")

    # ── Amounts ───────────────────────────────────────────────────────────────
    transaction_amount: Optional[float]   = Field(None, ge=0)
    service_charge: Optional[float]       = Field(None, ge=0)
    excise_tax: Optional[float]           = Field(None, ge=0)
    vat: Optional[float]                  = Field(None, ge=0)
    penalty_fee: Optional[float]          = Field(None, ge=0)
    income_tax_fee: Optional[float]       = Field(None, ge=0)
    interest_fee: Optional[float]         = Field(None, ge=0)
    stamp_duty: Optional[float]           = Field(None, ge=0)
    discount_amount: Optional[float]      = Field(None, ge=0)
    total: Optional[float]                = Field(None, ge=0)

    error: Optional[str] = Field(None, description="Failure reason; present iff success is false")

    # Never serialized
    diagnostics: Optional[Dict[str, Any]] = Field(None, exclude=True)

    @model_validator(mode="after")
    def _error_iff_failure(self) -> "VerificationResult":
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("a failed result must carry a non-empty error")
        return self

    @classmethod
    def failure(cls, error: str, **fields: Any) -> "VerificationResult":
        return cls(success=False, error=error, **fields)

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dict: camelCase keys, ISO-8601 dates, None fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
