"""
API Models — Request and Response schemas
Using Pydantic for automatic validation and documentation

The verification response body is receipt_extractor.VerificationResult
itself (camelCase, absent fields omitted); only the request and the
auxiliary endpoints need their own models here.
"""

from typing import List

from pydantic import BaseModel, Field


class VerifyRequest(BaseModel):
    """Verify a receipt by its provider transaction reference."""
    reference: str = Field(..., min_length=1, max_length=64, description="Transaction reference, e.g. FT24015ABC12")

    model_config = {
        "json_schema_extra": {"example": {"reference": "FT24015ABC12"}}
    }


class ProvidersResponse(BaseModel):
    """Configured and supported receipt providers."""
    active: str          = Field(..., description="Provider used by this service")
    supported: List[str] = Field(..., description="All registered rulesets")


# ─── Health & Error Models ────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",           description="Health status")
    service: str = Field("receipt-verifier",  description="Service name")
    version: str = Field("1.0.0",             description="API version")


class ErrorResponse(BaseModel):
    """Body of a rejected request (raised as HTTPException)."""
    detail: str = Field(..., description="Why the request was rejected")

    model_config = {
        "json_schema_extra": {"example": {"detail": "Invalid file type: .png. Allowed: .htm, .html, .pdf"}}
    }
