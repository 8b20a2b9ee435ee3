"""
API Routes - receipt verification endpoints
"""

from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from loguru import logger

from receipt_extractor import VerificationResult, supported_providers
from receipt_verifier import ReceiptVerifier
from verifier_api.models import ErrorResponse, ProvidersResponse, VerifyRequest

# Create router
router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    422: {"model": VerificationResult, "description": "Receipt could not be verified"},
}


@lru_cache(maxsize=1)
def get_verifier() -> ReceiptVerifier:
    """Shared verifier; stateless apart from its immutable config and ruleset."""
    return ReceiptVerifier()


# ==================== UTILITY FUNCTIONS ====================

def validate_upload(file: UploadFile, verifier: ReceiptVerifier):
    """Validate uploaded receipt file name"""
    if not file.filename:
        raise HTTPException(400, detail="No filename provided")

    allowed = {e.lower() for e in verifier.config['upload']['allowed_extensions']}
    ext = Path(file.filename).suffix.lower()
    if ext not in allowed:
        raise HTTPException(
            400,
            detail=f"Invalid file type: {ext}. Allowed: {', '.join(sorted(allowed))}"
        )


def to_response(result: VerificationResult) -> JSONResponse:
    return JSONResponse(
        status_code=200 if result.success else 422,
        content=result.to_response(),
    )


# ==================== API ENDPOINTS ====================

@router.post(
    "/verify/dashen",
    response_model=VerificationResult,
    responses=_ERROR_RESPONSES,
    tags=["Verification"],
)
def verify_by_reference(
    request: VerifyRequest,
    verifier: ReceiptVerifier = Depends(get_verifier),
):
    """
    **Verify a Dashen transaction by reference**

    Fetches the provider receipt and extracts sender, receiver,
    references, date, amount and fees.

    **Returns:**
    - 200 with `success: true` when reference and amount were extracted
    - 422 with `success: false` and an `error` otherwise

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/verify/dashen \\
      -H "Content-Type: application/json" \\
      -d '{"reference": "FT24015ABC12"}'
    ```
    """
    try:
        logger.info(f"Verifying reference: {request.reference}")
        return to_response(verifier.verify(request.reference))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error verifying {request.reference}: {e}")
        raise HTTPException(500, str(e))


@router.post(
    "/verify/dashen/document",
    response_model=VerificationResult,
    responses=_ERROR_RESPONSES,
    tags=["Verification"],
)
def verify_uploaded_document(
    file: UploadFile = File(..., description="Receipt PDF or HTML"),
    verifier: ReceiptVerifier = Depends(get_verifier),
):
    """
    **Verify an already downloaded receipt document**

    Same contract as `/verify/dashen`, without the fetch step.

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/verify/dashen/document \\
      -F "file=@receipt.pdf"
    ```
    """
    validate_upload(file, verifier)

    max_bytes = int(verifier.config['upload']['max_file_size_mb']) * 1024 * 1024
    content = file.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(400, detail=f"File too large (max {max_bytes // (1024 * 1024)} MB)")

    try:
        logger.info(f"Verifying uploaded document: {file.filename} ({len(content)} bytes)")
        return to_response(verifier.verify_document(content, file.content_type))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error verifying {file.filename}: {e}")
        raise HTTPException(500, str(e))


@router.get("/providers", response_model=ProvidersResponse, tags=["Verification"])
def list_providers(verifier: ReceiptVerifier = Depends(get_verifier)):
    """Provider this service verifies against, and all registered rulesets."""
    return ProvidersResponse(active=verifier.provider, supported=supported_providers())
