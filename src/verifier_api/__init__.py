"""
API Package
Contains FastAPI routes and models
"""

from verifier_api.routes import router, get_verifier
from verifier_api.models import (
    VerifyRequest,
    ProvidersResponse,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    'router',
    'get_verifier',
    'VerifyRequest',
    'ProvidersResponse',
    'HealthResponse',
    'ErrorResponse'
]
