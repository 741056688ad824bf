"""API request and response models."""

from api.models.requests import ClaimBody
from api.models.responses import (
    HealthResponse,
    DistributionResponse,
    ProofResponse,
    ClaimStatusResponse,
    ClaimResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "ClaimBody",
    "HealthResponse",
    "DistributionResponse",
    "ProofResponse",
    "ClaimStatusResponse",
    "ClaimResponse",
    "ErrorDetail",
    "ErrorResponse",
]
