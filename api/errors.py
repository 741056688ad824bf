"""
API Error Handling

Standardized error handling for the API.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import DistributorException, ErrorCodes


logger = logging.getLogger(__name__)


# HTTP status for each distributor error code
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.INVALID_PROOF: 400,
    ErrorCodes.INDEX_OUT_OF_RANGE: 404,
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.TRANSFER_FAILED: 502,
    ErrorCodes.EMPTY_TREE: 503,
    ErrorCodes.ROOT_MISMATCH: 503,
    ErrorCodes.ALLOCATION_INVALID: 503,
    ErrorCodes.DUPLICATE_ACCOUNT: 503,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class NotConfiguredError(APIError):
    """No distribution is loaded on this server."""

    def __init__(self, message: str = "No distribution configured"):
        super().__init__(
            code="NOT_CONFIGURED",
            message=message,
            status_code=503,
        )



async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def distributor_error_handler(request: Request, exc: DistributorException) -> JSONResponse:
    """Map distributor exceptions onto HTTP status codes by error code."""
    status_code = STATUS_BY_CODE.get(exc.code, 500)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
