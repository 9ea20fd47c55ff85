"""Error handling middleware and exception handlers."""

from typing import Dict, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from aura_lending.domain.exceptions import (
    AlreadyCompletedException,
    CDPAPIException,
    CDPAPITimeoutException,
    ConcurrentModificationException,
    CustomerNotFoundException,
    DomainException,
    ExceedsRiskTierLimitException,
    InsufficientCreditScoreException,
    InvalidAmountException,
    InvalidOriginationRequestException,
    MissingCreditScoreException,
    ObligationNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

STATUS_CODES: Dict[Type[DomainException], int] = {
    MissingCreditScoreException: 404,
    ObligationNotFoundException: 404,
    CustomerNotFoundException: 404,
    InvalidAmountException: 400,
    InvalidOriginationRequestException: 400,
    InsufficientCreditScoreException: 422,
    ExceedsRiskTierLimitException: 422,
    AlreadyCompletedException: 409,
    ConcurrentModificationException: 409,
}


def _error_response(status_code: int, exc: DomainException, message: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": message or exc.message,
            "details": exc.details or None,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(CDPAPITimeoutException)
    async def cdp_timeout_handler(
        request: Request,
        exc: CDPAPITimeoutException,
    ) -> JSONResponse:
        """Handle CDP analytics timeout errors."""
        logger.error(
            "cdp_api_timeout",
            request_id=get_request_id(),
        )
        return _error_response(
            503, exc, "Service temporarily unavailable. Please try again."
        )

    @app.exception_handler(CDPAPIException)
    async def cdp_error_handler(
        request: Request,
        exc: CDPAPIException,
    ) -> JSONResponse:
        """Handle CDP analytics errors."""
        logger.error(
            "cdp_api_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503, exc, "Unable to process request. Please try again later."
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle business rule rejections."""
        status_code = next(
            (code for cls, code in STATUS_CODES.items() if isinstance(exc, cls)),
            400,
        )
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=status_code,
        )
        return _error_response(status_code, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "details": None,
                "request_id": get_request_id(),
            },
        )
