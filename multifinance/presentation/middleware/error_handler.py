"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from multifinance.domain.exceptions import (
    CustomerAlreadyExistsException,
    CustomerNotFoundException,
    DeadlineExceededException,
    DomainException,
    DuplicateContractNumberException,
    InvalidRequestException,
    LimitAlreadyProvisionedException,
    LimitExceededException,
    LimitNotFoundException,
    StoreFailureException,
    TransactionNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Handlers are
    resolved by exception class hierarchy, so one handler covers every
    subclass of the class it is registered for.
    """

    @app.exception_handler(CustomerNotFoundException)
    @app.exception_handler(LimitNotFoundException)
    @app.exception_handler(TransactionNotFoundException)
    async def not_found_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle missing customer, limit and transaction errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(LimitExceededException)
    async def limit_exceeded_handler(
        request: Request,
        exc: LimitExceededException,
    ) -> JSONResponse:
        """Handle purchases larger than the remaining limit."""
        return _error_response(422, exc.code, exc.message)

    @app.exception_handler(CustomerAlreadyExistsException)
    @app.exception_handler(LimitAlreadyProvisionedException)
    async def conflict_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle attempts to create something that already exists."""
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(InvalidRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(StoreFailureException)
    async def store_failure_handler(
        request: Request,
        exc: StoreFailureException,
    ) -> JSONResponse:
        """Handle store failures; nothing was written."""
        logger.error(
            "store_failure",
            code=exc.code,
            message=exc.message,
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(DeadlineExceededException)
    async def deadline_exceeded_handler(
        request: Request,
        exc: DeadlineExceededException,
    ) -> JSONResponse:
        """Handle requests that ran past their deadline."""
        logger.error("deadline_exceeded", message=exc.message)
        return _error_response(
            504,
            exc.code,
            "The request took too long to process. Please try again.",
        )

    @app.exception_handler(DuplicateContractNumberException)
    async def duplicate_key_handler(
        request: Request,
        exc: DuplicateContractNumberException,
    ) -> JSONResponse:
        """Handle repeated contract number collisions."""
        logger.error("duplicate_contract_number", contract_number=exc.contract_number)
        return _error_response(500, exc.code, "An unexpected error occurred.")

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
