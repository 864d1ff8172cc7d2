"""Exception handlers that turn failures into ``{success: false, message}``."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tablematch.errors import MESSAGES, AccountError, ErrorCode, PersistenceError

logger = logging.getLogger(__name__)


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    return failure_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Malformed request to {request.url.path}: {exc.errors()}")
    return failure_response(status.HTTP_400_BAD_REQUEST, MESSAGES[ErrorCode.INVALID_REQUEST])


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(f"User store unavailable for {request.url.path}: {exc}")
    return failure_response(status.HTTP_503_SERVICE_UNAVAILABLE, MESSAGES[ErrorCode.STORE_UNAVAILABLE])


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
