"""
HTTP mapping of the error hierarchy.

Every CustomBaseError becomes {"detail": message} with its own status code.
Database messages never reach the client: storage failures surface as
PersistenceError, whose message is fixed.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, PersistenceError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Storage hiccups are worth retrying from the client side
PERSISTENCE_RETRY_AFTER_SECONDS = '1'


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)

    if error.status_code >= 500:
        Logger.base.error(
            f'💥 [HTTP] {request.method} {request.url.path} -> {error.status_code} {error.message}'
        )
    else:
        Logger.base.info(
            f'↩️ [HTTP] {request.method} {request.url.path} -> {error.status_code} {error.message}'
        )

    headers = (
        {'Retry-After': PERSISTENCE_RETRY_AFTER_SECONDS}
        if isinstance(error, PersistenceError)
        else None
    )
    return JSONResponse(
        status_code=error.status_code, content={'detail': error.message}, headers=headers
    )


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed bodies are a 400 like any other ValidationError, not FastAPI's default 422
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': errors})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'💥 [HTTP] Unhandled error on {request.method} {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: domain_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
