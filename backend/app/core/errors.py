"""Exception handlers: validation -> 400, unique/foreign key violations -> 409, anything else -> 500."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError


logger = logging.getLogger("kupipodaridai.errors")

CONFLICT_MESSAGE = "Запись с такими данными уже существует"


def _format_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    if not location:
        return message
    return f"{'.'.join(location)}: {message}"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_validation_error(error) for error in exc.errors()]
    logger.info(
        "Validation failed method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        messages,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": messages})


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(
        "Integrity error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc.orig,
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": CONFLICT_MESSAGE})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
