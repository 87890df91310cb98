import logging
from typing import Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("dataset_service.api.errors")

def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})

def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    message = str(first.get("msg", "Invalid request."))
    # field_validator failures arrive as "Value error, <our message>"
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {message}" if location else message

def integrity_error(exc: IntegrityError) -> Tuple[int, str]:
    text = str(exc.orig).lower()
    if "unique" in text or "duplicate" in text:
        return status.HTTP_409_CONFLICT, "Record already exists."
    if "foreign key" in text:
        return status.HTTP_400_BAD_REQUEST, "Invalid reference to a related record."
    # NOT NULL, CHECK and other constraint failures
    return status.HTTP_400_BAD_REQUEST, "Record violates a data constraint."

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(validation_message(exc), status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        status_code, message = integrity_error(exc)
        logger.warning(f"Constraint violation on {request.url.path}: {exc.orig}")
        return error_response(message, status_code)

    @app.exception_handler(StaleDataError)
    async def not_found_exception_handler(request: Request, exc: StaleDataError):
        return error_response("Record not found or already deleted.", status.HTTP_404_NOT_FOUND)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return error_response("An unexpected error occurred.", status.HTTP_500_INTERNAL_SERVER_ERROR)
