"""
Exception handlers that render every failure in the response envelope.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tool_directory.core.responses import error_body

logger = logging.getLogger(__name__)


def flatten_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Group pydantic errors by field name. Errors that are not tied to a
    field (e.g. a malformed body) go to ``form_errors``.
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}
    for error in errors:
        # loc looks like ("body", "name") or ("query", "page")
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        if loc:
            field_errors.setdefault(".".join(loc), []).append(message)
        else:
            form_errors.append(message)
    return {"form_errors": form_errors, "field_errors": field_errors}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid input", details=flatten_validation_errors(exc.errors())),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[Errors] Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
