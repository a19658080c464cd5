from typing import Any, Optional

from fastapi.encoders import jsonable_encoder


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Build the ``{success, data?, message?}`` envelope for a successful call."""
    body = {"success": True}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if message is not None:
        body["message"] = message
    return body


def error_body(error: str, details: Any = None, message: Optional[str] = None) -> dict:
    body = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body
