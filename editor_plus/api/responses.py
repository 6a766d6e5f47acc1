"""Response envelope shared by every admin route."""
from typing import Any

from fastapi import HTTPException

from ..errors import AccessDenied, EditorError, NotFoundError, ValidationError

ERROR_CODES = {400: "validation", 403: "permission", 404: "not_found"}


def ok(result: Any = None, message: str = "") -> dict:
    return {"success": True, "result": result, "message": message, "error": None}


def fail(status: int, message: str) -> dict:
    return {"success": False, "result": None, "message": message, "error": ERROR_CODES.get(status, "error")}


def to_http(e: EditorError) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(400, e.message)
    if isinstance(e, NotFoundError):
        return HTTPException(404, e.message)
    if isinstance(e, AccessDenied):
        return HTTPException(403, e.message)
    return HTTPException(500, e.message)
