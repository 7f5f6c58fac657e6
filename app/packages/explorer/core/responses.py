"""Response helpers: build the `{success, data, message, error}` envelope."""

from typing import Any, Optional


def create_response(message: str, data: Any = None) -> dict[str, Any]:
    """Successful envelope carrying ``data``."""
    return {"success": True, "data": data, "message": message}


def create_error_response(error: str, status: int, data: Optional[Any] = None) -> dict[str, Any]:
    """Failure envelope; ``status`` mirrors the HTTP status code."""
    payload: dict[str, Any] = {"success": False, "error": error, "status": status}
    if data is not None:
        payload["data"] = data
    return payload
