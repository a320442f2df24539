"""
JSON envelopes shared by the API.

Success: ``{"success": true, "data": ...}``
Error:   ``{"success": false, "error": {"message", "code"?, "details"?}}``
"""

from typing import Any, Dict, Optional


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Build the error envelope.

    Args:
        message: Human-readable message
        code: Machine-readable code, e.g. "CHECKIN_NOT_FOUND"
        details: Extra context, omitted when None
    """
    error: Dict[str, Any] = {"message": message}
    if code:
        error["code"] = code
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}
