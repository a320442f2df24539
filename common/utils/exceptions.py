"""
HTTP exceptions carrying a machine-readable error code.

Raised from services and pipelines; api.py renders them with
``error_response``.

Example:
    raise NotFoundException("Check-in not found", code="CHECKIN_NOT_FOUND")
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException


class APIException(HTTPException):
    """HTTPException whose detail is ``{"message", "code"?, "details"?}``."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        detail: Dict[str, Any] = {"message": message}
        if code:
            detail["code"] = code
        if details is not None:
            detail["details"] = details
        super().__init__(status_code=status_code, detail=detail)

    @property
    def message(self) -> str:
        return self.detail["message"]

    @property
    def code(self) -> Optional[str]:
        return self.detail.get("code")

    @property
    def details(self) -> Optional[Any]:
        return self.detail.get("details")

    def __str__(self) -> str:
        return self.message


class BadRequestException(APIException):
    """400 - malformed input such as an unparseable ID."""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST", details: Any = None):
        super().__init__(400, message, code, details)


class NotFoundException(APIException):
    """404 - the referenced record does not exist."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND", details: Any = None):
        super().__init__(404, message, code, details)


class ValidationException(APIException):
    """422 - well-formed request with invalid content."""

    def __init__(self, message: str = "Validation error", code: str = "VALIDATION_ERROR", details: Any = None):
        super().__init__(422, message, code, details)
