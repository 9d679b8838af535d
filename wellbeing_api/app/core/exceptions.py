"""
Domain exceptions for the Wellbeing API.

Services raise these instead of returning sentinel values.  Each class
fixes the HTTP status it maps to, so endpoints can let them propagate
and the handler registered in ``main.create_app`` renders them as
``{"error": <detail>}``.
"""

from typing import Dict, Optional

from fastapi import HTTPException, status


class WellbeingAPIException(HTTPException):
    """Base exception for the Wellbeing API."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, str]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(WellbeingAPIException):
    """Missing or invalid input."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR",
        )


class AuthError(WellbeingAPIException):
    """Credential mismatch."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="AUTHENTICATION_FAILED",
        )


class NotFoundError(WellbeingAPIException):
    """A referenced entity does not exist."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND",
        )


class ConflictError(WellbeingAPIException):
    """A uniqueness rule was violated."""

    def __init__(self, detail: str = "Duplicate entry"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT",
        )


class StoreError(WellbeingAPIException):
    """Any other store failure.  The store's message is passed through."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="STORE_ERROR",
        )
