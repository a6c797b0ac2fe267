# school_ledger/core/exceptions.py
"""Custom exceptions for the school ledger application."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class LedgerException(HTTPException):
    """Base exception for the ledger application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(LedgerException):
    """Exception raised when a referenced record does not exist."""
    def __init__(self, resource: str, id: Any = None):
        message = f"{resource} not found"
        if id is not None:
            message += f" with id: {id}"
        super().__init__(status_code=404, detail=message)


class ConflictError(LedgerException):
    """Exception raised when a write conflicts with the current ledger state."""
    def __init__(self, error: str, message: str):
        super().__init__(
            status_code=409,
            detail={
                "error": error,
                "message": message
            }
        )


class DuplicateRecordError(ConflictError):
    """Exception raised when a record would violate a uniqueness rule."""
    def __init__(self, resource: str, message: str):
        super().__init__(f"Duplicate {resource}", message)


class ValidationError(LedgerException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        detail = {"error": "Validation Error", "message": message}
        if field:
            detail["field"] = field
        super().__init__(status_code=422, detail=detail)


class DatabaseError(LedgerException):
    """Exception raised for database errors."""
    def __init__(self, message: str):
        super().__init__(
            status_code=500,
            detail={
                "error": "Database Error",
                "message": message
            }
        )


class AuthenticationError(LedgerException):
    """Exception raised when the caller identity cannot be resolved."""
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            status_code=401,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"}
        )
