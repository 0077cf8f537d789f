"""Domain exceptions hierarchy for consistent error handling."""

from typing import Any, Optional, Dict
from fastapi import HTTPException


class DomainException(Exception):
    """Base domain exception."""
    http_status: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize domain exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainException):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def to_http_exception(self) -> HTTPException:
        """Convert to HTTP exception for API layer."""
        return HTTPException(
            status_code=self.http_status,
            detail={
                "error": self.error_code,
                "message": self.message,
                "details": self.details
            }
        )


class InvalidInputException(DomainException):
    """Raised when an upload cannot be accepted or stored."""
    http_status = 400
    error_code = "INVALID_INPUT"

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        column: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize invalid input exception.

        Args:
            message: Human readable reason
            row: 1-based data row the problem was found on
            column: Column the problem was found in
            details: Additional details
        """
        super().__init__(message, details)
        self.row = row
        self.column = column

        if row is not None and 'row' not in self.details:
            self.details['row'] = row
        if column is not None and 'column' not in self.details:
            self.details['column'] = column


class EntityNotFoundException(DomainException):
    """Entity not found exception."""
    http_status = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any, details: Optional[Dict[str, Any]] = None):
        """
        Initialize entity not found exception.

        Args:
            entity_type: Type of entity (e.g., "Datasource")
            entity_id: ID of the entity
            details: Additional details
        """
        super().__init__(f"{entity_type} {entity_id} not found", details)
        self.entity_type = entity_type
        self.entity_id = entity_id
