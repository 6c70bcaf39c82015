"""
Custom Exception Hierarchy

Provides specific exception types for the risk calculator with structured
error information that the API layer can return as-is.
"""
from typing import Optional, Dict, Any


class ProprError(Exception):
    """Base exception for all recurrence-risk calculator errors."""
    
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class InvalidInputError(ProprError):
    """A patient feature value is missing, non-numeric or non-finite."""
    
    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            details={"field": field, **(details or {})}
        )
        self.field = field


class InvalidParameterError(ProprError):
    """The configured model parameters cannot be used for scoring."""
    
    def __init__(
        self,
        message: str,
        parameter: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_PARAMETER",
            details={"parameter": parameter, **(details or {})}
        )
        self.parameter = parameter
