"""
Custom exceptions and error codes for the recipe ETL package.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for callers that opt into strict handling
- Error response schema for consistent reporting across a batch import

The parsing engine itself never raises for malformed text. These exceptions
are only raised when a caller asks for it (see ValidationResult.raise_for_errors
and transform_recipe(strict=True)).
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """
    Error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - RECIPE_*: Recipe record errors
    """

    # Recipe-related errors
    RECIPE_INVALID_DATA = "RECIPE_INVALID_DATA"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Structured error report for a rejected record."""
    error_code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = {"use_enum_values": True}


class RecipeEtlError(Exception):
    """
    Base exception for all recipe ETL errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse for batch reports."""
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            details=self.details if self.details else None,
        )


class InvalidRecipeError(RecipeEtlError):
    """Raised when a recipe record fails structural validation."""

    def __init__(self, errors: List[str], title: Optional[str] = None):
        self.errors = list(errors)
        details: Dict[str, Any] = {"errors": self.errors}
        if title:
            details["title"] = title
        label = f"Recipe '{title}'" if title else "Recipe"
        super().__init__(
            message=f"{label} is invalid: {'; '.join(self.errors)}",
            error_code=ErrorCode.RECIPE_INVALID_DATA,
            details=details,
        )
