"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_document,
    validate_submission,
    ValidationError,
)

__all__ = [
    "validate_document",
    "validate_submission",
    "ValidationError",
]
