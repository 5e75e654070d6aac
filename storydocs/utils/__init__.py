"""
Utility functions for storydocs.
"""

from .schema_utils import (
    format_validation_errors,
    validate_with_pydantic
)

__all__ = [
    'format_validation_errors',
    'validate_with_pydantic'
]
