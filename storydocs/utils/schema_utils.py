"""
Utilities for working with Pydantic schemas.

Provides helpers to validate raw data against the manifest models and to turn
pydantic validation errors into short, LLM-readable messages.
"""

from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> List[str]:
    """
    Format a pydantic ValidationError as a list of messages.

    Each message has the form ``field.path: error message``.
    """
    messages = []
    for item in error.errors():
        loc = '.'.join(str(part) for part in item['loc'])
        msg = item['msg']
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


def validate_with_pydantic(
    data: Any,
    model: Type[ModelT]
) -> Tuple[Optional[ModelT], Optional[List[str]]]:
    """
    Validate data using Pydantic model directly.

    Args:
        data: Decoded JSON data to validate
        model: Pydantic model class to validate against

    Returns:
        Tuple of (instance, errors). Exactly one of them is None.
    """
    try:
        return model.model_validate(data), None
    except ValidationError as e:
        return None, format_validation_errors(e)
