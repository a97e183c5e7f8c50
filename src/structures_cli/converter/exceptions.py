"""
Custom exceptions for the type conversion engine.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class ConversionError(Exception):
    """Raised for any failure during a recursive conversion.

    ``path`` holds the rendered values that were being converted when the
    failure happened, outermost first. It is filled in by the conversion
    context the first time the error is observed.
    """
    def __init__(self, message: str, path: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.path: List[str] = list(path) if path else []

class UnsupportedTypeError(ConversionError):
    """Raised when no type converter in the active strategy supports a value."""
    def __init__(self, value_description: str, strategy_name: str, value: Any = None):
        message = (
            f"No TypeConverter can be found for {value_description}\n"
            f"When using strategy {strategy_name}"
        )
        super().__init__(message)
        self.value = value
        self.value_description = value_description
        self.strategy_name = strategy_name


class BatchItemError(BaseModel):
    """A top-level conversion failure recorded by a batch driver.

    The failure has already been logged by the conversion context, so the
    batch driver keeps it here and moves on to the next declaration.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    declaration_name: str
    error: ConversionError

    @property
    def message(self) -> str:
        return self.error.message
