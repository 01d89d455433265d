"""
Error taxonomy of the gradebook engine.

An undefined aggregate (zero denominator) is NOT an exception: engine functions return
`None` for it and every caller decides visibly how to render or fold it
(see `format_percentage`).
"""

from typing import Optional


class GradebookError(Exception):
    """Base class for errors raised by the gradebook engine and its store boundary."""

    code = "GRADEBOOK_ERROR"


class InvalidWeightConfiguration(GradebookError):
    """Class weight settings are missing, out of range, or do not sum to 100."""

    code = "INVALID_WEIGHT_CONFIGURATION"

    def __init__(self, message: str, class_id: Optional[int] = None, total: Optional[float] = None):
        super().__init__(message)
        self.class_id = class_id
        self.total = total


class DataFetchError(GradebookError):
    """The record store failed; raised at the store boundary and never retried."""

    code = "DATA_FETCH_ERROR"


class RecordNotFound(GradebookError):
    code = "NOT_FOUND"


def format_percentage(value: Optional[float], decimals: int = 2, undefined: str = "—") -> str:
    """Render a percentage for display; an undefined aggregate becomes `undefined`, never "0.00"."""
    if value is None:
        return undefined
    return f"{value:.{decimals}f}"


def round_percentage(value: Optional[float], decimals: int = 2) -> Optional[float]:
    return None if value is None else round(value, decimals)
