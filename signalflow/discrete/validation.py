"""Integer input checks shared by the calculators."""

from __future__ import annotations

from signalflow.errors import InputValidationError


def require_int(name: str, value, minimum: int | None = None, maximum: int | None = None) -> int:
    """Return ``value`` if it is an int within the inclusive bounds.

    Raises:
        InputValidationError: For non-integers (bool included) or out-of-range values
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputValidationError(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise InputValidationError(f"{name} must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise InputValidationError(f"{name} must be <= {maximum}, got {value}")
    return value
