"""Record Validation — pure checks for monthly record write payloads.

Invariants:
    - username must be non-empty after trimming
    - mobile must be exactly 10 ASCII digits after trimming
    - Month values: None means "not provided"; numbers and numeric strings
      become float; booleans, NaN, infinity and anything else are rejected
    - Every check raises InvalidFieldError with the user-facing message

Design Decisions:
    - Pure functions with no Pydantic import: schemas/ wraps them into field
      validators, tests call them directly
"""

import math
import re

USERNAME_REQUIRED = "Username is required"
MOBILE_INVALID = "Please enter a valid 10-digit mobile number"

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")


class InvalidFieldError(ValueError):
    """A single field failed a validation rule."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def check_username(value: object) -> str:
    """Return the trimmed username or raise if missing/empty."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidFieldError("username_required", USERNAME_REQUIRED)
    return value.strip()


def check_mobile(value: object) -> str:
    """Return the trimmed mobile or raise unless it is exactly 10 digits."""
    if not isinstance(value, str):
        raise InvalidFieldError("mobile_invalid", MOBILE_INVALID)
    mobile = value.strip()
    if not MOBILE_PATTERN.match(mobile):
        raise InvalidFieldError("mobile_invalid", MOBILE_INVALID)
    return mobile


def coerce_month_value(month: str, value: object) -> float | None:
    """Coerce a month value to float, keeping None as "not provided"."""
    if value is None:
        return None
    # bool is an int subclass; true/false are not amounts
    if isinstance(value, bool):
        raise InvalidFieldError("month_not_number", f"{month} must be a number")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidFieldError(
                "month_not_number", f"{month} must be a number",
            ) from None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise InvalidFieldError(
                "month_not_number", f"{month} must be a number",
            ) from None
    else:
        raise InvalidFieldError("month_not_number", f"{month} must be a number")
    if not math.isfinite(number):
        raise InvalidFieldError("month_not_number", f"{month} must be a number")
    return number
