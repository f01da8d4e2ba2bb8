"""
Unit conversion for raw form input.

Every dimension arrives as whatever the user typed. Parsing never fails:
anything that does not start with a number reads as 0, so a half-typed
field still prices (as zero) instead of interrupting the quote.
"""

import math
import re

# Leading numeric portion: optional sign, digits with optional fraction, optional exponent.
# Trailing junk is ignored ("12cm" -> 12.0). ASCII digits only.
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def finite(number: float) -> float:
    """`number` unchanged, or 0.0 when it is inf or nan."""
    if not math.isfinite(number):
        return 0.0
    return number


def to_number(value) -> float:
    """Parse the leading number of a text value. Returns 0.0 when nothing parses.

    Negative input is kept as a negative number; it is not clamped.
    Non-finite results (e.g. "1e999") read as 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return finite(float(value))
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return 0.0
    return finite(float(match.group(1)))


def cm2_to_m2(length_cm: float, width_cm: float) -> float:
    """Square centimeters of a length x width rectangle, as square meters."""
    return finite((length_cm * width_cm) / 10000)


def cm_to_m(cm: float) -> float:
    return finite(cm / 100)
