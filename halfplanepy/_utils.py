"""Internal utilities for halfplanepy."""

import numbers


def is_positive_number(x):
    """Return True for a real number strictly greater than zero (NaN is not)."""
    return isinstance(x, numbers.Real) and not isinstance(x, bool) and x > 0


def is_real_number(x):
    """Return True for int/float-like values, excluding bool."""
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def clamp(x, lo=-1.0, hi=1.0):
    """Clamp x to [lo, hi]; used before acos/asin to absorb round-off."""
    return max(lo, min(hi, x))

