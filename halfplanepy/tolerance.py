"""Tolerance configuration for tolerance-aware comparisons.

Two floats a, b are considered equal when

    |a - b| <= atol + rtol * max(|a|, |b|)

The tolerance is an immutable value carried by every complex number, Mobius
transformation and UHP point, and accepted as the ``tol`` keyword by the free
functions. There is no global, mutable tolerance.
"""

import math
from dataclasses import dataclass

from .errors import InvalidValueError
from ._utils import is_positive_number


DEFAULT_RTOL = 1e-5
DEFAULT_ATOL = 1e-8


@dataclass(frozen=True)
class Tolerance:
    """Relative and absolute tolerance pair.

    Args:
        rtol: float, relative tolerance (default: 1e-5)
        atol: float, absolute tolerance (default: 1e-8)

    Raises:
        InvalidValueError: if either tolerance is not a positive finite number.
    """
    rtol: float = DEFAULT_RTOL
    atol: float = DEFAULT_ATOL

    def __post_init__(self):
        if not is_positive_number(self.rtol) or not math.isfinite(self.rtol):
            raise InvalidValueError(f"rtol must be a positive number, got {self.rtol}")
        if not is_positive_number(self.atol) or not math.isfinite(self.atol):
            raise InvalidValueError(f"atol must be a positive number, got {self.atol}")

    def isclose(self, a: float, b: float) -> bool:
        """Return True if a and b agree within this tolerance.

        Infinite values are only close to an identical infinite value.
        """
        if math.isinf(a) or math.isinf(b):
            return a == b
        return abs(a - b) <= self.atol + self.rtol * max(abs(a), abs(b))

    def is_zero(self, x: float) -> bool:
        return self.isclose(x, 0.0)


DEFAULT_TOLERANCE = Tolerance()
