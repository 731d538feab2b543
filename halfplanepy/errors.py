"""Exceptions raised by halfplanepy.

All failures are local and synchronous: they are raised where the bad input
or degenerate configuration is detected and propagate to the caller.
"""


class HalfPlaneError(Exception):
    """Base exception for halfplanepy errors."""
    pass


class InvalidValueError(HalfPlaneError, ValueError):
    """Malformed complex value, UHP point, tolerance or numeric argument."""
    pass


class DivisionByZeroError(HalfPlaneError, ZeroDivisionError):
    """Inverse or quotient of a value that is tolerance-equal to zero."""
    pass


class NonInvertibleError(HalfPlaneError, ArithmeticError):
    """Mobius transformation with a determinant tolerance-equal to zero."""
    pass


class DegenerateInputError(HalfPlaneError, ValueError):
    """Coincident points where distinct points are required."""
    pass


class InternalInconsistencyError(HalfPlaneError, RuntimeError):
    """A closed-form result failed its own postcondition.

    Signals a tolerance or formula mismatch rather than bad caller input.
    """
    pass
