"""
Exception types raised by primes_web.

Responsibility: error kinds only. Every public function raises one of these
(or lets a caller's own exception propagate); nothing is retried internally.
"""


class PrimesError(Exception):
    """Base class for all primes_web errors."""


class InvalidArgument(PrimesError, ValueError):
    """Input is not an integer in the safe integer domain, or a size is not positive."""


class NotReady(PrimesError, RuntimeError):
    """The low set has not finished building (or its build failed)."""


class OutOfRange(PrimesError, ValueError):
    """Input exceeds the largest value the chosen method can certify."""
