"""
Reference primality algorithms.

Responsibility: the two slow, independent methods (trial division and a
plain byte-per-integer sieve). They need no precomputation, so they are
always available and are used to cross-check the low-set method.
"""

import math

import numpy as np

from .errors import OutOfRange
from .validation import check_safe

# is_prime_sieve allocates n + 1 bytes; above this it refuses.
SIEVE_LIMIT = 2**32


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Plain Sieve of Eratosthenes, one byte per integer. This is the
    cross-check for the wheel sieve and the backing of is_prime_sieve.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1 (empty for N < 0).
    """
    if N < 0:
        return np.zeros(0, dtype=bool)
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, math.isqrt(N) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N, read off prime_flags_upto.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Array of primes.
    """
    flags = prime_flags_upto(N)
    return np.nonzero(flags)[0]


def is_prime_trial_division(n: int) -> bool:
    """
    Test n by dividing by 2 and every odd number up to isqrt(n).

    Raises InvalidArgument / OutOfRange outside the safe integer domain.
    """
    n = check_safe(n)
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for d in range(3, math.isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def is_prime_sieve(n: int, limit: int = SIEVE_LIMIT) -> bool:
    """
    Test n by sieving every integer up to n.

    Memory is one byte per integer, so n is capped at limit (default
    2**32, about 4GB); larger n raise OutOfRange. Use trial division or
    the low set above that.
    """
    n = check_safe(n)
    if n > limit:
        raise OutOfRange(f"{n} exceeds the sieve limit {limit}")
    if n < 2:
        return False
    return bool(prime_flags_upto(n)[n])
