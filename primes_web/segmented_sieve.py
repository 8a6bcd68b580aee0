"""
Sieve of Eratosthenes over the mod-30 wheel.

Responsibility: list the primes up to a bound. Scratch space is a
WheelBitSet owned by the call and dropped when it returns.
"""

import math

import numpy as np

from .validation import check_safe
from .wheel_bitset import WheelBitSet

SEED_PRIMES = (2, 3, 5)


def sieve(bound: int) -> np.ndarray:
    """
    Return all primes <= bound.

    2, 3 and 5 are seeded directly. Odd candidates up to isqrt(bound) are
    tested in order; each prime found has its odd multiples marked in the
    bit set. Whatever is still unmarked above isqrt(bound) is prime.

    Parameters
    ----------
    bound : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes.
    """
    bound = check_safe(bound)
    if bound < 2:
        return np.array([], dtype=np.int64)

    primes = [p for p in SEED_PRIMES if p <= bound]
    if bound < 7:
        return np.array(primes, dtype=np.int64)

    bits = WheelBitSet(bound)

    # One integer root for both loops, so perfect squares are not skipped
    root = math.isqrt(bound)
    for candidate in range(7, root + 1, 2):
        if bits.get_unchecked(candidate) == 0:
            primes.append(candidate)
            bits.mark_multiples(candidate)

    rest = bits.candidates(start=root + 1)
    return np.concatenate([np.array(primes, dtype=np.int64), rest])
