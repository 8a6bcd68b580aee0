"""
Primality predicate.

Three named variants with the same signature:

- is_prime_trial_division: odd divisors up to isqrt(n), no precomputation
- is_prime_sieve:          plain sieve up to n, no precomputation
- is_prime_low_set:        binary search / trial division against the low set

is_prime is the low-set variant. It never falls back to the slow methods;
callers that cannot wait for the low set pick a reference variant explicitly.
"""

import math
from typing import Optional

import numpy as np

from .errors import OutOfRange
from .low_set import LowSetCache, resolve_cache
from .primes import is_prime_sieve, is_prime_trial_division
from .validation import check_safe

# Divisors tried per vectorized step; most composites fall in the first chunk.
DIVISION_CHUNK = 4096


def is_prime_low_set(n: int, cache: Optional[LowSetCache] = None) -> bool:
    """
    Test n against the low set.

    Parameters
    ----------
    n : int
        Any safe integer. Negative values, 0 and 1 are not prime.
    cache : LowSetCache, optional
        Cache to use; defaults to the process-wide cache.

    Returns
    -------
    bool
        True iff n is prime.

    Raises
    ------
    InvalidArgument
        If n is not a safe integer.
    NotReady
        If the low set has not finished building.
    OutOfRange
        If n exceeds MAX_SAFE_INTEGER or the square of the largest cached prime.
    """
    n = check_safe(n)
    if n < 2:
        return False
    if n % 2 == 0 and n != 2:
        return False

    low_set = resolve_cache(cache).low_set()
    primes = low_set.primes
    last = low_set.last

    if n <= last:
        idx = np.searchsorted(primes, n)
        return bool(idx < len(primes) and primes[idx] == n)

    if n > last * last:
        raise OutOfRange(f"{n} exceeds {last}^2, the largest value this low set certifies")

    # odd n: skip 2, stop at isqrt(n) <= last
    stop = int(np.searchsorted(primes, math.isqrt(n), side='right'))
    for start in range(1, stop, DIVISION_CHUNK):
        divisors = primes[start:min(start + DIVISION_CHUNK, stop)]
        if np.any(n % divisors == 0):
            return False
    return True


is_prime = is_prime_low_set

PRIMALITY_TESTS = {
    'trial_division': is_prime_trial_division,
    'sieve': is_prime_sieve,
    'low_set': is_prime_low_set,
}
