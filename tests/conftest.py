"""Shared fixtures: low-set caches small enough to build per test session."""

import pytest

from primes_web.low_set import LowSetCache

# isqrt(10**8) = 10000; the low set ends 9973, 10007
SMALL_MAX_RANGE = 10**8


@pytest.fixture(scope='session')
def small_cache():
    return LowSetCache.build(SMALL_MAX_RANGE)


@pytest.fixture(scope='session')
def full_cache():
    """Low set for the whole safe integer domain (about 5.4M primes)."""
    return LowSetCache.build()
