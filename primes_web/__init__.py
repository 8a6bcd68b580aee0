"""
primes_web: primality, prime counting and prime listing over the safe integer domain.

The low set (all primes up to isqrt(2**53 - 1)) is built once in the
background; is_prime, count_primes and list_primes use it and raise
NotReady until it is available. The trial-division and sieve variants
need no precomputation.
"""

__version__ = "0.1.0"

from .config import env_config, load_config
from .errors import InvalidArgument, NotReady, OutOfRange, PrimesError
from .low_set import (
    LowSet, LowSetCache, autostart, build_low_set, default_cache,
    low_set_last, low_set_primes, low_set_ready,
)
from .oracle import (
    PRIMALITY_TESTS, is_prime, is_prime_low_set, is_prime_sieve, is_prime_trial_division,
)
from .ranges import count_primes, list_primes
from .segmented_sieve import sieve
from .utils import setup_logging
from .validation import MAX_SAFE_INTEGER
from .wheel_bitset import WheelBitSet

__all__ = [
    'MAX_SAFE_INTEGER', 'PRIMALITY_TESTS',
    'PrimesError', 'InvalidArgument', 'NotReady', 'OutOfRange',
    'WheelBitSet', 'sieve',
    'LowSet', 'LowSetCache', 'autostart', 'build_low_set', 'default_cache',
    'low_set_ready', 'low_set_primes', 'low_set_last',
    'is_prime', 'is_prime_low_set', 'is_prime_trial_division', 'is_prime_sieve',
    'count_primes', 'list_primes',
    'load_config', 'env_config', 'setup_logging',
]

autostart()
