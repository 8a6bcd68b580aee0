"""
Counting and listing primes in [a, b].

Responsibility: range queries on top of the low set. The part of the range
at or below the largest cached prime is a slice of the low set; the part
above it is a segmented sieve using low-set primes up to isqrt(b).
Segments can be processed in parallel on a multiprocessing pool.
"""

import math
from multiprocessing import Pool
from typing import List, Optional, Tuple

import numpy as np

from .config import env_config
from .errors import OutOfRange
from .low_set import LowSetCache, resolve_cache
from .validation import check_safe, check_size


def _process_segment(args: Tuple[int, int, np.ndarray]) -> np.ndarray:
    """
    Process a single segment: return the primes in [start, end).

    base_primes must contain every prime <= isqrt(end - 1), and start must
    be greater than the largest of them.
    """
    start, end, base_primes = args
    size = end - start

    flags = np.ones(size, dtype=bool)

    for p in base_primes:
        p = int(p)
        if p * p >= end:
            break

        # First multiple of p in [start, end), never below p^2
        first = ((start + p - 1) // p) * p
        if first < p * p:
            first = p * p

        flags[first - start::p] = False

    return np.flatnonzero(flags).astype(np.int64) + start


def _plan_segments(start: int, end: int, segment_size: int) -> List[Tuple[int, int]]:
    return [(lo, min(lo + segment_size, end)) for lo in range(start, end, segment_size)]


def _sieve_above(start: int, end: int, base_primes: np.ndarray,
                 segment_size: int, num_workers: int) -> np.ndarray:
    segments = [(lo, hi, base_primes) for lo, hi in _plan_segments(start, end, segment_size)]

    if num_workers > 1 and len(segments) > 1:
        with Pool(num_workers) as pool:
            results = pool.map(_process_segment, segments)
    else:
        results = [_process_segment(segment) for segment in segments]

    return np.concatenate(results)


def list_primes(a: int, b: int, cache: Optional[LowSetCache] = None,
                num_workers: Optional[int] = None,
                segment_size: Optional[int] = None) -> np.ndarray:
    """
    Return the primes in the inclusive range [a, b].

    Parameters
    ----------
    a, b : int
        Range endpoints (safe integers). a > b gives an empty result.
    cache : LowSetCache, optional
        Cache to use; defaults to the process-wide cache.
    num_workers : int, optional
        Worker processes for the segments above the low set.
    segment_size : int, optional
        Integers per segment. Both default to the `ranges` section of the
        configuration (see primes_web.config).

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes.

    Raises
    ------
    NotReady
        If the low set has not finished building.
    OutOfRange
        If b exceeds the square of the largest cached prime.
    """
    a = check_safe(a)
    b = check_safe(b)
    if num_workers is None or segment_size is None:
        ranges_config = env_config()['ranges']
        if num_workers is None:
            num_workers = ranges_config['num_workers']
        if segment_size is None:
            segment_size = ranges_config['segment_size']
    segment_size = check_size(segment_size, 'segment_size')

    a = max(a, 2)
    if a > b:
        return np.array([], dtype=np.int64)

    low_set = resolve_cache(cache).low_set()
    primes = low_set.primes
    last = low_set.last
    if b > last * last:
        raise OutOfRange(f"{b} exceeds {last}^2, the largest value this low set certifies")

    parts = []
    if a <= last:
        lo = np.searchsorted(primes, a, side='left')
        hi = np.searchsorted(primes, min(b, last), side='right')
        parts.append(primes[lo:hi])

    if b > last:
        base = primes[:np.searchsorted(primes, math.isqrt(b), side='right')]
        parts.append(_sieve_above(max(a, last + 1), b + 1, base, segment_size, num_workers))

    return np.concatenate(parts)


def count_primes(a: int, b: int, cache: Optional[LowSetCache] = None,
                 num_workers: Optional[int] = None,
                 segment_size: Optional[int] = None) -> int:
    """Return how many primes lie in the inclusive range [a, b]."""
    return len(list_primes(a, b, cache=cache, num_workers=num_workers,
                           segment_size=segment_size))
