#!/usr/bin/env python3
"""
Build the low set and cross-check it against the reference algorithms.

Checks:
1. Low set is strictly ascending, starts 2, 3, 5, and last^2 >= max_range
2. Trial division, full sieve and low-set results agree on [0, limit]
3. count_primes agrees with the reference sieve on [0, limit] and on a
   window straddling the largest cached prime

Usage:
    python verify_low_set.py
    python verify_low_set.py --config config/default.yaml --limit 100000
"""

import argparse
import sys
import time

import numpy as np

from primes_web import (
    LowSetCache, NotReady, count_primes, default_cache, env_config, is_prime_low_set,
    is_prime_sieve, is_prime_trial_division, list_primes, load_config, setup_logging,
)
from primes_web.primes import prime_flags_upto, primes_upto


def verify_low_set_shape(cache: LowSetCache, max_range: int) -> bool:
    """Verify ordering, seeds and coverage of the low set."""
    print("\n=== Verifying low set shape ===")
    primes = cache.primes()
    last = cache.last()

    ok = True
    if not np.all(np.diff(primes) > 0):
        print("  ✗ low set is not strictly ascending")
        ok = False
    if list(primes[:3]) != [2, 3, 5]:
        print(f"  ✗ low set starts {list(primes[:3])}")
        ok = False
    if last * last < max_range:
        print(f"  ✗ last^2 = {last * last:,} < max_range = {max_range:,}")
        ok = False

    if ok:
        print(f"  ✓ {len(primes):,} primes, last = {last:,}, last^2 >= {max_range:,}")
    return ok


def verify_predicates(cache: LowSetCache, limit: int) -> bool:
    """Verify the three primality variants agree on [0, limit]."""
    print(f"\n=== Verifying predicates on [0, {limit:,}] ===")
    flags = prime_flags_upto(limit)

    errors = 0
    for n in range(limit + 1):
        expected = bool(flags[n])
        results = (
            is_prime_trial_division(n),
            is_prime_low_set(n, cache=cache),
        )
        if any(r != expected for r in results):
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at n={n}: sieve={expected}, "
                      f"trial={results[0]}, low_set={results[1]}")

    # the per-n sieve is O(n) memory per call; spot-check it
    for n in range(0, min(limit, 2000) + 1):
        if is_prime_sieve(n) != bool(flags[n]):
            errors += 1

    if errors == 0:
        print(f"  ✓ All {limit + 1:,} values agree")
    else:
        print(f"  ✗ {errors:,} mismatches found")
    return errors == 0


def verify_ranges(cache: LowSetCache, limit: int, num_workers: int, segment_size: int) -> bool:
    """Verify count_primes / list_primes against the reference sieve."""
    print("\n=== Verifying range queries ===")
    ok = True

    expected = len(primes_upto(limit))
    got = count_primes(0, limit, cache=cache, num_workers=num_workers, segment_size=segment_size)
    if got != expected:
        print(f"  ✗ count_primes(0, {limit:,}) = {got:,}, expected {expected:,}")
        ok = False
    else:
        print(f"  ✓ count_primes(0, {limit:,}) = {got:,}")

    last = cache.last()
    lo, hi = max(2, last - 1000), last + 1000
    listed = list_primes(lo, hi, cache=cache, num_workers=num_workers, segment_size=segment_size)
    checked = [n for n in range(lo, hi + 1) if is_prime_low_set(n, cache=cache)]
    if listed.tolist() != checked:
        print(f"  ✗ list_primes({lo:,}, {hi:,}) disagrees with is_prime")
        ok = False
    else:
        print(f"  ✓ list_primes({lo:,}, {hi:,}) matches is_prime ({len(checked)} primes)")

    return ok


def main():
    parser = argparse.ArgumentParser(description='Build and verify the primes_web low set')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    parser.add_argument('--limit', type=int, default=10000,
                        help='Cross-check all n in [0, limit] (default: 10000)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Seconds to wait for the low set (default: no limit)')
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(config['logging']['level'])

    max_range = config['low_set']['max_range']

    print("=" * 60)
    print("primes_web - low set verification")
    print("=" * 60)
    print(f"  max_range = {max_range:,}")
    print(f"  limit     = {args.limit:,}")

    t0 = time.time()
    # the package already started the default build at import; reuse it
    if max_range == env_config()['low_set']['max_range']:
        cache = default_cache()
    else:
        cache = LowSetCache.start(max_range)
    print(f"  ready immediately after start: {cache.ready()}")
    try:
        low_set = cache.wait(timeout=args.timeout)
    except NotReady as e:
        print(f"  Low set not available: {e}")
        return 1
    print(f"  Low set built in {time.time() - t0:.1f}s "
          f"({len(low_set):,} primes, {low_set.primes.nbytes / 1e6:.1f}MB)")

    results = [
        verify_low_set_shape(cache, max_range),
        verify_predicates(cache, args.limit),
        verify_ranges(cache, args.limit, config['ranges']['num_workers'],
                      config['ranges']['segment_size']),
    ]

    print()
    if all(results):
        print("All checks passed")
        return 0
    print("Some checks FAILED")
    return 1


if __name__ == '__main__':
    sys.exit(main())
