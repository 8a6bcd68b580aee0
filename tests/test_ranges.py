"""
Tests for count_primes / list_primes.

Ranges are split at the largest cached prime: below it the low set is
sliced, above it a segmented sieve runs. Both sides, and ranges that
straddle the split, are checked against the reference sieve.
"""

from concurrent.futures import Future

import numpy as np
import pytest

from primes_web import low_set as low_set_module
from primes_web.errors import InvalidArgument, NotReady, OutOfRange
from primes_web.low_set import LowSetCache
from primes_web.primes import is_prime_trial_division, primes_upto
from primes_web.ranges import _plan_segments, _process_segment, count_primes, list_primes


def reference(a: int, b: int) -> np.ndarray:
    primes = primes_upto(b)
    return primes[primes >= a]


class TestWithinLowSet:

    def test_list_to_30(self, small_cache):
        assert list_primes(0, 30, cache=small_cache).tolist() == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

    def test_count_to_10000(self, small_cache):
        assert count_primes(0, 10000, cache=small_cache) == 1229

    @pytest.mark.parametrize('a,b', [(2, 2), (3, 3), (4, 4), (24, 28), (89, 97), (9000, 9999)])
    def test_matches_reference(self, small_cache, a, b):
        assert np.array_equal(list_primes(a, b, cache=small_cache), reference(a, b))


class TestAboveLowSet:

    def test_straddles_last(self, small_cache):
        last = small_cache.last()
        a, b = last - 500, last + 5000
        assert np.array_equal(list_primes(a, b, cache=small_cache), reference(a, b))

    def test_starts_at_last_plus_one(self, small_cache):
        last = small_cache.last()
        a, b = last + 1, last + 1000
        assert np.array_equal(list_primes(a, b, cache=small_cache), reference(a, b))

    def test_window_above_last(self, small_cache):
        a, b = 10**7, 10**7 + 20000
        assert np.array_equal(list_primes(a, b, cache=small_cache), reference(a, b))

    def test_many_small_segments(self, small_cache):
        a, b = 9000, 30000
        got = list_primes(a, b, cache=small_cache, segment_size=97)
        assert np.array_equal(got, reference(a, b))

    def test_parallel_workers(self, small_cache):
        a, b = 50000, 250000
        got = list_primes(a, b, cache=small_cache, num_workers=2, segment_size=20000)
        assert np.array_equal(got, reference(a, b))

    def test_count_to_10_to_8(self, small_cache):
        """pi(10^8) = 5761455, all of [10^4, 10^8] sieved against the low set."""
        assert count_primes(0, 10**8, cache=small_cache) == 5761455

    def test_upper_end_of_certified_range(self, small_cache):
        last = small_cache.last()
        b = last * last
        got = list_primes(b - 2000, b, cache=small_cache)
        expected = [n for n in range(b - 2000, b + 1) if is_prime_trial_division(n)]
        assert got.tolist() == expected


class TestEdges:

    @pytest.mark.parametrize('a,b', [(10, 5), (-10, 1), (0, 0), (-100, -1)])
    def test_empty_ranges(self, small_cache, a, b):
        assert list_primes(a, b, cache=small_cache).tolist() == []
        assert count_primes(a, b, cache=small_cache) == 0

    def test_negative_start(self, small_cache):
        assert list_primes(-50, 10, cache=small_cache).tolist() == [2, 3, 5, 7]

    def test_count_equals_list_length(self, small_cache):
        for a, b in [(0, 100), (9990, 10100), (123456, 130000)]:
            assert count_primes(a, b, cache=small_cache) == len(list_primes(a, b, cache=small_cache))

    def test_out_of_range(self, small_cache):
        last = small_cache.last()
        with pytest.raises(OutOfRange):
            count_primes(0, last * last + 1, cache=small_cache)

    def test_not_ready(self):
        cache = LowSetCache(Future(), max_range=10**4)
        with pytest.raises(NotReady):
            list_primes(0, 100, cache=cache)

    @pytest.mark.parametrize('a,b', [(0.5, 10), (0, '10'), (None, 10)])
    def test_invalid_endpoints(self, small_cache, a, b):
        with pytest.raises(InvalidArgument):
            list_primes(a, b, cache=small_cache)

    def test_invalid_segment_size(self, small_cache):
        with pytest.raises(InvalidArgument):
            list_primes(0, 100, cache=small_cache, segment_size=0)

    def test_uses_default_cache(self, monkeypatch, small_cache):
        monkeypatch.setattr(low_set_module, '_default_cache', small_cache)
        assert count_primes(0, 100) == 25


class TestSegments:
    """The per-segment worker and the segment plan."""

    def test_plan_covers_range_without_gaps(self):
        segments = _plan_segments(100, 1050, 200)
        assert segments[0] == (100, 300)
        assert segments[-1] == (900, 1050)
        for (_, hi), (lo, _) in zip(segments, segments[1:]):
            assert hi == lo

    def test_process_segment(self):
        base = primes_upto(100)
        got = _process_segment((101, 1001, base))
        assert np.array_equal(got, reference(101, 1000))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
