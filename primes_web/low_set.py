"""
The low set: every prime up to isqrt(max_range), built once in the background.

A LowSetCache holds the future of a single build and publishes its result as
one immutable value. Its state is always exactly one of

    Pending             build still running
    Ready(low_set)      build finished; low_set is complete and read-only
    Failed(error)       build raised; dependent calls keep raising NotReady

Readers never block: they poll the future and raise NotReady until it has
resolved. Only wait() blocks, and only when a caller asks for it.

Coverage: any composite n <= max_range has a prime factor <= isqrt(n), and
the low set holds all primes up to isqrt(max_range) plus the next prime
after that, so last**2 >= max_range.
"""

import concurrent.futures
import logging
import math
import multiprocessing
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .config import env_config
from .errors import NotReady
from .segmented_sieve import sieve
from .validation import MAX_SAFE_INTEGER, check_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LowSet:
    """Ascending, duplicate-free, read-only array of primes plus build metadata."""

    primes: np.ndarray
    bound: int
    max_range: int
    build_seconds: float

    @property
    def last(self) -> int:
        return int(self.primes[-1])

    def __len__(self) -> int:
        return len(self.primes)


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Ready:
    low_set: LowSet


@dataclass(frozen=True)
class Failed:
    error: BaseException


LowSetState = Union[Pending, Ready, Failed]

PENDING = Pending()


def _next_prime(start: int, primes: np.ndarray) -> int:
    """First prime > start, by trial division against primes (all primes <= start)."""
    candidate = start + 1
    while True:
        limit = math.isqrt(candidate)
        divisors = primes[:np.searchsorted(primes, limit, side='right')]
        if candidate >= 2 and not np.any(candidate % divisors == 0):
            return candidate
        candidate += 1


def build_low_set(max_range: int = MAX_SAFE_INTEGER) -> LowSet:
    """
    Sieve the low set for max_range synchronously.

    Parameters
    ----------
    max_range : int
        Largest value the low set must be able to certify.

    Returns
    -------
    LowSet
        Primes up to isqrt(max_range), followed by the next prime.
    """
    max_range = check_size(max_range, 'max_range')
    t0 = time.perf_counter()

    bound = math.isqrt(max_range)
    primes = sieve(bound)
    primes = np.append(primes, np.int64(_next_prime(bound, primes)))
    primes.setflags(write=False)

    return LowSet(
        primes=primes,
        bound=bound,
        max_range=max_range,
        build_seconds=time.perf_counter() - t0,
    )


class LowSetCache:
    """
    Owner of one low-set build and its published result.

    Create with LowSetCache.start() for a background build, or
    LowSetCache.build() for a synchronous one. Pass the instance to the
    query functions via their `cache` argument.
    """

    def __init__(self, future: Future, max_range: int = MAX_SAFE_INTEGER):
        self.max_range = max_range
        self._future = future
        self._state = PENDING
        self._lock = threading.Lock()
        future.add_done_callback(self._publish)

    @classmethod
    def start(cls, max_range: int = MAX_SAFE_INTEGER,
              executor: Optional[concurrent.futures.Executor] = None) -> 'LowSetCache':
        """Schedule the build on executor (default: a dedicated worker thread)."""
        max_range = check_size(max_range, 'max_range')
        own_executor = executor is None
        if own_executor:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='low-set')

        logger.debug("Scheduling low set build for max_range=%d", max_range)
        future = executor.submit(build_low_set, max_range)
        if own_executor:
            # lets the worker thread exit once the build is done
            executor.shutdown(wait=False)
        return cls(future, max_range)

    @classmethod
    def build(cls, max_range: int = MAX_SAFE_INTEGER) -> 'LowSetCache':
        """Build in the calling thread and return a cache that is already ready."""
        future = Future()
        future.set_result(build_low_set(max_range))
        return cls(future, max_range)

    def _publish(self, future: Future):
        with self._lock:
            if not isinstance(self._state, Pending):
                return
            error = future.exception()
            if error is not None:
                logger.error("Low set build failed", exc_info=error)
                self._state = Failed(error)
                return

            low_set = future.result()
            logger.info(
                "Low set ready: %d primes up to %d (last %d) in %.2fs",
                len(low_set), low_set.bound, low_set.last, low_set.build_seconds,
            )
            self._state = Ready(low_set)

    @property
    def state(self) -> LowSetState:
        """Current state; resolves the future if it finished without blocking."""
        if isinstance(self._state, Pending) and self._future.done():
            self._publish(self._future)
        return self._state

    def ready(self) -> bool:
        return isinstance(self.state, Ready)

    def low_set(self) -> LowSet:
        """Return the published LowSet, or raise NotReady."""
        state = self.state
        if isinstance(state, Ready):
            return state.low_set
        if isinstance(state, Failed):
            raise NotReady("low set build failed") from state.error
        raise NotReady("low set is still being built")

    def primes(self) -> np.ndarray:
        return self.low_set().primes

    def last(self) -> int:
        return self.low_set().last

    def wait(self, timeout: Optional[float] = None) -> LowSet:
        """
        Block until the build finishes, then return the LowSet.

        Raises NotReady if timeout elapses first or the build failed.
        """
        concurrent.futures.wait([self._future], timeout=timeout)
        return self.low_set()


_default_cache = None
_default_lock = threading.Lock()


def default_cache() -> LowSetCache:
    """
    Return the process-wide cache, starting its build on first use.

    max_range comes from the configuration (see primes_web.config).
    """
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            config = env_config()
            _default_cache = LowSetCache.start(config['low_set']['max_range'])
    return _default_cache


def autostart(config: Optional[dict] = None) -> Optional[LowSetCache]:
    """
    Start the default cache at import unless autostart is off or this is a
    child process (pool workers never need their own low set).
    """
    if config is None:
        config = env_config()
    if not config['low_set']['autostart']:
        return None
    if multiprocessing.parent_process() is not None:
        return None
    return default_cache()


def resolve_cache(cache: Optional[LowSetCache]) -> LowSetCache:
    return cache if cache is not None else default_cache()


def low_set_ready(cache: Optional[LowSetCache] = None) -> bool:
    return resolve_cache(cache).ready()


def low_set_primes(cache: Optional[LowSetCache] = None) -> np.ndarray:
    return resolve_cache(cache).primes()


def low_set_last(cache: Optional[LowSetCache] = None) -> int:
    return resolve_cache(cache).last()
