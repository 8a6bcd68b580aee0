"""
Bit array over the mod-30 wheel.

Only numbers coprime to 30 are stored: the 8 residues
1, 7, 11, 13, 17, 19, 23, 29 (mod 30) each own one bit of a byte, so
every byte covers a block of 30 consecutive integers.

Index mapping:
- byte index = n // 30
- bit        = MASK_TABLE[n % 30]   (0 means "not represented")

For n=7:   byte 0, bit 0x02
For n=31:  byte 1, bit 0x01
For n=49:  byte 1, bit 0x20 (49 = 30 + 19)
For n=45:  byte 1, mask 0 -> divisible by 3 or 5, never stored

Memory: 1 byte per 30 integers, vs 1 byte per integer for a bool sieve.
"""

import numpy as np

from .validation import as_int, check_size

WHEEL = 30
RESIDUES = (1, 7, 11, 13, 17, 19, 23, 29)
BITS = tuple(1 << i for i in range(len(RESIDUES)))

_BIT_OF = dict(zip(RESIDUES, BITS))
MASK_TABLE = tuple(_BIT_OF.get(r, 0) for r in range(WHEEL))

# get() result for anything that is not a stored prime candidate
COMPOSITE = 1


class WheelBitSet:
    """
    Composite flags for the numbers up to `size` that are coprime to 30.

    A cleared bit means "still a prime candidate". Numbers that are even,
    below 7, above size, or divisible by 3 or 5 have no bit and always
    read as composite; 2, 3 and 5 are handled by the caller.
    """

    def __init__(self, size: int):
        self.size = check_size(size)
        self.storage = np.zeros(-(-self.size // WHEEL) + 1, dtype=np.uint8)

    def set(self, n: int):
        """
        Mark n composite.

        Even n, n below 7 and n above size have no bit and are ignored.
        """
        n = as_int(n)
        if n < 7 or n > self.size or n % 2 == 0:
            return
        self.set_unchecked(n)

    def set_unchecked(self, n: int):
        """set() without type or bounds checks; n must lie in [7, size]."""
        bit = MASK_TABLE[n % WHEEL]
        if bit:
            self.storage[n // WHEEL] |= bit

    def get(self, n: int) -> int:
        """
        Return 0 if n is an unmarked prime candidate, 1 otherwise.

        Even numbers, numbers below 7 or above size, and multiples of
        3 or 5 always report composite.
        """
        n = as_int(n)
        if n < 7 or n > self.size or n % 2 == 0:
            return COMPOSITE
        return self.get_unchecked(n)

    def get_unchecked(self, n: int) -> int:
        """get() without type or bounds checks; n must lie in [7, size]."""
        bit = MASK_TABLE[n % WHEEL]
        if not bit:
            return COMPOSITE
        return COMPOSITE if self.storage[n // WHEEL] & bit else 0

    def mark_multiples(self, p: int):
        """
        Mark every odd multiple k*p (k >= 3) of p up to size.

        Same effect as set(m) for m = 3p, 5p, 7p, ... but done as one
        strided slice per wheel residue: multiples of p with a fixed
        residue mod 30 are 30p apart, i.e. exactly p bytes apart.
        """
        p = as_int(p)
        if p < 7 or not MASK_TABLE[p % WHEEL]:
            # multiples of 2, 3 or 5 are never stored
            return

        p_inv = pow(p, -1, WHEEL)
        for r, bit in zip(RESIDUES, BITS):
            k = (r * p_inv) % WHEEL
            if k == 1:
                k += WHEEL  # skip p itself
            first = k * p
            if first > self.size:
                continue
            count = (self.size - first) // (WHEEL * p) + 1
            start = first // WHEEL
            self.storage[start:start + count * p:p] |= bit

    def candidates(self, start: int = 7) -> np.ndarray:
        """
        Return every unmarked number in [max(start, 7), size], ascending.

        Returns
        -------
        np.ndarray
            int64 array of prime candidates.
        """
        lo = max(as_int(start), 7)
        found = []
        for r, bit in zip(RESIDUES, BITS):
            idx = np.flatnonzero((self.storage & bit) == 0)
            found.append(idx.astype(np.int64) * WHEEL + r)

        numbers = np.sort(np.concatenate(found))
        return numbers[(numbers >= lo) & (numbers <= self.size)]
