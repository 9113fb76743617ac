"""
seeded deterministic shuffle.

a string seed is hashed into a 32-bit integer which drives a small
linear congruential generator. same seed → same sequence, in every
process, forever. this is what lets the rotation skip storing a schedule.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")

_MOD_31 = 1 << 31
_MASK_31 = _MOD_31 - 1


def string_hash(seed: str) -> int:
    """
    31-multiplier string hash folded to a signed 32-bit integer.

    equivalent to `hash = (hash << 5) - hash + code` with 32-bit
    wraparound after every character.
    """
    h = 0
    for ch in seed:
        h = (h << 5) - h + ord(ch)
        # fold into signed 32-bit range
        h = ((h + 0x80000000) & 0xFFFFFFFF) - 0x80000000
    return h


class SeededRandom:
    """LCG: state = (state * 1103515245 + 12345) mod 2^31."""

    MULTIPLIER = 1103515245
    INCREMENT = 12345

    def __init__(self, seed: str):
        self.seed = seed
        self.state = string_hash(seed)

    def next(self) -> float:
        """next float in [0, 1)."""
        # masking also maps a negative initial hash into [0, 2^31)
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & _MASK_31
        return self.state / _MOD_31

    def randint(self, upper: int) -> int:
        """uniform-ish integer in [0, upper]."""
        return int(self.next() * (upper + 1))


def seeded_shuffle(items: Sequence[T], seed: str) -> list[T]:
    """
    fisher–yates shuffle driven by SeededRandom(seed).

    args:
        items: sequence to shuffle (left untouched)
        seed: any string

    returns:
        new list with the same items in a seed-determined order
    """
    out = list(items)
    rng = SeededRandom(seed)

    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(i)
        out[i], out[j] = out[j], out[i]

    return out
