"""PCG32 (XSH-RR) pseudo-random number generators.

Provides a single 64-bit-state generator, a pair of generators tied together
to produce 64-bit output, and a module-level shared generator.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_MULTIPLIER = 6364136223846793005

INITIAL_STATE = 0x853C49E6748FEA9B
INITIAL_INC = 0xDA3E39CB94B95BDB


def _to_float32(value: float) -> float:
    """Round a number to the nearest single-precision float."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class Pcg32:
    """A PCG32 generator: 64 bits of state, 32-bit output, selectable stream."""

    state: int = INITIAL_STATE
    inc: int = INITIAL_INC

    def __post_init__(self) -> None:
        self.state &= _MASK64
        self.inc &= _MASK64

    @classmethod
    def seeded(cls, initstate: int, initseq: int) -> "Pcg32":
        """Create a generator seeded with a state initializer and a stream id."""
        rng = cls()
        rng.seed(initstate, initseq)
        return rng

    def seed(self, initstate: int, initseq: int) -> None:
        """Reseed from a state initializer and a stream (sequence) selector."""
        self.state = 0
        self.inc = (((initseq & _MASK64) << 1) | 1) & _MASK64
        self.random()
        self.state = (self.state + (initstate & _MASK64)) & _MASK64
        self.random()

    def random(self) -> int:
        """Return a uniformly distributed 32-bit unsigned integer."""
        old = self.state
        self.state = (old * _MULTIPLIER + self.inc) & _MASK64
        xorshifted = (((old >> 18) ^ old) >> 27) & _MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def bounded(self, bound: int) -> int:
        """Return a uniformly distributed integer r with 0 <= r < bound."""
        if not 0 < bound <= _MASK32:
            raise ValueError(f"bound must be in 1..{_MASK32}, got {bound}")
        threshold = ((1 << 32) - bound) % bound
        while True:
            r = self.random()
            if r >= threshold:
                return r % bound

    def random_float(self) -> float:
        """Return a single-precision float in [0, 1] from the next output."""
        return _to_float32(float(self.random())) / 4294967296.0


class Pcg32x2:
    """Two PCG32 generators on distinct streams combined into 64-bit output."""

    def __init__(self, seed1: int, seed2: int, seq1: int, seq2: int) -> None:
        self.generators = (Pcg32(), Pcg32())
        self.seed(seed1, seed2, seq1, seq2)

    def seed(self, seed1: int, seed2: int, seq1: int, seq2: int) -> None:
        """Reseed both generators, forcing their streams to differ."""
        mask = _MASK64 >> 1
        seq1 &= _MASK64
        seq2 &= _MASK64
        if (seq1 & mask) == (seq2 & mask):
            seq2 = ~seq2 & _MASK64
        self.generators[0].seed(seed1, seq1)
        self.generators[1].seed(seed2, seq2)

    def random(self) -> int:
        """Return a uniformly distributed 64-bit unsigned integer."""
        high, low = self.generators
        return (high.random() << 32) | low.random()

    def bounded(self, bound: int) -> int:
        """Return a uniformly distributed integer r with 0 <= r < bound."""
        if not 0 < bound <= _MASK64:
            raise ValueError(f"bound must be in 1..{_MASK64}, got {bound}")
        threshold = ((1 << 64) - bound) % bound
        while True:
            r = self.random()
            if r >= threshold:
                return r % bound


_shared = Pcg32()


def srandom(seed: int, seq: int) -> None:
    """Reseed the shared module-level generator."""
    _shared.seed(seed, seq)


def random() -> int:
    """Return the next 32-bit output of the shared generator."""
    return _shared.random()


def boundedrand(bound: int) -> int:
    """Return a bounded value from the shared generator."""
    return _shared.bounded(bound)