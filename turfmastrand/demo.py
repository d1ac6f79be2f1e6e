"""Demonstration output of the PCG32 generators: words, coins, dice and cards."""

from __future__ import annotations

import re
import secrets
import sys
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from .pcg import Pcg32, Pcg32x2, boundedrand, srandom
from .pcg import random as shared_random

_MASK64 = 0xFFFFFFFFFFFFFFFF

SUITS = 4
CARDS = 52
_NUMBER_NAMES = "A23456789TJQK"
_SUIT_NAMES = "hcds"
_CARDS_PER_LINE = 22
_WORDS = 6
_COINS = 65
_ROLLS = 33

DEFAULT_ROUNDS = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class _Generator(Protocol):
    def random(self) -> int: ...

    def bounded(self, bound: int) -> int: ...


class _SharedGenerator:
    """Adapter presenting the module-level shared generator as an object."""

    def random(self) -> int:
        return shared_random()

    def bounded(self, bound: int) -> int:
        return boundedrand(bound)


def _entropy() -> int:
    return secrets.randbits(64)


def _make_pcg32(nondeterministic: bool) -> _Generator:
    if nondeterministic:
        return Pcg32.seeded(int(time.time()) ^ _entropy(), _entropy())
    return Pcg32.seeded(42, 54)


def _make_global(nondeterministic: bool) -> _Generator:
    if nondeterministic:
        srandom(int(time.time()) ^ _entropy(), _entropy())
    else:
        srandom(42, 54)
    return _SharedGenerator()


def _make_pcg32x2(nondeterministic: bool) -> _Generator:
    if nondeterministic:
        now = int(time.time())
        return Pcg32x2(
            now ^ _entropy(),
            (~now & _MASK64) ^ _entropy(),
            _entropy(),
            _entropy(),
        )
    return Pcg32x2(42, 42, 54, 54)


@dataclass(frozen=True)
class _Variant:
    header: str
    word_label: str
    word_digits: int
    words_per_line: int | None
    factory: Callable[[bool], _Generator]


VARIANTS: dict[str, _Variant] = {
    "pcg32": _Variant(
        header=(
            "pcg32_random_r:\n"
            "      -  result:      32-bit unsigned int (uint32_t)\n"
            "      -  period:      2^64   (* 2^63 streams)\n"
            "      -  state type:  pcg32_random_t (16 bytes)\n"
            "      -  output func: XSH-RR\n"
            "\n"
        ),
        word_label="32bit",
        word_digits=8,
        words_per_line=None,
        factory=_make_pcg32,
    ),
    "pcg32-global": _Variant(
        header=(
            "pcg32_random:\n"
            "      -  result:      32-bit unsigned int (uint32_t)\n"
            "      -  period:      2^64   (* 2^63 streams)\n"
            "      -  state type:  N/A (private global)\n"
            "      -  output func: XSH-RR\n"
            "\n"
        ),
        word_label="32bit",
        word_digits=8,
        words_per_line=None,
        factory=_make_global,
    ),
    "pcg32x2": _Variant(
        header=(
            "pcg32x2_random_r:\n"
            "      -  result:      64-bit unsigned int (uint64_t)\n"
            "      -  period:      2^64   (* ~2^126 streams)\n"
            "      -  state space: ~2^254\n"
            "      -  state type:  pcg32x2_random_t (32 bytes)\n"
            "      -  output func: XSH-RR (x 2)\n"
            "\n"
        ),
        word_label="64bit",
        word_digits=16,
        words_per_line=3,
        factory=_make_pcg32x2,
    ),
}


def _render_round(number: int, rng: _Generator, variant: _Variant) -> str:
    parts = [f"Round {number}:\n", f"  {variant.word_label}:"]
    for i in range(_WORDS):
        if variant.words_per_line and i > 0 and i % variant.words_per_line == 0:
            parts.append("\n\t")
        parts.append(f" 0x{rng.random():0{variant.word_digits}x}")
    parts.append("\n")

    coins = "".join("H" if rng.bounded(2) else "T" for _ in range(_COINS))
    parts.append(f"  Coins: {coins}\n")

    rolls = "".join(f" {rng.bounded(6) + 1}" for _ in range(_ROLLS))
    parts.append(f"  Rolls:{rolls}\n")

    cards = list(range(CARDS))
    for remaining in range(CARDS, 1, -1):
        chosen = rng.bounded(remaining)
        cards[chosen], cards[remaining - 1] = cards[remaining - 1], cards[chosen]

    parts.append("  Cards:")
    for position, card in enumerate(cards, start=1):
        parts.append(f" {_NUMBER_NAMES[card // SUITS]}{_SUIT_NAMES[card % SUITS]}")
        if position % _CARDS_PER_LINE == 0:
            parts.append("\n\t")
    parts.append("\n\n")
    return "".join(parts)


def render_demo(variant: str, rounds: int, nondeterministic: bool) -> str:
    """Return the demonstration text for a generator variant."""
    try:
        spec = VARIANTS[variant]
    except KeyError:
        names = ", ".join(VARIANTS)
        raise ValueError(f"unknown variant {variant!r}; expected one of {names}") from None
    rng = spec.factory(nondeterministic)
    body = "".join(_render_round(n, rng, spec) for n in range(1, rounds + 1))
    return spec.header + body


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv=None) -> int:
    """Command-line entry point: [variant] [-r] [rounds]."""
    args = list(sys.argv[1:] if argv is None else argv)
    variant = "pcg32"
    if args and args[0] in VARIANTS:
        variant = args.pop(0)
    nondeterministic = False
    if args and args[0] == "-r":
        nondeterministic = True
        args.pop(0)
    rounds = _atoi(args[0]) if args else DEFAULT_ROUNDS
    print(render_demo(variant, rounds, nondeterministic), end="")
    return 0