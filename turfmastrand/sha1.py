"""SHA-1 message digest."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)


def _rotl(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK32


def _round_function(index: int, b: int, c: int, d: int) -> tuple[int, int]:
    if index < 20:
        return (b & c) | (~b & d), 0x5A827999
    if index < 40:
        return b ^ c ^ d, 0x6ED9EBA1
    if index < 60:
        return (b & c) | (b & d) | (c & d), 0x8F1BBCDC
    return b ^ c ^ d, 0xCA62C1D6


def _compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 80):
        w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

    a, b, c, d, e = state
    for index, word in enumerate(w):
        f, k = _round_function(index, b, c, d)
        temp = (_rotl(a, 5) + f + e + k + word) & _MASK32
        a, b, c, d, e = temp, a, _rotl(b, 30), c, d

    return tuple((x + y) & _MASK32 for x, y in zip(state, (a, b, c, d, e)))


def sha1_words(data) -> tuple[int, int, int, int, int]:
    """Return the SHA-1 digest of a bytes-like object as five 32-bit words."""
    message = bytes(memoryview(data))
    bit_length = (8 * len(message)) & _MASK64
    padding = b"\x80" + b"\x00" * ((55 - len(message)) % 64)
    padded = message + padding + struct.pack(">Q", bit_length)

    state = _INITIAL
    for start in range(0, len(padded), 64):
        state = _compress(state, padded[start : start + 64])
    return state  # type: ignore[return-value]


def sha1_hexdigest(data) -> str:
    """Return the SHA-1 digest of a bytes-like object as 40 hex digits."""
    return "".join(f"{word:08x}" for word in sha1_words(data))