"""Hole-order and pin-placement randomizer for the golf game ROM image."""

from __future__ import annotations

import math
import re
import struct
import sys
import time
from collections.abc import Sequence
from itertools import count as _count
from itertools import islice
from pathlib import Path

from .pcg import INITIAL_INC, Pcg32
from .sha1 import sha1_words

VERSION = (0, 1)

COURSES = 4
HOLES_PER_COURSE = 18
HOLE_COUNT = COURSES * HOLES_PER_COURSE

EXPECTED_SHA1 = (0xE7EF87E1, 0xDE21D2BB, 0x17EF17BB, 0x08657E92, 0x363F0E9A)

POINTER_XOR = 0x100000
HOLE_INFO_SIZE = 24
PINS_PER_HOLE = 8
PIN_RADIUS = 64.0

# Hole info tables of the four courses, in course order.
HOLE_INFO_TABLES = (0x157B6C, 0x157EFC, 0x1580C4, 0x157D34)
TREE_TYPES = (0xA, 0x5, 0x5, 0x4)

_SHUFFLED_TABLES = (
    # (offsets of the four courses, record size, stride)
    (HOLE_INFO_TABLES, 24, 24),  # hole data
    ((0x17A282, 0x17A2EE, 0x17A35A, 0x17A3C6), 4, 6),  # preview audio cues
    ((0x17A74C, 0x17A794, 0x17A7DC, 0x17A824), 4, 4),  # preview graphic pointers
    ((0x17A9E0, 0x17AA16, 0x17AA4C, 0x17AA82), 3, 3),  # preview yard ranges
)

_REINDEXED_16 = (
    # (offset, stride, terminator, count)
    (0x155622, 1, 0x0000, None),  # alternate wind meter hud location
    (0x1614E4, 5, 0xFFFF, None),  # cliff face sprites
    (0x161522, 1, 0xFFFF, None),  # waterfall splash audio cue at hole start
    (0x161C18, 4, 0x0000, 2),  # animating water planes
    (0x17A86C, 2, 0xFFFF, None),  # preview top-down x-coordinate
)

_REINDEXED_32 = (
    (0x10F2EA, 1, 0x00000000, 5),  # demo holes
    (0x15A1DC, 2, 0xFFFFFFFF, None),  # holes with cliffs
)

_TREE_KINDS = frozenset({0x4, 0x5, 0xA})
_OBJECT_END = 0xFFFF
_OBJECT_SIZE = 6

_BANNER_OFFSET = 0xFFFC0
_WATERMARK_OFFSET = 0xFFFE0
_BANNER_ADDRESS = 0x2FFFC0
_BANNER_PALETTE = 0x7097

_TWO_PI_F32 = struct.unpack("<f", struct.pack("<f", 6.283185307179586))[0]

_HEX_PREFIX = re.compile(r"\s*[+]?(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")

_USAGE = (
    "Usage: {prog} <--p1 filename> <--out filename> [--seed hexadecimal] [--holes] [--pins]\n"
    "  --holes : randomizes the order of the holes\n"
    "  --pins  : generates new pin locations for each hole"
)


class RandomizerError(Exception):
    """Raised when the ROM image cannot be randomized."""


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _read16(data: bytearray, offset: int) -> int:
    try:
        return struct.unpack_from(">H", data, offset)[0]
    except struct.error as exc:
        raise RandomizerError(f"read past end of image at {offset:#x}") from exc


def _read32(data: bytearray, offset: int) -> int:
    try:
        return struct.unpack_from(">I", data, offset)[0]
    except struct.error as exc:
        raise RandomizerError(f"read past end of image at {offset:#x}") from exc


def _write16(data: bytearray, offset: int, value: int) -> None:
    try:
        struct.pack_into(">H", data, offset, value & 0xFFFF)
    except struct.error as exc:
        raise RandomizerError(f"write past end of image at {offset:#x}") from exc


def _write32(data: bytearray, offset: int, value: int) -> None:
    try:
        struct.pack_into(">I", data, offset, value & 0xFFFFFFFF)
    except struct.error as exc:
        raise RandomizerError(f"write past end of image at {offset:#x}") from exc


def _put(data: bytearray, offset: int, payload: bytes) -> None:
    if offset < 0 or offset + len(payload) > len(data):
        raise RandomizerError(f"write past end of image at {offset:#x}")
    data[offset : offset + len(payload)] = payload


def _remap(indices_old_to_new: Sequence[int], course: int, hole: int) -> tuple[int, int]:
    index = course * HOLES_PER_COURSE + hole
    if not 0 <= hole < HOLES_PER_COURSE or not 0 <= index < len(indices_old_to_new):
        raise RandomizerError(f"invalid course {course} hole {hole + 1}")
    return divmod(indices_old_to_new[index], HOLES_PER_COURSE)


def byteswap(data: bytearray) -> None:
    """Swap the bytes of every complete 16-bit word of data in place."""
    end = len(data) - len(data) % 2
    data[0:end:2], data[1:end:2] = data[1:end:2], data[0:end:2]


def shuffle(
    data: bytearray,
    indices_old_to_new: Sequence[int],
    offsets: Sequence[int],
    size: int,
    stride: int,
) -> None:
    """Move per-hole records of the four course tables to their new slots."""
    span = HOLES_PER_COURSE * stride
    for offset in offsets:
        if offset < 0 or offset + span > len(data):
            raise RandomizerError(f"table at {offset:#x} runs past end of image")
    originals = [bytes(data[offset : offset + span]) for offset in offsets]

    for old_index, new_index in enumerate(indices_old_to_new):
        new_course, new_hole = divmod(new_index, HOLES_PER_COURSE)
        old_course, old_hole = divmod(old_index, HOLES_PER_COURSE)
        source = originals[old_course][old_hole * stride : old_hole * stride + size]
        target = offsets[new_course] + new_hole * stride
        data[target : target + size] = source


def reindex16(
    data: bytearray,
    indices_old_to_new: Sequence[int],
    offset: int,
    stride: int,
    terminator: int,
    count: int | None,
) -> None:
    """Rewrite 16-bit course/hole references (course in the high byte, 1-based hole)."""
    for position in islice(_count(offset, 2 * stride), count):
        value = _read16(data, position)
        if value == terminator:
            break
        course, hole = _remap(indices_old_to_new, value >> 8, (value & 0xFF) - 1)
        _write16(data, position, (course << 8) | (hole + 1))


def reindex32(
    data: bytearray,
    indices_old_to_new: Sequence[int],
    offset: int,
    stride: int,
    terminator: int,
    count: int | None,
) -> None:
    """Rewrite 32-bit course/hole references (course in the high half, 1-based hole)."""
    for position in islice(_count(offset, 4 * stride), count):
        value = _read32(data, position)
        if value == terminator:
            break
        course, hole = _remap(indices_old_to_new, value >> 16, (value & 0xFFFF) - 1)
        _write32(data, position, (course << 16) | (hole + 1))


def _hole_data_offsets(data: bytearray, hole_info_offset: int):
    for hole in range(HOLES_PER_COURSE):
        yield POINTER_XOR ^ _read32(data, hole_info_offset + hole * HOLE_INFO_SIZE)


def _object_offsets(data: bytearray, objects_offset: int):
    position = objects_offset
    while _read16(data, position) != _OBJECT_END:
        yield position
        position += _OBJECT_SIZE


def randomize_pins(data: bytearray, hole_info_offset: int, rng: Pcg32) -> None:
    """Place eight new pins around the green of each hole of one course."""
    for hole_data in _hole_data_offsets(data, hole_info_offset):
        pins_offset = POINTER_XOR ^ _read32(data, hole_data + 2)
        objects_offset = POINTER_XOR ^ _read32(data, hole_data + 6)

        green = objects_offset
        for green in _object_offsets(data, objects_offset):
            if _read16(data, green) >> 8 == 0x00:
                break
        else:
            green = max(green, objects_offset)
            if green != objects_offset or _read16(data, green) != _OBJECT_END:
                green += _OBJECT_SIZE
        green_x = _read16(data, green + 2)
        green_y = _read16(data, green + 4)

        for pin in range(PINS_PER_HOLE):
            radius = _f32(PIN_RADIUS * _f32(math.sqrt(rng.random_float())))
            theta = _f32(rng.random_float() * _TWO_PI_F32)
            local_x = _f32(radius * _f32(math.cos(theta)))
            local_y = _f32(radius * _f32(math.sin(theta)))
            pin_x = green_x + int(_f32(local_x + 0.5))
            pin_y = green_y + int(_f32(local_y + 0.5))
            _write16(data, pins_offset + 4 * pin, pin_x)
            _write16(data, pins_offset + 4 * pin + 2, pin_y)


def patch_trees(data: bytearray, hole_info_offset: int, expected_tree_type: int) -> None:
    """Give every tree object of one course's holes the course's tree type."""
    for hole_data in _hole_data_offsets(data, hole_info_offset):
        objects_offset = POINTER_XOR ^ _read32(data, hole_data + 6)
        for position in _object_offsets(data, objects_offset):
            type_flags = _read16(data, position)
            if type_flags >> 8 in _TREE_KINDS:
                type_flags = (type_flags & 0xFF) | ((expected_tree_type & 0xFF) << 8)
            _write16(data, position, type_flags)


def stringify(text: str) -> bytes:
    """Encode text in the game's character set; unsupported characters become '?'."""
    encoded = bytearray()
    for char in text:
        if "A" <= char <= "Z":
            encoded.append(ord(char) + 0x99)
        elif "0" <= char <= "9":
            encoded.append(ord(char) + 0xA0)
        elif char == " ":
            encoded.append(0xF6)
        elif char == ".":
            encoded.append(0xF9)
        elif char == "\n":
            encoded.append(0xFD)
        else:
            encoded.append(0xF5)
    return bytes(encoded)


def hole_permutation(rng: Pcg32) -> list[int]:
    """Return a random mapping from old hole index to new hole index."""
    indices = list(range(HOLE_COUNT))
    for i, remaining in enumerate(range(HOLE_COUNT, 1, -1)):
        j = i + rng.random() % remaining
        indices[i], indices[j] = indices[j], indices[i]
    return indices


def verify_rom(data) -> None:
    """Raise RandomizerError unless data is the expected program ROM."""
    actual = sha1_words(data)
    if actual != EXPECTED_SHA1:
        expected_hex = "".join(f"{word:08x}" for word in EXPECTED_SHA1)
        actual_hex = "".join(f"{word:08x}" for word in actual)
        raise RandomizerError(f"Expected p1 SHA1 to be {expected_hex} but it was {actual_hex}")


def _seeded(seed: int, offset: int) -> Pcg32:
    return Pcg32.seeded((seed + offset) & 0xFFFFFFFF, INITIAL_INC)


def randomize(data, seed: int, holes: bool, pins: bool) -> bytes:
    """Return a randomized copy of the (word-swapped) program ROM image."""
    seed &= 0xFFFFFFFF
    image = bytearray(data)
    byteswap(image)

    if holes:
        permutation = hole_permutation(_seeded(seed, 0x100000))
        for offsets, size, stride in _SHUFFLED_TABLES:
            shuffle(image, permutation, offsets, size, stride)
        for offset, stride, terminator, limit in _REINDEXED_16:
            reindex16(image, permutation, offset, stride, terminator, limit)
        for offset, stride, terminator, limit in _REINDEXED_32:
            reindex32(image, permutation, offset, stride, terminator, limit)
        for table, tree_type in zip(HOLE_INFO_TABLES, TREE_TYPES):
            patch_trees(image, table, tree_type)

    if pins:
        rng = _seeded(seed, 0x200000)
        for table in HOLE_INFO_TABLES:
            randomize_pins(image, table, rng)

    major, minor = VERSION
    banner = f"TurfMastRand V{major}.{minor} Seed {seed:08X}".encode("ascii") + b"\xfe"
    _put(image, _BANNER_OFFSET, banner)
    _write32(image, 0x17EEDE, _BANNER_ADDRESS)
    _write16(image, 0x17EEE6, _BANNER_PALETTE)
    _write32(image, 0x17EECE, _BANNER_ADDRESS)
    _write16(image, 0x17EECA, _BANNER_PALETTE)

    byteswap(image)

    watermark = f"TurfMastRandV{major}.{minor}Seed{seed:08X}GLHF".encode("ascii")
    _put(image, _WATERMARK_OFFSET, watermark)
    return bytes(image)


def _parse_hex(text: str | None) -> int | None:
    if text is None:
        return None
    match = _HEX_PREFIX.match(text)
    if match is None:
        return None
    return int(match.group(1), 16) & 0xFFFFFFFF


def _default_seed() -> int:
    return Pcg32.seeded(int(time.time()), INITIAL_INC).random()


def main(argv=None) -> int:
    """Command-line entry point; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    seed = _default_seed()
    p1_name = None
    out_name = None
    holes = False
    pins = False

    remaining = iter(args)
    for arg in remaining:
        if arg == "--p1":
            p1_name = next(remaining, None)
        elif arg == "--out":
            out_name = next(remaining, None)
        elif arg == "--seed":
            parsed = _parse_hex(next(remaining, None))
            if parsed is None:
                print("Expected a hexidecimal number after --seed parameter")
                return 1
            seed = parsed
        elif arg == "--holes":
            holes = True
        elif arg == "--pins":
            pins = True
        else:
            print(f"Unknown parameter: {arg}")
            return 1

    if not p1_name or not out_name or not (holes or pins):
        print(_USAGE.format(prog="turfmastrand"))
        return 1

    try:
        rom = Path(p1_name).read_bytes()
    except OSError:
        print(f"Unable to open p1 file: {p1_name}")
        return 1

    try:
        verify_rom(rom)
        result = randomize(rom, seed, holes, pins)
    except RandomizerError as exc:
        print(exc)
        return 1

    try:
        Path(out_name).write_bytes(result)
    except OSError:
        print(f"Couldn't open out file: {out_name}")
        return 1

    major, minor = VERSION
    print(f"TurfMastRand Version {major}.{minor}")
    print(f"Seed: {seed:08X}")
    return 0