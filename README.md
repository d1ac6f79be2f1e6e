# turfmastrand

Randomizer for the Neo Turf Masters P1 program ROM. It can shuffle the order
of the 72 holes across the four courses and place new pin positions on every
green. The run is driven by a 32-bit hexadecimal seed, so the same seed and
options always give the same ROM.

The package also contains a PCG32 random number generator
(`turfmastrand.pcg`) and a SHA-1 routine (`turfmastrand.sha1`), which the
randomizer uses.

## Installation

```
pip install .
```

## Randomizing a ROM

```
turfmastrand --p1 original-p1.bin --out randomized-p1.bin --holes --pins
```

Options:

- `--p1 FILE`: the original P1 ROM. Its SHA-1 is checked before anything is
  changed; a file that does not match is rejected.
- `--out FILE`: where the patched ROM is written.
- `--seed HEX`: a hexadecimal seed. If you leave it out, a seed is derived
  from the current time.
- `--holes`: randomizes the order of the holes.
- `--pins`: generates new pin locations for each hole (eight per hole, within
  a radius of 64 units of the green).

At least one of `--holes` and `--pins` must be given. The title screen banner
is patched to show the randomizer version and the seed, and a plain-text
watermark with the same details is written into the ROM. On success the
version and seed are printed; on any error a message is printed and the exit
status is 1.

From Python:

```python
from pathlib import Path

from turfmastrand.randomizer import RandomizerError, randomize, verify_rom

rom = Path("original-p1.bin").read_bytes()
try:
    verify_rom(rom)
    patched = randomize(rom, seed=0x1234ABCD, holes=True, pins=True)
except RandomizerError as exc:
    print(exc)
else:
    Path("randomized-p1.bin").write_bytes(patched)
```

`randomize` does not change its input; it returns the patched image as
`bytes`. The lower-level steps (`hole_permutation`, `shuffle`, `reindex16`,
`reindex32`, `patch_trees`, `randomize_pins`, `byteswap`, `stringify`) are
available in `turfmastrand.randomizer` as well.

## PCG32 generator

```python
from turfmastrand.pcg import Pcg32, Pcg32x2

rng = Pcg32.seeded(42, 54)
rng.random()        # 32-bit unsigned integer
rng.bounded(6)      # 0 <= n < 6, without bias
rng.random_float()  # single-precision value in [0, 1]

wide = Pcg32x2(42, 42, 54, 54)
wide.random()       # 64-bit unsigned integer
wide.bounded(10)    # 0 <= n < 10
```

A shared module-level generator is reached through `srandom(seed, seq)`,
`random()` and `boundedrand(bound)` in `turfmastrand.pcg`. `bounded` and
`boundedrand` raise `ValueError` for a bound of zero or one that is out of
range.

## SHA-1

```python
from turfmastrand.sha1 import sha1_hexdigest, sha1_words

sha1_hexdigest(b"abc")  # 'a9993e364706816aba3e25717850c26c9cd0d89d'
sha1_words(b"abc")      # the same digest as five 32-bit integers
```

## Generator demo

```
turfmastrand-pcg-demo [pcg32|pcg32-global|pcg32x2] [-r] [rounds]
```

Prints, for each round (5 by default), six random words, 65 coin tosses, 33
dice rolls and a shuffled deck of cards. The variant selects the single
generator (the default), the shared global generator or the 64-bit pair.
Without `-r` the generators are seeded with fixed constants, so the output is
always the same; with `-r` they are seeded from the clock and system entropy.
The same text is available from `turfmastrand.demo.render_demo(variant,
rounds, nondeterministic)`.

## Tests

```
pip install .[test]
pytest
```