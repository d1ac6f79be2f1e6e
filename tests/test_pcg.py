import pytest

from turfmastrand import pcg
from turfmastrand.pcg import INITIAL_INC, INITIAL_STATE, Pcg32, Pcg32x2

MASK64 = (1 << 64) - 1


def test_default_generator_uses_static_initializer():
    rng = Pcg32()
    assert (rng.state, rng.inc) == (0x853C49E6748FEA9B, 0xDA3E39CB94B95BDB)
    assert (rng.state, rng.inc) == (INITIAL_STATE, INITIAL_INC)


def test_known_sequence_for_seed_42_stream_54():
    rng = Pcg32.seeded(42, 54)
    outputs = [rng.random() for _ in range(6)]
    assert outputs == [
        0xA15C02B7,
        0x7B47F409,
        0xBA1D3330,
        0x83D2F293,
        0xBFA4784B,
        0xCBED606E,
    ]


def test_seeded_matches_seed_on_existing_instance():
    a = Pcg32.seeded(1234, 5678)
    b = Pcg32(1, 3)
    b.seed(1234, 5678)
    assert a == b
    assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]


def test_inc_is_always_odd_after_seeding():
    for seq in (0, 1, 2, MASK64, 1 << 63):
        rng = Pcg32.seeded(7, seq)
        assert rng.inc & 1 == 1
        assert 0 <= rng.inc <= MASK64


def test_seed_values_are_truncated_to_64_bits():
    wide = Pcg32.seeded((1 << 64) + 99, (1 << 64) + 5)
    narrow = Pcg32.seeded(99, 5)
    assert wide == narrow


def test_outputs_are_32_bit():
    rng = Pcg32.seeded(0, 0)
    values = [rng.random() for _ in range(1000)]
    assert all(0 <= v <= 0xFFFFFFFF for v in values)
    assert len(set(values)) > 990


def test_different_streams_differ():
    a = Pcg32.seeded(42, 1)
    b = Pcg32.seeded(42, 2)
    assert [a.random() for _ in range(8)] != [b.random() for _ in range(8)]


@pytest.mark.parametrize("bound", [1, 2, 6, 52, 1000, 0xFFFFFFFF])
def test_bounded_stays_in_range(bound):
    rng = Pcg32.seeded(3, 9)
    assert all(0 <= rng.bounded(bound) < bound for _ in range(300))


def test_bounded_one_is_always_zero():
    rng = Pcg32.seeded(11, 12)
    assert {rng.bounded(1) for _ in range(50)} == {0}


def test_bounded_covers_all_values():
    rng = Pcg32.seeded(42, 54)
    assert {rng.bounded(6) for _ in range(500)} == set(range(6))


@pytest.mark.parametrize("bound", [0, -1, 1 << 32])
def test_bounded_rejects_bad_bounds(bound):
    with pytest.raises(ValueError):
        Pcg32.seeded(1, 1).bounded(bound)


def test_random_float_tracks_random_output():
    a = Pcg32.seeded(5, 6)
    b = Pcg32.seeded(5, 6)
    for _ in range(100):
        f = a.random_float()
        expected = b.random() / 2**32
        assert 0.0 <= f <= 1.0
        assert f == pytest.approx(expected, rel=1e-6, abs=1e-12)


def test_shared_generator_functions_follow_instance():
    pcg.srandom(42, 54)
    twin = Pcg32.seeded(42, 54)
    assert [pcg.random() for _ in range(10)] == [twin.random() for _ in range(10)]
    assert [pcg.boundedrand(13) for _ in range(10)] == [
        twin.bounded(13) for _ in range(10)
    ]


def test_shared_boundedrand_rejects_zero():
    with pytest.raises(ValueError):
        pcg.boundedrand(0)


def test_pcg32x2_combines_two_streams():
    rng = Pcg32x2(1, 2, 3, 4)
    high = Pcg32.seeded(1, 3)
    low = Pcg32.seeded(2, 4)
    for _ in range(10):
        assert rng.random() == (high.random() << 32) | low.random()


def test_pcg32x2_inverts_equal_streams():
    rng = Pcg32x2(42, 42, 54, 54)
    high = Pcg32.seeded(42, 54)
    low = Pcg32.seeded(42, ~54 & MASK64)
    value = rng.random()
    assert value >> 32 == high.random()
    assert value & 0xFFFFFFFF == low.random()


def test_pcg32x2_streams_equal_apart_from_top_bit_are_forced_apart():
    rng = Pcg32x2(8, 8, 5, 5 | (1 << 63))
    first, second = rng.generators
    assert first.inc != second.inc
    assert (first.inc >> 1) & (MASK64 >> 1) != (second.inc >> 1) & (MASK64 >> 1)


def test_pcg32x2_reseed_restarts_sequence():
    rng = Pcg32x2(9, 10, 11, 12)
    first = [rng.random() for _ in range(5)]
    rng.seed(9, 10, 11, 12)
    assert [rng.random() for _ in range(5)] == first


@pytest.mark.parametrize("bound", [1, 2, 6, 52, (1 << 64) - 1])
def test_pcg32x2_bounded_in_range(bound):
    rng = Pcg32x2(42, 42, 54, 54)
    assert all(0 <= rng.bounded(bound) < bound for _ in range(200))


@pytest.mark.parametrize("bound", [0, -5, 1 << 64])
def test_pcg32x2_bounded_rejects_bad_bounds(bound):
    with pytest.raises(ValueError):
        Pcg32x2(1, 2, 3, 4).bounded(bound)