from __future__ import annotations

import pytest

from infinitune.core.errors import EmptyInputError
from infinitune.services.randomizer import RESEED_MAX, SeededStream, hash_seed


def test_hash_seed_known_values() -> None:
    assert hash_seed("") == 5381
    # 5381 * 33 = 177573; 177573 ^ ord("a") = 177604
    assert hash_seed("a") == 177604


def test_hash_seed_stays_in_u32() -> None:
    for s in ["x" * 500, "test_en_US_1", "ключ_ru_42", "🎵" * 40]:
        h = hash_seed(s)
        assert 0 <= h <= 0xFFFFFFFF


def test_hash_seed_uses_utf8_bytes() -> None:
    # é is c3 a9 in UTF-8
    assert hash_seed("é") == 5857935
    assert hash_seed("é") != hash_seed("e")


def test_same_seed_same_sequence() -> None:
    a = SeededStream("abc_en_US_1")
    b = SeededStream("abc_en_US_1")
    seq_a = [a.next_int(0, 100) for _ in range(50)] + [a.next_float() for _ in range(50)]
    seq_b = [b.next_int(0, 100) for _ in range(50)] + [b.next_float() for _ in range(50)]
    assert seq_a == seq_b


def test_different_seeds_diverge() -> None:
    a = SeededStream("abc_en_US_1")
    b = SeededStream("abc_en_US_2")
    assert [a.next_int(0, 1000) for _ in range(20)] != [b.next_int(0, 1000) for _ in range(20)]


def test_next_int_is_inclusive_and_in_range() -> None:
    s = SeededStream("range")
    seen = {s.next_int(3, 6) for _ in range(500)}
    assert seen == {3, 4, 5, 6}


def test_next_int_single_value_range() -> None:
    s = SeededStream("one")
    assert all(s.next_int(7, 7) == 7 for _ in range(10))


def test_next_int_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        SeededStream("bad").next_int(5, 4)


def test_next_float_in_unit_interval() -> None:
    s = SeededStream("floats")
    values = [s.next_float() for _ in range(2000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert 0.4 < sum(values) / len(values) < 0.6


def test_pick_returns_member() -> None:
    s = SeededStream("pick")
    items = ["a", "b", "c"]
    assert {s.pick(items) for _ in range(200)} == set(items)


def test_pick_empty_always_raises() -> None:
    s = SeededStream("empty")
    for _ in range(3):
        with pytest.raises(EmptyInputError):
            s.pick([])
    with pytest.raises(EmptyInputError):
        s.pick(())


def test_pick_empty_does_not_consume_a_draw() -> None:
    a = SeededStream("same")
    b = SeededStream("same")
    with pytest.raises(EmptyInputError):
        a.pick([])
    assert a.next_int(0, 1000) == b.next_int(0, 1000)


def test_reseed_value_range_and_determinism() -> None:
    v1 = SeededStream("reseed").reseed_value()
    v2 = SeededStream("reseed").reseed_value()
    assert v1 == v2
    assert 0 <= v1 <= RESEED_MAX


def test_hash_seed_accepts_lone_surrogates() -> None:
    # undecodable argv bytes arrive as lone surrogates; U+DCFF hashes as ed b3 bf
    assert hash_seed("abc\udcff") == 1306364772
    assert SeededStream("abc\udcff").next_int(0, 10) == SeededStream("abc\udcff").next_int(0, 10)


def test_known_stream_values() -> None:
    # MT19937 (legacy RandomState) seeded with hash_seed; any generator change breaks this
    assert hash_seed("test_en_US_1") == 1345446448
    s = SeededStream("test_en_US_1")
    assert [s.next_int(0, 1000) for _ in range(10)] == [449, 59, 319, 585, 819, 825, 545, 894, 294, 735]


def test_known_reseed_value_and_float() -> None:
    s = SeededStream("test_en_US_1")
    assert s.reseed_value() == 125377
    assert s.next_float() == 0.549947
