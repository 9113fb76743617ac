from challenge.shuffle import SeededRandom, seeded_shuffle, string_hash


def test_string_hash_small_values():
    assert string_hash("") == 0
    assert string_hash("a") == 97
    assert string_hash("ab") == 97 * 31 + 98


def test_string_hash_stays_signed_32_bit():
    h = string_hash("worldofmaps2025-exploratory-cycle-12" * 4)
    assert -(2 ** 31) <= h < 2 ** 31


def test_lcg_first_value():
    rng = SeededRandom("a")
    value = rng.next()
    # (97 * 1103515245 + 12345) mod 2^31
    assert rng.state == 1814292358
    assert value == 1814292358 / 2 ** 31


def test_lcg_values_in_unit_interval():
    for seed in ("zzzzzzzzzzzz", "worldofmaps2025", "x"):
        rng = SeededRandom(seed)
        for _ in range(1000):
            assert 0.0 <= rng.next() < 1.0


def test_lcg_handles_negative_initial_state():
    rng = SeededRandom("")
    rng.state = -123456789
    assert 0.0 <= rng.next() < 1.0
    assert rng.state >= 0


def test_same_seed_same_order():
    items = list(range(50))
    assert seeded_shuffle(items, "test") == seeded_shuffle(items, "test")


def test_different_seeds_differ():
    items = list(range(50))
    assert seeded_shuffle(items, "seed-one") != seeded_shuffle(items, "seed-two")


def test_is_a_permutation_and_input_untouched():
    items = ["a", "b", "c", "d", "e", "f"]
    snapshot = list(items)
    out = seeded_shuffle(items, "test")
    assert sorted(out) == sorted(items)
    assert items == snapshot
    assert out is not items


def test_tuple_input_returns_list():
    out = seeded_shuffle(("x", "y", "z"), "test")
    assert isinstance(out, list)
    assert sorted(out) == ["x", "y", "z"]


def test_trivial_inputs():
    assert seeded_shuffle([], "test") == []
    assert seeded_shuffle(["only"], "test") == ["only"]
