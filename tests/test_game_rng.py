import pytest

from game_rng import GameRNG


def test_same_seed_same_stream():
    a = GameRNG(seed=42)
    b = GameRNG(seed=42)
    assert [a.below(100) for _ in range(50)] == [b.below(100) for _ in range(50)]
    assert a.get_float() == b.get_float()


def test_integer_bounds():
    rng = GameRNG(seed=3)
    below = {rng.below(4) for _ in range(500)}
    assert below == {0, 1, 2, 3}
    inclusive = {rng.get_int(-1, 1) for _ in range(500)}
    assert inclusive == {-1, 0, 1}


def test_invalid_ranges_raise():
    rng = GameRNG(seed=3)
    with pytest.raises(ValueError):
        rng.below(0)
    with pytest.raises(ValueError):
        rng.get_int(5, 4)
    with pytest.raises(ValueError):
        GameRNG(seed=-1)


def test_one_in_extremes():
    rng = GameRNG(seed=9)
    assert all(rng.one_in(151, 151) for _ in range(200))
    assert not any(rng.one_in(151, 0) for _ in range(200))


def test_weighted_choice_skips_zero_weight():
    rng = GameRNG(seed=11)
    picks = {rng.weighted_choice(["a", "b", "c"], [1, 0, 3], cache_key="abc") for _ in range(500)}
    assert picks == {"a", "c"}
    assert "abc" in rng.weighted_choice_cache


def test_derived_seeds_are_reproducible():
    assert GameRNG(seed=8).derive_seed() == GameRNG(seed=8).derive_seed()
