import pytest

from budget_game.config import EVENT_TABLE, GameConfig, load_config
from budget_game.randomness import NumpyRandomSource, ScriptedRandomSource


def test_defaults():
    config = GameConfig()
    assert config.paycheck == 10000
    assert config.months == 12
    assert config.quarterly_months == (3, 6, 9, 12)
    assert config.total_income == 120000
    assert config.is_quarterly(6)
    assert not config.is_quarterly(7)
    assert len(config.events) == 6


@pytest.mark.parametrize(
    "kwargs",
    [
        {"paycheck": 0},
        {"months": 0},
        {"quarterly_months": (13,)},
        {"events": ()},
    ],
)
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_load_config_from_env():
    config = load_config({"BUDGET_GAME_PAYCHECK": "5000", "BUDGET_GAME_SEED": "7"})
    assert config.paycheck == 5000
    assert config.seed == 7
    assert load_config({}) == GameConfig()


def test_load_config_rejects_garbage():
    with pytest.raises(ValueError):
        load_config({"BUDGET_GAME_PAYCHECK": "lots"})


def test_numpy_source_is_reproducible_with_seed():
    a = NumpyRandomSource(seed=42)
    b = NumpyRandomSource(seed=42)
    draws_a = [a.pick(EVENT_TABLE) for _ in range(20)]
    draws_b = [b.pick(EVENT_TABLE) for _ in range(20)]
    assert draws_a == draws_b
    assert set(draws_a) <= set(EVENT_TABLE)


def test_numpy_source_rejects_empty_options():
    with pytest.raises(ValueError):
        NumpyRandomSource(seed=1).pick(())


def test_scripted_source_cycles():
    source = ScriptedRandomSource([1, 0])
    picks = [source.pick("ab") for _ in range(4)]
    assert picks == ["b", "a", "b", "a"]
    assert source.calls == 4
