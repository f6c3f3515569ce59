import pytest

from budget_game.summary import (
    BALANCED, MIXED, NEEDS_STRETCHED, SAVER, SPENDER,
    classify_summary, percent_of, pick_persona,
)

INCOME = 120000


def test_percent_of_rounds_halves_up():
    assert percent_of(1, 200) == 1
    assert percent_of(60000, INCOME) == 50
    assert percent_of(50000, INCOME) == 42
    assert percent_of(20000, INCOME) == 17


def test_percent_of_without_income_is_zero():
    assert percent_of(500, 0) == 0
    assert percent_of(500, -10) == 0


@pytest.mark.parametrize(
    "needs, wants, savings, persona",
    [
        (60000, 36000, 24000, BALANCED),
        (66000, 30000, 24000, BALANCED),
        (50000, 20000, 50000, SAVER),
        (60000, 24000, 36000, SAVER),
        (50000, 55000, 15000, SPENDER),
        (80000, 30000, 10000, NEEDS_STRETCHED),
        (50000, 40000, 30000, MIXED),
    ],
)
def test_classify_personas(needs, wants, savings, persona):
    assert classify_summary(needs, wants, savings, INCOME).persona == persona


def test_first_matching_rule_wins():
    # wants >= 40 and needs >= 60 at once: the spender rule comes first
    assert pick_persona(60, 40, 0) == SPENDER
    # savings >= 25 with low wants beats needs >= 60
    assert pick_persona(60, 10, 30) == SAVER


def test_zero_income_is_mixed():
    result = classify_summary(0, 0, 0, 0)
    assert (result.p_needs, result.p_wants, result.p_savings) == (0, 0, 0)
    assert result.persona == MIXED


def test_summary_line_and_targets():
    result = classify_summary(60000, 36000, 24000, INCOME)
    assert "Needs 50% (target 50%)" in result.summary_line
    assert "Wants 30% (target 30%)" in result.summary_line
    assert "Savings 20% (target 20%)" in result.summary_line
    assert result.targets == {"needs": 50, "wants": 30, "savings": 20}


def test_classify_is_pure():
    first = classify_summary(70000, 20000, 30000, INCOME)
    second = classify_summary(70000, 20000, 30000, INCOME)
    assert first == second
