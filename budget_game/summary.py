from budget_game.domain import NEEDS, SAVINGS, WANTS, SummaryResult

TARGETS = {NEEDS: 50, WANTS: 30, SAVINGS: 20}
TOLERANCE = 5

BALANCED = "Balanced Budgeter"
SAVER = "Saver"
SPENDER = "Spender"
NEEDS_STRETCHED = "Needs-Stretched"
MIXED = "Mixed Budgeter"
PERSONAS = (BALANCED, SAVER, SPENDER, NEEDS_STRETCHED, MIXED)


def percent_of(part: int, total: int) -> int:
    """Whole percent of total, halves rounded up; 0 when there is no income."""
    if total <= 0:
        return 0
    return int((200 * part + total) // (2 * total))


def pick_persona(p_needs: int, p_wants: int, p_savings: int) -> str:
    actual = {NEEDS: p_needs, WANTS: p_wants, SAVINGS: p_savings}
    if all(abs(actual[k] - TARGETS[k]) <= TOLERANCE for k in TARGETS):
        return BALANCED
    if p_savings >= 25 and p_wants <= 25:
        return SAVER
    if p_wants >= 40:
        return SPENDER
    if p_needs >= 60:
        return NEEDS_STRETCHED
    return MIXED


def summary_line(p_needs: int, p_wants: int, p_savings: int) -> str:
    return (
        f"Needs {p_needs}% (target {TARGETS[NEEDS]}%) · "
        f"Wants {p_wants}% (target {TARGETS[WANTS]}%) · "
        f"Savings {p_savings}% (target {TARGETS[SAVINGS]}%)"
    )


def classify_summary(needs: int, wants: int, savings: int, total_income: int) -> SummaryResult:
    p_needs = percent_of(needs, total_income)
    p_wants = percent_of(wants, total_income)
    p_savings = percent_of(savings, total_income)
    return SummaryResult(
        p_needs=p_needs,
        p_wants=p_wants,
        p_savings=p_savings,
        persona=pick_persona(p_needs, p_wants, p_savings),
        summary_line=summary_line(p_needs, p_wants, p_savings),
        targets=dict(TARGETS),
    )
