from typing import Iterable

import pandas as pd

from budget_game.domain import NEEDS, SAVINGS, WANTS, BudgetSnapshot, LogEntry, MonthRecord
from budget_game.summary import TARGETS

LEDGER_COLUMNS = ["message", "change", "kind"]
HISTORY_COLUMNS = ["month", "salary", "event", "event_change", NEEDS, WANTS, SAVINGS]


def _kind(change: int) -> str:
    if change > 0:
        return "income"
    if change < 0:
        return "expense"
    return "info"


def ledger_frame(entries: Iterable[LogEntry]) -> pd.DataFrame:
    """Ledger entries as rows, newest first, with an income/expense/info tag."""
    rows = [{"message": e.message, "change": e.change, "kind": _kind(e.change)} for e in entries]
    return pd.DataFrame(rows, columns=LEDGER_COLUMNS)


def history_frame(records: Iterable[MonthRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        rows.append({
            "month": r.month,
            "salary": r.salary,
            "event": r.event.name if r.event else "",
            "event_change": r.event.change if r.event else 0,
            NEEDS: r.needs,
            WANTS: r.wants,
            SAVINGS: r.savings,
        })
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


def allocation_frame(state: BudgetSnapshot, total_income: int) -> pd.DataFrame:
    """Category totals next to their 50/30/20 targets, in currency and percent."""
    actual = {NEEDS: state.needs, WANTS: state.wants, SAVINGS: state.savings}
    df = pd.DataFrame({
        "category": list(TARGETS),
        "amount": [actual[c] for c in TARGETS],
        "target_pct": [TARGETS[c] for c in TARGETS],
    })
    if total_income > 0:
        df["actual_pct"] = (df["amount"] * 100 / total_income).round(1)
    else:
        df["actual_pct"] = 0.0
    df["target_amount"] = df["target_pct"] * total_income // 100
    return df
