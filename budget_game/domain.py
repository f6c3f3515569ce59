from dataclasses import dataclass, field
from typing import Dict, Optional

NEED = "need"
WANT = "want"

NEEDS = "needs"
WANTS = "wants"
SAVINGS = "savings"
ALLOCATION_TARGETS = (NEEDS, WANTS, SAVINGS)


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    price: int       # whole currency units, > 0
    category: str    # NEED or WANT
    recurring: bool = False


@dataclass(frozen=True)
class LogEntry:
    message: str
    change: int      # 0 for informational entries


@dataclass(frozen=True)
class GameEvent:
    name: str
    change: int


@dataclass(frozen=True)
class CheckoutSummary:
    spent_needs: int
    spent_wants: int
    leftover: int

    @property
    def total_spent(self) -> int:
        return self.spent_needs + self.spent_wants


# Read-only view of the session returned by get_state()
@dataclass(frozen=True)
class BudgetSnapshot:
    wealth: int
    needs: int
    wants: int
    savings: int
    month: int
    has_shopped_this_month: bool
    game_over: bool
    total_income: int = 0


@dataclass(frozen=True)
class MonthRecord:
    month: int
    salary: int
    event: Optional[GameEvent] = None
    needs: int = 0
    wants: int = 0
    savings: int = 0


@dataclass(frozen=True)
class SummaryResult:
    p_needs: int
    p_wants: int
    p_savings: int
    persona: str
    summary_line: str
    targets: Dict[str, int] = field(default_factory=dict)
