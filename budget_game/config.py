import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from budget_game.domain import GameEvent

DEFAULT_PAYCHECK = 10000
MONTHS_PER_YEAR = 12
QUARTERLY_MONTHS = (3, 6, 9, 12)
CURRENCY = "₹"

EVENT_TABLE: Tuple[GameEvent, ...] = (
    GameEvent("🚗 Car repair expense", -5000),
    GameEvent("🏥 Medical bill", -3000),
    GameEvent("🎉 Won a lucky draw!", 4000),
    GameEvent("🛍️ Shopping discount saved money", 2000),
    GameEvent("📱 Phone broke, replacement needed", -8000),
    GameEvent("💼 Side hustle income", 6000),
)

ENV_PAYCHECK = "BUDGET_GAME_PAYCHECK"
ENV_SEED = "BUDGET_GAME_SEED"


@dataclass(frozen=True)
class GameConfig:
    paycheck: int = DEFAULT_PAYCHECK
    months: int = MONTHS_PER_YEAR
    quarterly_months: Tuple[int, ...] = QUARTERLY_MONTHS
    events: Tuple[GameEvent, ...] = EVENT_TABLE
    currency: str = CURRENCY
    seed: Optional[int] = None

    def __post_init__(self):
        if self.paycheck <= 0:
            raise ValueError(f"Paycheck must be positive, got {self.paycheck}")
        if self.months < 1:
            raise ValueError(f"Game needs at least one month, got {self.months}")
        bad = [m for m in self.quarterly_months if not (1 <= m <= self.months)]
        if bad:
            raise ValueError(f"Quarterly months out of range 1..{self.months}: {bad}")
        if self.quarterly_months and not self.events:
            raise ValueError("Quarterly months configured but the event table is empty")

    @property
    def total_income(self) -> int:
        return self.months * self.paycheck

    def is_quarterly(self, month: int) -> bool:
        return month in self.quarterly_months


def _int_from_env(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> GameConfig:
    """Build a GameConfig, applying BUDGET_GAME_PAYCHECK / BUDGET_GAME_SEED overrides."""
    env = os.environ if env is None else env
    paycheck = _int_from_env(env, ENV_PAYCHECK)
    seed = _int_from_env(env, ENV_SEED)
    if paycheck is None:
        return GameConfig(seed=seed)
    return GameConfig(paycheck=paycheck, seed=seed)
