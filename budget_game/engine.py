import logging
from dataclasses import replace
from typing import Dict, Mapping, Optional, Tuple, Union

from budget_game.catalog import CATALOG
from budget_game.config import GameConfig
from budget_game.domain import (
    ALLOCATION_TARGETS,
    BudgetSnapshot, CatalogItem, CheckoutSummary, LogEntry, MonthRecord, SummaryResult,
)
from budget_game.events import (
    CHECKOUT_COMMITTED, GAME_COMPLETED, GAME_RESTARTED, MONTH_ADVANCED, QUARTERLY_EVENT,
    EventBus,
)
from budget_game.functional import (
    ALREADY_COMPLETE, INSUFFICIENT_FUNDS, INVALID_AMOUNT, SHOPPING_REQUIRED, UNKNOWN_CATEGORY,
    Either, Right, failure,
)
from budget_game.ledger import Ledger, format_amount
from budget_game.randomness import NumpyRandomSource, RandomSource
from budget_game.shopping import Cart, resolve_cart
from budget_game import summary

logger = logging.getLogger(__name__)

CartInput = Union[Cart, Mapping[str, int]]


class BudgetGame:
    """One player's year: wealth, category totals, month cycle and ledger.

    Every command returns an Either; rule violations come back as Left with an
    error dict and never leave a partial change behind. Notifications go out on
    ``bus`` only after the state change they describe has been applied.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Tuple[CatalogItem, ...] = CATALOG,
        random_source: Optional[RandomSource] = None,
        bus: Optional[EventBus] = None,
    ):
        self.config = config or GameConfig()
        self.catalog = tuple(catalog)
        self.random_source = random_source or NumpyRandomSource(self.config.seed)
        self.bus = bus or EventBus()
        self.cart = Cart()
        self._reset()

    def _reset(self) -> None:
        paycheck = self.config.paycheck
        self.wealth = paycheck
        self.needs = 0
        self.wants = 0
        self.savings = 0
        self.month = 1
        self.has_shopped_this_month = False
        self.game_over = False
        self.total_income = paycheck
        self.cart.clear()
        self.ledger = Ledger(self.config.currency)
        self.ledger.record(f"Month 1: Received salary of {self._fmt(paycheck)}", paycheck)
        self._months: Dict[int, MonthRecord] = {1: MonthRecord(month=1, salary=paycheck)}

    def _fmt(self, amount: int) -> str:
        return format_amount(amount, self.config.currency)

    def _update_month(self, **changes) -> None:
        self._months[self.month] = replace(self._months[self.month], **changes)

    # --- month cycle

    def advance_month(self) -> Either[dict, BudgetSnapshot]:
        if self.game_over:
            logger.info("advance ignored: year already complete")
            return failure(ALREADY_COMPLETE, "The year is already complete")

        if not self.has_shopped_this_month:
            self.ledger.record(
                f"Month {self.month}: Finish this month's shopping before moving on", 0
            )
            logger.info("advance rejected in month %d: no checkout yet", self.month)
            return failure(
                SHOPPING_REQUIRED,
                f"Complete shopping for month {self.month} first",
                month=self.month,
            )

        if self.month == self.config.months:
            self.game_over = True
            self.ledger.record("🎉 Year complete! See final summary below.", 0)
            logger.info("year complete: needs=%d wants=%d savings=%d",
                        self.needs, self.wants, self.savings)
            snapshot = self.get_state()
            self.bus.publish(GAME_COMPLETED, {"state": snapshot})
            return Right(snapshot)

        next_month = self.month + 1
        paycheck = self.config.paycheck
        self.wealth += paycheck
        self.total_income += paycheck
        self.ledger.record(
            f"Month {next_month}: Received salary of {self._fmt(paycheck)}", paycheck
        )

        event = None
        applied = 0
        if self.config.is_quarterly(next_month):
            event = self.random_source.pick(self.config.events)
            # a loss can take wealth to zero but never below it
            applied = max(event.change, -self.wealth)
            self.wealth += applied
            self.total_income += applied
            self.ledger.record(f"Month {next_month}: {event.name}", applied)
            logger.debug("quarterly event %r applied %d", event.name, applied)

        self.has_shopped_this_month = False
        self.month = next_month
        self.cart.clear()
        self._months[next_month] = MonthRecord(
            month=next_month,
            salary=paycheck,
            event=replace(event, change=applied) if event else None,
        )
        logger.info("advanced to month %d, wealth=%d", self.month, self.wealth)

        snapshot = self.get_state()
        self.bus.publish(MONTH_ADVANCED, {"month": next_month, "state": snapshot})
        if event is not None:
            self.bus.publish(QUARTERLY_EVENT, {
                "month": next_month, "name": event.name, "change": applied,
            })
        return Right(snapshot)

    # --- shopping

    def open_shopping(self, prefill_recurring: bool = True) -> Cart:
        self.cart.clear()
        if prefill_recurring:
            self.cart.prefill_recurring(self.catalog)
        return self.cart

    def commit_checkout(self, cart: Optional[CartInput] = None) -> Either[dict, CheckoutSummary]:
        if cart is None:
            cart = self.cart
        if self.game_over:
            return failure(ALREADY_COMPLETE, "The year is already complete")

        quantities = cart.as_dict() if isinstance(cart, Cart) else dict(cart)
        resolved = resolve_cart(quantities, self.catalog, self.wealth)
        if resolved.is_left():
            error = resolved.get_error()
            if error["error"] == INSUFFICIENT_FUNDS:
                self.ledger.record(
                    f"Month {self.month}: Not enough wealth for this cart, "
                    f"short by {self._fmt(error['deficit'])}", 0
                )
            logger.info("checkout rejected in month %d: %s", self.month, error["error"])
            return resolved

        resolution = resolved.get()
        result = resolution.summary
        self.needs += result.spent_needs
        self.wants += result.spent_wants
        self.savings += result.leftover
        self.wealth = 0
        for line in resolution.lines:
            self.ledger.record(
                f"Month {self.month}: Bought {line.quantity} × {line.item.name}", -line.cost
            )
        self.ledger.record(
            f"Month {self.month}: Spent {self._fmt(result.spent_needs)} on needs, "
            f"{self._fmt(result.spent_wants)} on wants and saved {self._fmt(result.leftover)}",
            0,
        )
        self.has_shopped_this_month = True
        record = self._months[self.month]
        self._update_month(
            needs=record.needs + result.spent_needs,
            wants=record.wants + result.spent_wants,
            savings=record.savings + result.leftover,
        )
        items = {line.item.id: line.quantity for line in resolution.lines}
        self.cart.clear()
        if isinstance(cart, Cart):
            cart.clear()
        logger.info("checkout committed in month %d: needs=%d wants=%d saved=%d",
                    self.month, result.spent_needs, result.spent_wants, result.leftover)

        self.bus.publish(CHECKOUT_COMMITTED, {
            "month": self.month,
            "spent_needs": result.spent_needs,
            "spent_wants": result.spent_wants,
            "leftover": result.leftover,
            "items": items,
        })
        return Right(result)

    def cancel_checkout(self, cart: Optional[Cart] = None) -> None:
        self.cart.clear()
        if cart is not None:
            cart.clear()

    # --- direct allocation

    def allocate(self, category: str, amount: int) -> Either[dict, BudgetSnapshot]:
        if self.game_over:
            return failure(ALREADY_COMPLETE, "The year is already complete")
        if category not in ALLOCATION_TARGETS:
            return failure(
                UNKNOWN_CATEGORY,
                f"Cannot allocate to {category!r}; expected one of {', '.join(ALLOCATION_TARGETS)}",
                category=category,
            )
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            return failure(INVALID_AMOUNT, f"Allocation must be a positive whole amount, got {amount!r}",
                           amount=amount)

        if self.wealth < amount:
            deficit = amount - self.wealth
            self.ledger.record(
                f"Not enough wealth to allocate {self._fmt(amount)} to {category}, "
                f"short by {self._fmt(deficit)}", 0
            )
            logger.info("allocation of %d to %s rejected, short by %d", amount, category, deficit)
            return failure(
                INSUFFICIENT_FUNDS,
                f"Allocating {amount} needs {deficit} more than is available",
                required=amount,
                available=self.wealth,
                deficit=deficit,
            )

        self.wealth -= amount
        setattr(self, category, getattr(self, category) + amount)
        record = self._months[self.month]
        self._update_month(**{category: getattr(record, category) + amount})
        self.ledger.record(f"Allocated {self._fmt(amount)} to {category}", -amount)
        logger.info("allocated %d to %s", amount, category)
        return Right(self.get_state())

    # --- lifecycle and queries

    def restart(self) -> None:
        self._reset()
        logger.info("game restarted")
        self.bus.publish(GAME_RESTARTED, {"state": self.get_state()})

    def get_state(self) -> BudgetSnapshot:
        return BudgetSnapshot(
            wealth=self.wealth,
            needs=self.needs,
            wants=self.wants,
            savings=self.savings,
            month=self.month,
            has_shopped_this_month=self.has_shopped_this_month,
            game_over=self.game_over,
            total_income=self.total_income,
        )

    def get_ledger(self) -> Tuple[LogEntry, ...]:
        return self.ledger.entries

    def history(self) -> Tuple[MonthRecord, ...]:
        return tuple(self._months[m] for m in sorted(self._months))

    def classify_summary(self) -> SummaryResult:
        return summary.classify_summary(
            self.needs, self.wants, self.savings, self.config.total_income
        )

    @property
    def allocated(self) -> int:
        return self.needs + self.wants + self.savings

    @property
    def shopping_open(self) -> bool:
        return not self.game_over and not self.has_shopped_this_month
