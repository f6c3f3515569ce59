from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

from budget_game.domain import NEED, WANT, CatalogItem, CheckoutSummary
from budget_game.functional import (
    EMPTY_CART, INSUFFICIENT_FUNDS, INVALID_QUANTITY, UNKNOWN_ITEM,
    Either, Right, failure,
)
from budget_game.catalog import find_item, recurring_items


@dataclass(frozen=True)
class CartLine:
    item: CatalogItem
    quantity: int

    @property
    def cost(self) -> int:
        return self.item.price * self.quantity


@dataclass(frozen=True)
class Resolution:
    lines: Tuple[CartLine, ...]
    summary: CheckoutSummary


class Cart:
    """Item id -> requested quantity for one shopping session."""

    def __init__(self, quantities: Mapping[str, int] | None = None):
        self._quantities: Dict[str, int] = {}
        for item_id, qty in (quantities or {}).items():
            self.set_quantity(item_id, qty)

    def set_quantity(self, item_id: str, quantity: int) -> None:
        if quantity < 0:
            raise ValueError(f"Quantity for {item_id} cannot be negative: {quantity}")
        if quantity == 0:
            self._quantities.pop(item_id, None)
        else:
            self._quantities[item_id] = quantity

    def add(self, item_id: str, quantity: int = 1) -> None:
        self.set_quantity(item_id, self.quantity(item_id) + quantity)

    def remove(self, item_id: str, quantity: int = 1) -> None:
        self.set_quantity(item_id, max(0, self.quantity(item_id) - quantity))

    def quantity(self, item_id: str) -> int:
        return self._quantities.get(item_id, 0)

    def prefill_recurring(self, catalog: Iterable[CatalogItem]) -> None:
        for item in recurring_items(catalog):
            if self.quantity(item.id) == 0:
                self.set_quantity(item.id, 1)

    def clear(self) -> None:
        self._quantities = {}

    def as_dict(self) -> Dict[str, int]:
        return dict(self._quantities)

    def is_empty(self) -> bool:
        return not self._quantities

    def __len__(self) -> int:
        return len(self._quantities)

    def __repr__(self) -> str:
        return f"Cart({self._quantities!r})"


def cart_lines(
    quantities: Mapping[str, int], catalog: Tuple[CatalogItem, ...]
) -> Either[dict, Tuple[CartLine, ...]]:
    """Match a cart against the catalog, keeping catalog order and dropping zero rows."""
    for item_id, qty in quantities.items():
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
            return failure(
                INVALID_QUANTITY,
                f"Quantity for {item_id} must be a non-negative integer, got {qty!r}",
                item_id=item_id,
                quantity=qty,
            )
        if find_item(catalog, item_id) is None:
            return failure(UNKNOWN_ITEM, f"No catalog item with id {item_id}", item_id=item_id)

    return Right(tuple(
        CartLine(item, quantities[item.id])
        for item in catalog
        if quantities.get(item.id, 0) > 0
    ))


def summarize(lines: Tuple[CartLine, ...], wealth: int) -> CheckoutSummary:
    spent_needs = sum(l.cost for l in lines if l.item.category == NEED)
    spent_wants = sum(l.cost for l in lines if l.item.category == WANT)
    return CheckoutSummary(
        spent_needs=spent_needs,
        spent_wants=spent_wants,
        leftover=wealth - spent_needs - spent_wants,
    )


def check_affordable(lines: Tuple[CartLine, ...], wealth: int) -> Either[dict, Resolution]:
    summary = summarize(lines, wealth)
    if summary.total_spent <= 0:
        return failure(EMPTY_CART, "Cart is empty, nothing to check out")
    if summary.total_spent > wealth:
        return failure(
            INSUFFICIENT_FUNDS,
            f"Cart costs {summary.total_spent} but only {wealth} is available",
            required=summary.total_spent,
            available=wealth,
            deficit=summary.total_spent - wealth,
        )
    return Right(Resolution(lines=lines, summary=summary))


def resolve_cart(
    quantities: Mapping[str, int], catalog: Tuple[CatalogItem, ...], wealth: int
) -> Either[dict, Resolution]:
    """Price a cart against the available wealth without touching any state."""
    return cart_lines(quantities, catalog).bind(lambda lines: check_affordable(lines, wealth))
