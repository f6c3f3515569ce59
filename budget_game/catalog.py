from typing import Iterable, Optional, Tuple

from budget_game.domain import NEED, WANT, CatalogItem

CATALOG: Tuple[CatalogItem, ...] = (
    CatalogItem("rent", "Rent", 3000, NEED, recurring=True),
    CatalogItem("groceries", "Groceries", 1500, NEED, recurring=True),
    CatalogItem("utilities", "Electricity & Water", 800, NEED, recurring=True),
    CatalogItem("phone", "Phone Plan", 400, NEED, recurring=True),
    CatalogItem("transport", "Bus Pass", 600, NEED),
    CatalogItem("medicine", "Medicine", 500, NEED),
    CatalogItem("dining", "Dining Out", 700, WANT),
    CatalogItem("movie", "Movie Night", 300, WANT),
    CatalogItem("streaming", "Streaming Subscription", 200, WANT, recurring=True),
    CatalogItem("sneakers", "New Sneakers", 1200, WANT),
    CatalogItem("concert", "Concert Tickets", 1500, WANT),
    CatalogItem("gadget", "Wireless Earbuds", 2500, WANT),
)


def find_item(catalog: Iterable[CatalogItem], item_id: str) -> Optional[CatalogItem]:
    for item in catalog:
        if item.id == item_id:
            return item
    return None


def items_in(catalog: Iterable[CatalogItem], category: str) -> Tuple[CatalogItem, ...]:
    return tuple(filter(lambda i: i.category == category, catalog))


def recurring_items(catalog: Iterable[CatalogItem]) -> Tuple[CatalogItem, ...]:
    return tuple(filter(lambda i: i.recurring, catalog))
