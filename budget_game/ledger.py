from typing import Iterator, Tuple

from budget_game.config import CURRENCY
from budget_game.domain import LogEntry


def format_amount(amount: int, currency: str = CURRENCY) -> str:
    return f"{currency}{amount:,}"


def describe_change(change: int, currency: str = CURRENCY) -> str:
    if change > 0:
        return f"Wealth increased by {format_amount(change, currency)}"
    if change < 0:
        return f"Wealth decreased by {format_amount(abs(change), currency)}"
    return ""


def add_entry(entries: Tuple[LogEntry, ...], entry: LogEntry) -> Tuple[LogEntry, ...]:
    return (entry,) + entries


class Ledger:
    """Append-only activity log, newest entry first.

    Entries are never edited or removed; the only way to empty a ledger is to
    build a new one.
    """

    def __init__(self, currency: str = CURRENCY):
        self.currency = currency
        self._entries: Tuple[LogEntry, ...] = ()

    def record(self, message: str, change: int = 0) -> LogEntry:
        suffix = describe_change(change, self.currency)
        text = f"{message} — {suffix}" if suffix else message
        entry = LogEntry(message=text, change=change)
        self._entries = add_entry(self._entries, entry)
        return entry

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)
