from budget_game.domain import LogEntry
from budget_game.ledger import Ledger, add_entry, describe_change, format_amount


def test_describe_change():
    assert describe_change(10000) == "Wealth increased by ₹10,000"
    assert describe_change(-3000) == "Wealth decreased by ₹3,000"
    assert describe_change(0) == ""
    assert format_amount(2500, "$") == "$2,500"


def test_record_is_newest_first():
    ledger = Ledger()
    ledger.record("Salary", 10000)
    ledger.record("Rent", -3000)
    ledger.record("Note")

    messages = [e.message for e in ledger]
    assert messages == [
        "Note",
        "Rent — Wealth decreased by ₹3,000",
        "Salary — Wealth increased by ₹10,000",
    ]
    assert ledger.entries[0].change == 0
    assert len(ledger) == 3


def test_entries_are_not_mutated_by_later_records():
    ledger = Ledger()
    ledger.record("Salary", 10000)
    snapshot = ledger.entries
    ledger.record("Rent", -3000)

    assert len(snapshot) == 1
    assert len(ledger.entries) == 2


def test_add_entry_returns_new_tuple():
    e1 = LogEntry("a", 1)
    e2 = LogEntry("b", 2)
    entries = (e1,)
    new_entries = add_entry(entries, e2)
    assert new_entries == (e2, e1)
    assert entries == (e1,)
