from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from cardledger.services.balance_ledger import BalanceRecord, Ledger

ONE_DAY = timedelta(days=1)


def fill_between(ledger: Ledger, anchor: BalanceRecord, end: date) -> int:
    """Carry ``anchor.amount`` into every missing day after ``anchor.date`` up to ``end``."""
    added = 0
    day = anchor.date + ONE_DAY
    while day <= end:
        if day not in ledger:
            ledger.upsert(day, anchor.amount)
            added += 1
        day = day + ONE_DAY
    return added


def fill_forward(ledger: Ledger, target: date) -> int:
    latest = ledger.latest_date()
    if latest is None or target <= latest:
        return 0
    return fill_between(ledger, BalanceRecord(latest, ledger.get(latest)), target)


def fill_backward(ledger: Ledger, start: date, amount: Decimal) -> int:
    """Insert ``amount`` for ``start`` up to, not including, the earliest date."""
    earliest = ledger.earliest_date()
    if earliest is None or start >= earliest:
        return 0
    added = 0
    day = start
    while day < earliest:
        ledger.upsert(day, amount)
        added += 1
        day = day + ONE_DAY
    return added
