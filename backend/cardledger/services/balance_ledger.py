from __future__ import annotations

from bisect import bisect_left, bisect_right, insort
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

Q2 = Decimal("0.01")


def d2(x: Decimal) -> Decimal:
    return x.quantize(Q2, rounding=ROUND_HALF_UP)


def to_dec(v) -> Decimal:
    return d2(Decimal(str(v)))


@dataclass(frozen=True)
class BalanceRecord:
    date: date
    amount: Decimal


class Ledger:
    """Date-indexed balances for one card.

    Dates are kept in an ascending list alongside a date -> amount map, so
    exact lookups are O(1) and closest-previous lookups are a bisect.
    Sortedness is maintained on insert; nothing is re-sorted afterwards.
    """

    def __init__(self) -> None:
        self._dates: list[date] = []
        self._amounts: dict[date, Decimal] = {}

    @classmethod
    def from_records(cls, records: Iterable[BalanceRecord | tuple[date, Decimal]]) -> Ledger:
        ledger = cls()
        for r in records:
            day, amount = (r.date, r.amount) if isinstance(r, BalanceRecord) else r
            ledger.upsert(day, amount)
        return ledger

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, day: date) -> bool:
        return day in self._amounts

    def get(self, day: date) -> Decimal | None:
        return self._amounts.get(day)

    def closest_previous(self, day: date) -> BalanceRecord | None:
        i = bisect_right(self._dates, day)
        if i == 0:
            return None
        found = self._dates[i - 1]
        return BalanceRecord(found, self._amounts[found])

    def upsert(self, day: date, amount) -> None:
        if day not in self._amounts:
            insort(self._dates, day)
        self._amounts[day] = to_dec(amount)

    def earliest_date(self) -> date | None:
        return self._dates[0] if self._dates else None

    def latest_date(self) -> date | None:
        return self._dates[-1] if self._dates else None

    def dates_after(self, day: date) -> list[date]:
        return self._dates[bisect_right(self._dates, day):]

    def dates_between(self, start: date | None = None, end: date | None = None) -> list[date]:
        lo = 0 if start is None else bisect_left(self._dates, start)
        hi = len(self._dates) if end is None else bisect_right(self._dates, end)
        return self._dates[lo:hi]

    def records(self) -> list[BalanceRecord]:
        """Chronological order, earliest first."""
        return [BalanceRecord(d, self._amounts[d]) for d in self._dates]

    def history(self) -> list[BalanceRecord]:
        """Most recent first; the order the API returns."""
        return [BalanceRecord(d, self._amounts[d]) for d in reversed(self._dates)]

    def is_contiguous(self) -> bool:
        # dates are unique, so a span equal to the count means no gaps
        if not self._dates:
            return True
        return (self._dates[-1] - self._dates[0]).days + 1 == len(self._dates)
