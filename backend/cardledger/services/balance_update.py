from __future__ import annotations

import logging
import threading
import weakref
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Literal, Optional

from sqlalchemy.orm import Session

from cardledger.core.errors import CardNotFound, InvalidDate
from cardledger.services.balance_ledger import BalanceRecord, Ledger, to_dec
from cardledger.services.cards import find_card_by_number, load_ledger, require_card, save_ledger
from cardledger.services.gap_fill import fill_backward, fill_between, fill_forward

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
UPDATE_FAILED = "update_failed"


@dataclass(frozen=True)
class Correction:
    date: date
    previous: Decimal
    balance: Decimal
    delta: Decimal
    propagated: int = 0


@dataclass(frozen=True)
class BalanceUpdate:
    card_number: str
    date: Optional[date]
    balance: Decimal


@dataclass(frozen=True)
class UpdateOutcome:
    card_number: str
    status: Literal["success", "failure"]
    detail: str
    correction: Optional[Correction] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


_lock = threading.Lock()
# entries live only while some caller holds the lock object
_card_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()


@contextmanager
def card_lock(card_number: str) -> Iterator[None]:
    """Serialize load -> correct -> save for one card."""
    with _lock:
        lk = _card_locks.get(card_number)
        if lk is None:
            lk = threading.Lock()
            _card_locks[card_number] = lk
    with lk:
        yield


def _check_date(day: date | None, today: date) -> date:
    if day is None:
        raise InvalidDate()
    if day > today:
        raise InvalidDate(f"balance date {day} is after today ({today})", day=day)
    return day


def apply_correction(ledger: Ledger, day: date | None, balance, today: date) -> Correction:
    """Set the balance on ``day`` and shift every later balance by the change.

    The ledger is extended to ``today`` afterwards. A day with no record takes
    the closest previous balance as its old value; a day before all history
    takes zero, and the days up to the old earliest record are synthesized.
    """
    day = _check_date(day, today)
    new_balance = to_dec(balance)

    if len(ledger) == 0:
        ledger.upsert(day, new_balance)
        fill_forward(ledger, today)
        return Correction(day, ZERO, new_balance, new_balance)

    previous = ledger.get(day)
    if previous is None:
        anchor = ledger.closest_previous(day)
        if anchor is not None:
            fill_between(ledger, anchor, day)
            previous = anchor.amount
        else:
            fill_backward(ledger, day, ZERO)
            previous = ZERO

    delta = new_balance - previous
    ledger.upsert(day, new_balance)

    later = ledger.dates_after(day) if delta != 0 else []
    for d in later:
        ledger.upsert(d, ledger.get(d) + delta)

    fill_forward(ledger, today)
    return Correction(day, previous, new_balance, delta, len(later))


def _update_card(s: Session, card, day: date | None, balance, today: date) -> Correction:
    with card_lock(card.number):
        ledger = load_ledger(card)
        corr = apply_correction(ledger, day, balance, today)
        save_ledger(s, card, ledger)
    logger.info(
        "card %s balance on %s set to %s (was %s, delta %s, %d later days shifted)",
        card.number,
        corr.date,
        corr.balance,
        corr.previous,
        corr.delta,
        corr.propagated,
    )
    return corr


def apply_update(s: Session, card_number: str, day: date | None, balance, today: date) -> UpdateOutcome:
    card = find_card_by_number(s, card_number)
    if card is None:
        logger.info("balance update skipped, card %s not found", card_number)
        return UpdateOutcome(card_number, "failure", CardNotFound.code)
    corr = _update_card(s, card, day, balance, today)
    return UpdateOutcome(card_number, "success", "balance_updated", corr)


def apply_batch(s: Session, items: Iterable[BalanceUpdate], today: date) -> list[UpdateOutcome]:
    out: list[UpdateOutcome] = []
    for item in items:
        try:
            out.append(apply_update(s, item.card_number, item.date, item.balance, today))
        except InvalidDate as e:
            logger.info("balance update rejected for card %s: %s", item.card_number, e.message)
            out.append(UpdateOutcome(item.card_number, "failure", InvalidDate.code))
        except Exception:
            logger.exception("balance update failed for card %s", item.card_number)
            s.rollback()
            out.append(UpdateOutcome(item.card_number, "failure", UPDATE_FAILED))
    ok = sum(1 for o in out if o.ok)
    logger.info("balance batch done: %d ok, %d failed", ok, len(out) - ok)
    return out


def render_summary(outcomes: Iterable[UpdateOutcome]) -> str:
    parts: list[str] = []
    for o in outcomes:
        if o.ok:
            parts.append(f"Balance updated successfully for card number: {o.card_number}. ")
        elif o.detail == CardNotFound.code:
            parts.append(f"Credit card not found for number: {o.card_number}. ")
        elif o.detail == InvalidDate.code:
            parts.append(f"Invalid balance date for card number: {o.card_number}. ")
        else:
            parts.append(f"Balance update failed for card number: {o.card_number}. ")
    return "".join(parts)


def current_balance(s: Session, card_number: str, today: date) -> Decimal:
    # a ledger last touched on an earlier day still carries that balance
    return balance_on(s, card_number, today)


def balance_on(s: Session, card_number: str, day: date) -> Decimal:
    rec = load_ledger(require_card(s, card_number)).closest_previous(day)
    return rec.amount if rec is not None else ZERO


def history(
    s: Session,
    card_number: str,
    start: date | None = None,
    end: date | None = None,
) -> list[BalanceRecord]:
    ledger = load_ledger(require_card(s, card_number))
    if start is None and end is None:
        return ledger.history()
    return [BalanceRecord(d, ledger.get(d)) for d in reversed(ledger.dates_between(start, end))]
