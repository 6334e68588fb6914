from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cardledger.core.errors import CardExists, CardNotFound, UserNotFound
from cardledger.models.balance_history import BalanceHistory
from cardledger.models.credit_card import CreditCard
from cardledger.models.user import User
from cardledger.services.balance_ledger import Ledger, to_dec

logger = logging.getLogger(__name__)


def find_card_by_number(s: Session, number: str) -> CreditCard | None:
    return s.execute(select(CreditCard).where(CreditCard.number == number)).scalar_one_or_none()


def require_card(s: Session, number: str) -> CreditCard:
    card = find_card_by_number(s, number)
    if card is None:
        raise CardNotFound(number)
    return card


def load_ledger(card: CreditCard) -> Ledger:
    return Ledger.from_records((row.date, to_dec(row.balance)) for row in card.balance_history)


def save_ledger(s: Session, card: CreditCard, ledger: Ledger) -> int:
    """Write ``ledger`` back onto the card's rows and commit.

    Existing rows are updated in place, missing dates are added. Rows are never
    removed here. Returns the number of rows touched.
    """
    by_day = {row.date: row for row in card.balance_history}
    touched = 0
    for rec in ledger.records():
        row = by_day.get(rec.date)
        if row is None:
            card.balance_history.append(BalanceHistory(date=rec.date, balance=rec.amount))
            touched += 1
        elif to_dec(row.balance) != rec.amount:
            row.balance = rec.amount
            touched += 1
    try:
        s.add(card)
        s.commit()
    except Exception:
        s.rollback()
        raise
    return touched


def create_user(s: Session, name: str, email: str) -> User:
    user = User(name=name, email=email)
    s.add(user)
    s.commit()
    s.refresh(user)
    logger.info("user created id=%s", user.id)
    return user


def delete_user(s: Session, user_id: int) -> None:
    user = s.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if user is None:
        raise UserNotFound(user_id)
    s.delete(user)
    s.commit()
    logger.info("user deleted id=%s", user_id)


def add_card_to_user(s: Session, user_id: int, number: str, issuance_bank: str | None = None) -> CreditCard:
    user = s.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if user is None:
        raise UserNotFound(user_id)
    card = CreditCard(number=number, issuance_bank=issuance_bank)
    user.cards.append(card)
    try:
        s.commit()
    except IntegrityError:
        # number taken by a concurrent request after the caller checked it
        s.rollback()
        raise CardExists(number)
    s.refresh(card)
    logger.info("card %s attached to user id=%s", card.id, user_id)
    return card


def cards_of_user(s: Session, user_id: int) -> list[CreditCard]:
    return list(
        s.execute(select(CreditCard).where(CreditCard.user_id == user_id).order_by(CreditCard.id.asc()))
        .scalars()
        .all()
    )


def user_id_for_card(s: Session, number: str) -> int:
    return require_card(s, number).user_id
