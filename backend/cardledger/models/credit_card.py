from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, func, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cardledger.db.base import Base

if TYPE_CHECKING:
    from cardledger.models.balance_history import BalanceHistory

class CreditCard(Base):
    __tablename__ = "credit_cards"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # back-pointer for owner lookups only; User.cards owns the lifetime
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    issuance_bank: Mapped[str | None] = mapped_column(String(128), nullable=True)
    number: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())

    balance_history: Mapped[list[BalanceHistory]] = relationship(
        "BalanceHistory",
        cascade="all, delete-orphan",
        order_by="BalanceHistory.date",
    )
