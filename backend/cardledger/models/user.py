from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cardledger.db.base import Base

if TYPE_CHECKING:
    from cardledger.models.credit_card import CreditCard

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128))
    email: Mapped[str] = mapped_column(String(255), index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())

    cards: Mapped[list[CreditCard]] = relationship(
        "CreditCard",
        cascade="all, delete-orphan",
        order_by="CreditCard.id",
    )
