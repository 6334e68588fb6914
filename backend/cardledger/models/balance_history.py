from sqlalchemy import Integer, Date, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from cardledger.db.base import Base

class BalanceHistory(Base):
    __tablename__ = "balance_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    card_id: Mapped[int] = mapped_column(ForeignKey("credit_cards.id", ondelete="CASCADE"), index=True)
    date: Mapped[Date] = mapped_column(Date, index=True)
    balance: Mapped[float] = mapped_column(Numeric(14, 2))

    __table_args__ = (
        UniqueConstraint("card_id", "date", name="uq_balance_history_card_date"),
    )
