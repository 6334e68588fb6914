"""users, credit cards and balance history

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=False)

    op.create_table(
        "credit_cards",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("issuance_bank", sa.String(length=128), nullable=True),
        sa.Column("number", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_index("ix_credit_cards_user_id", "credit_cards", ["user_id"], unique=False)
    op.create_index("ix_credit_cards_number", "credit_cards", ["number"], unique=True)

    op.create_table(
        "balance_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("card_id", sa.Integer(), sa.ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("balance", sa.Numeric(14, 2), nullable=False),
        sa.UniqueConstraint("card_id", "date", name="uq_balance_history_card_date"),
    )
    op.create_index("ix_balance_history_card_id", "balance_history", ["card_id"], unique=False)
    op.create_index("ix_balance_history_date", "balance_history", ["date"], unique=False)

def downgrade():
    op.drop_index("ix_balance_history_date", table_name="balance_history")
    op.drop_index("ix_balance_history_card_id", table_name="balance_history")
    op.drop_table("balance_history")

    op.drop_index("ix_credit_cards_number", table_name="credit_cards")
    op.drop_index("ix_credit_cards_user_id", table_name="credit_cards")
    op.drop_table("credit_cards")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
