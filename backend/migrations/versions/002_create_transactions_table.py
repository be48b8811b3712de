"""Create transactions table.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        sa.CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("idx_transactions_user_date", "transactions", ["user_id", sa.text("date DESC")])
    op.create_index("idx_transactions_user_type", "transactions", ["user_id", "type"])
    op.create_index("idx_transactions_user_category", "transactions", ["user_id", "category"])


def downgrade() -> None:
    op.drop_index("idx_transactions_user_category", table_name="transactions")
    op.drop_index("idx_transactions_user_type", table_name="transactions")
    op.drop_index("idx_transactions_user_date", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
