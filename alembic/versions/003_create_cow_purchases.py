"""003: create cow_purchases + cow_purchase_members tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE cow_purchases (
            id              VARCHAR(32)     PRIMARY KEY,
            date            TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            amount          NUMERIC(16, 2)  NOT NULL,
            notes           TEXT            NOT NULL DEFAULT '',
            receipt_image   VARCHAR(512),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_cow_purchases_amount_positive CHECK (amount >= 1)
        );
    """)
    op.execute("CREATE INDEX idx_cow_purchases_date ON cow_purchases (date DESC);")
    op.execute("""
        CREATE TRIGGER trg_cow_purchases_updated_at
            BEFORE UPDATE ON cow_purchases
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)

    # Participants: ordered set. Deleting a member drops it from every purchase.
    op.execute("""
        CREATE TABLE cow_purchase_members (
            cow_purchase_id VARCHAR(32)     NOT NULL
                                            REFERENCES cow_purchases (id) ON DELETE CASCADE,
            member_id       VARCHAR(32)     NOT NULL
                                            REFERENCES members (id) ON DELETE CASCADE,
            position        INTEGER         NOT NULL,
            PRIMARY KEY (cow_purchase_id, member_id)
        );
    """)
    op.execute("CREATE INDEX idx_cow_purchase_members_member ON cow_purchase_members (member_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cow_purchase_members CASCADE;")
    op.execute("DROP TABLE IF EXISTS cow_purchases CASCADE;")
