"""002: create deposits table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ON DELETE RESTRICT backs up the "no delete while deposits exist" rule
    op.execute("""
        CREATE TABLE deposits (
            id              VARCHAR(32)     PRIMARY KEY,
            member_id       VARCHAR(32)     NOT NULL
                                            REFERENCES members (id) ON DELETE RESTRICT,
            amount          NUMERIC(16, 2)  NOT NULL,
            date            TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            status          VARCHAR(16)     NOT NULL DEFAULT 'approved',
            notes           TEXT            NOT NULL DEFAULT '',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_deposits_amount_positive CHECK (amount >= 1),
            CONSTRAINT ck_deposits_status CHECK (status IN ('pending', 'approved', 'rejected'))
        );
    """)
    op.execute("CREATE INDEX idx_deposits_member_id ON deposits (member_id);")
    op.execute("CREATE INDEX idx_deposits_date ON deposits (date DESC);")
    op.execute("""
        CREATE TRIGGER trg_deposits_updated_at
            BEFORE UPDATE ON deposits
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS deposits CASCADE;")
