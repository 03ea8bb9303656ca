"""001: shared updated_at trigger function + members table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE members (
            id              VARCHAR(32)     PRIMARY KEY,
            name            VARCHAR(200)    NOT NULL,
            phone_number    VARCHAR(200)    NOT NULL,
            is_active       BOOLEAN         NOT NULL DEFAULT TRUE,
            join_date       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_members_name_not_blank  CHECK (LENGTH(TRIM(name)) > 0),
            CONSTRAINT ck_members_phone_not_blank CHECK (LENGTH(TRIM(phone_number)) > 0)
        );
    """)
    op.execute("CREATE INDEX idx_members_name ON members (name);")
    op.execute("""
        CREATE TRIGGER trg_members_updated_at
            BEFORE UPDATE ON members
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS members CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
