"""Create users table for credential lookups"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None

_TOUCH_TRIGGER = "users_touch_updated_at"

_CREATE_TRIGGER_SQL = {
    "postgresql": [
        f"""
        CREATE OR REPLACE FUNCTION {_TOUCH_TRIGGER}()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
        """,
        f"""
        CREATE TRIGGER {_TOUCH_TRIGGER}
        BEFORE UPDATE ON users
        FOR EACH ROW
        EXECUTE FUNCTION {_TOUCH_TRIGGER}();
        """,
    ],
    "sqlite": [
        f"""
        CREATE TRIGGER {_TOUCH_TRIGGER}
        AFTER UPDATE ON users
        FOR EACH ROW
        WHEN NEW.updated_at = OLD.updated_at
        BEGIN
            UPDATE users SET updated_at = CURRENT_TIMESTAMP WHERE rowid = NEW.rowid;
        END;
        """,
    ],
}

_DROP_TRIGGER_SQL = {
    "postgresql": [
        f"DROP TRIGGER IF EXISTS {_TOUCH_TRIGGER} ON users",
        f"DROP FUNCTION IF EXISTS {_TOUCH_TRIGGER}()",
    ],
    "sqlite": [f"DROP TRIGGER IF EXISTS {_TOUCH_TRIGGER}"],
}


def _run_for_dialect(statements: dict[str, list[str]]) -> None:
    dialect = op.get_bind().dialect.name
    for statement in statements.get(dialect, []):
        op.execute(sa.text(statement))


def upgrade() -> None:
    timestamp = sa.DateTime(timezone=True)
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=512), nullable=False),
        sa.Column("created_at", timestamp, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", timestamp, server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    _run_for_dialect(_CREATE_TRIGGER_SQL)


def downgrade() -> None:
    _run_for_dialect(_DROP_TRIGGER_SQL)
    op.drop_table("users")
