"""Scope every table by owner (user_id)

Revision ID: 0001_owner_columns
Revises:
Create Date: 2025-06-02 09:00:00

Tables created before tenancy get a `user_id` column. Existing rows are handed
to a sentinel owner that no real tenant uses, then the column is tightened to
NOT NULL and indexed.
"""
from typing import Sequence, Union

import structlog
from alembic import op
import sqlalchemy as sa

logger = structlog.get_logger(__name__)

# Revision identifiers used by Alembic
revision: str = "0001_owner_columns"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEGACY_OWNER = "migrated-legacy-data"

TENANT_TABLES = [
    "products",
    "categories",
    "brands",
    "final_products",
    "clients",
    "currencies",
    "components",
]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    insp = sa.inspect(bind)

    for table in TENANT_TABLES:
        if not insp.has_table(table):
            logger.info("Table missing, left to create_all", table=table)
            continue

        columns = {col["name"]: col for col in insp.get_columns(table)}
        if "user_id" in columns and not columns["user_id"]["nullable"]:
            continue

        if "user_id" not in columns:
            op.add_column(table, sa.Column("user_id", sa.String(255), nullable=True))

        backfilled = bind.execute(
            sa.text(f"UPDATE {table} SET user_id = :owner WHERE user_id IS NULL"),
            {"owner": LEGACY_OWNER},
        ).rowcount

        if bind.dialect.name == "sqlite":
            # SQLite cannot ALTER COLUMN; the ORM still never writes NULL owners
            logger.warning("NOT NULL not enforced on SQLite", table=table)
        else:
            op.alter_column(table, "user_id", existing_type=sa.String(255), nullable=False)

        index_name = f"ix_{table}_user_id"
        if index_name not in {ix["name"] for ix in insp.get_indexes(table)}:
            op.create_index(index_name, table, ["user_id"], unique=False)

        logger.info("Owner column migrated", table=table, backfilled_rows=backfilled)


def downgrade() -> None:
    """Downgrade schema."""
    # Legacy rows cannot be told apart from tenant rows once owned
    raise NotImplementedError("0001_owner_columns is irreversible")
