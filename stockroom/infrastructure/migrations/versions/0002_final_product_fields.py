"""Categories, brands, profit margin and unit price

Revision ID: 0002_final_product_fields
Revises: 0001_owner_columns
Create Date: 2025-06-16 09:00:00

"""
from typing import Sequence, Union

import structlog
from alembic import op
import sqlalchemy as sa

logger = structlog.get_logger(__name__)

# Revision identifiers used by Alembic
revision: str = "0002_final_product_fields"
down_revision: Union[str, Sequence[str], None] = "0001_owner_columns"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _additions():
    # (table, column, referenced table or None)
    return [
        ("products", sa.Column("category_id", sa.Integer(), nullable=True), "categories"),
        ("products", sa.Column("brand_id", sa.Integer(), nullable=True), "brands"),
        ("final_products", sa.Column("category_id", sa.Integer(), nullable=True), "categories"),
        (
            "final_products",
            sa.Column("profit_margin", sa.Numeric(7, 2), nullable=False, server_default=sa.text("0")),
            None,
        ),
        (
            "components",
            sa.Column("unit_price", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
            None,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    insp = sa.inspect(bind)

    for table, column, referred in _additions():
        if not insp.has_table(table):
            continue
        if column.name in {col["name"] for col in insp.get_columns(table)}:
            continue

        op.add_column(table, column)
        # SQLite cannot add a constraint to an existing table
        if referred and bind.dialect.name != "sqlite":
            op.create_foreign_key(
                f"fk_{table}_{column.name}", table, referred, [column.name], ["id"]
            )
        logger.info("Column added", table=table, column=column.name)

        if (table, column.name) == ("components", "unit_price"):
            bind.execute(
                sa.text(
                    "UPDATE components SET unit_price = ROUND(total_price * 1.0 / total_meters, 2) "
                    "WHERE total_meters > 0"
                )
            )


def downgrade() -> None:
    """Downgrade schema."""
    raise NotImplementedError("0002_final_product_fields is irreversible")
