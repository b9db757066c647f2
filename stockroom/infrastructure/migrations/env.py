"""Alembic environment for the Stockroom schema.

`Base.metadata.create_all` builds fresh databases with the current schema; the
revisions here only bring databases created by older releases up to date, so
each one inspects the live schema before altering it.
"""

from alembic import context
from sqlalchemy import create_engine, pool

from stockroom.config import get_settings
from stockroom.core.logging import configure_logging
from stockroom.infrastructure.database import Base

# Import all models so Base.metadata is complete
import stockroom.domain.models.brand  # noqa: F401
import stockroom.domain.models.category  # noqa: F401
import stockroom.domain.models.client  # noqa: F401
import stockroom.domain.models.currency  # noqa: F401
import stockroom.domain.models.final_product  # noqa: F401
import stockroom.domain.models.product  # noqa: F401

config = context.config

configure_logging()

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    raise RuntimeError("Stockroom revisions inspect the live schema; offline (--sql) mode is not supported")


def _run(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Use the caller's connection when one is shared (API startup, tests), else connect from settings."""
    connection = config.attributes.get("connection")
    if connection is not None:
        _run(connection)
        return

    url = config.get_main_option("sqlalchemy.url") or get_settings().database_url
    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _run(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
