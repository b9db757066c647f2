"""Run the Alembic revisions under `migrations/` against an engine.

Used at API startup and by `scripts/migrate.py`; `alembic upgrade head` from the
repository root runs the same revisions through `alembic.ini`.
"""

import os
from typing import List, Optional

import structlog
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection, Engine

logger = structlog.get_logger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "migrations")


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", MIGRATIONS_DIR)
    return config


def current_revision(connection: Connection) -> Optional[str]:
    return MigrationContext.configure(connection).get_current_revision()


def revisions_between(config: Config, lower: Optional[str], upper: Optional[str]) -> List[str]:
    """Revision ids after `lower` up to and including `upper`, oldest first."""
    if upper is None or lower == upper:
        return []
    script = ScriptDirectory.from_config(config)
    newest_first = [rev.revision for rev in script.iterate_revisions(upper, lower or "base")]
    return list(reversed(newest_first))


def run_migrations(engine: Engine) -> List[str]:
    """Upgrade to head in one transaction; returns the revisions applied by this call."""
    config = alembic_config()
    with engine.begin() as connection:
        before = current_revision(connection)
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
        after = current_revision(connection)

    applied = revisions_between(config, before, after)
    if applied:
        logger.info("Migrations applied", revisions=applied, head=after)
    return applied
