"""Apply pending schema migrations without starting the API.

    python -m scripts.migrate

Same revisions as `alembic upgrade head`; the tables are created first.
"""

from stockroom.core.logging import configure_logging
from stockroom.infrastructure.database import Base, engine
from stockroom.infrastructure.migrator import run_migrations

# Register every table on Base.metadata
import stockroom.main  # noqa: F401


def migrate():
    configure_logging()
    Base.metadata.create_all(bind=engine)
    applied = run_migrations(engine)
    print(f"Applied migrations: {', '.join(applied) if applied else 'none (up to date)'}")


if __name__ == "__main__":
    migrate()
