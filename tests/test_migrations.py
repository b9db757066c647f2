import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from stockroom.infrastructure.database import Base
from stockroom.infrastructure.migrator import run_migrations

LEGACY_OWNER = "migrated-legacy-data"
REVISIONS = ["0001_owner_columns", "0002_final_product_fields"]


@pytest.fixture
def bare_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def _legacy_schema(engine):
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE products (id INTEGER PRIMARY KEY, name VARCHAR(255), barcode VARCHAR(255), "
            "price_per_square_meter NUMERIC(14, 2), square_meters NUMERIC(14, 4))"
        ))
        conn.execute(text(
            "CREATE TABLE final_products (id INTEGER PRIMARY KEY, name VARCHAR(255), code VARCHAR(255), "
            "status VARCHAR(20))"
        ))
        conn.execute(text(
            "CREATE TABLE components (id INTEGER PRIMARY KEY, final_product_id INTEGER, product_id INTEGER, "
            "total_meters NUMERIC(14, 4), total_price NUMERIC(14, 2))"
        ))
        conn.execute(text("INSERT INTO products (id, name, barcode) VALUES (1, 'Legacy slab', 'L-1')"))
        conn.execute(text("INSERT INTO final_products (id, name, code, status) VALUES (1, 'Legacy top', 'LT', 'pending')"))
        conn.execute(text(
            "INSERT INTO components (id, final_product_id, product_id, total_meters, total_price) "
            "VALUES (1, 1, 1, 4, 40)"
        ))


def test_legacy_rows_get_the_sentinel_owner(bare_engine):
    _legacy_schema(bare_engine)

    applied = run_migrations(bare_engine)

    assert applied == REVISIONS
    with bare_engine.connect() as conn:
        assert conn.execute(text("SELECT user_id FROM products")).scalar() == LEGACY_OWNER
        assert conn.execute(text("SELECT user_id FROM final_products")).scalar() == LEGACY_OWNER
        assert conn.execute(text("SELECT user_id FROM components")).scalar() == LEGACY_OWNER


def test_missing_columns_are_added_and_backfilled(bare_engine):
    _legacy_schema(bare_engine)

    run_migrations(bare_engine)

    columns = {c["name"] for c in inspect(bare_engine).get_columns("final_products")}
    assert {"profit_margin", "category_id", "user_id"} <= columns
    with bare_engine.connect() as conn:
        assert conn.execute(text("SELECT profit_margin FROM final_products")).scalar() == 0
        assert conn.execute(text("SELECT unit_price FROM components")).scalar() == 10


def test_migrations_run_once(bare_engine):
    _legacy_schema(bare_engine)
    run_migrations(bare_engine)

    assert run_migrations(bare_engine) == []
    with bare_engine.connect() as conn:
        head = conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
    assert head == REVISIONS[-1]


def test_fresh_schema_is_left_untouched(bare_engine):
    Base.metadata.create_all(bind=bare_engine)
    before = {c["name"] for c in inspect(bare_engine).get_columns("final_products")}

    run_migrations(bare_engine)

    after = {c["name"] for c in inspect(bare_engine).get_columns("final_products")}
    assert before == after


def test_owner_column_is_indexed_on_legacy_tables(bare_engine):
    _legacy_schema(bare_engine)

    run_migrations(bare_engine)

    indexes = {ix["name"] for ix in inspect(bare_engine).get_indexes("products")}
    assert "ix_products_user_id" in indexes


def test_fresh_schema_is_stamped_at_head(bare_engine):
    Base.metadata.create_all(bind=bare_engine)

    assert run_migrations(bare_engine) == REVISIONS
    assert run_migrations(bare_engine) == []
