import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockroom.infrastructure.database import Base, get_db
from stockroom.main import app

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers():
    return {"X-User-Id": TENANT_A}


@pytest.fixture
def other_headers():
    return {"X-User-Id": TENANT_B}


@pytest.fixture
def make_product(client, headers):
    counter = itertools.count(1)

    def _make(request_headers=None, **overrides):
        n = next(counter)
        body = {
            "name": f"Marble slab {n}",
            "barcode": f"MRB-{n:03d}",
            "price_per_square_meter": "10.00",
            "square_meters": "100",
        }
        body.update(overrides)
        resp = client.post("/api/products", json=body, headers=request_headers or headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_final_product(client, headers):
    counter = itertools.count(1)

    def _make(components, request_headers=None, **overrides):
        n = next(counter)
        body = {"name": f"Kitchen top {n}", "code": f"FP-{n:03d}", "components": components}
        body.update(overrides)
        resp = client.post("/api/final-products", json=body, headers=request_headers or headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
