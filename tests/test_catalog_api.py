from sqlalchemy.exc import IntegrityError

from stockroom.application.services.catalog_service import violates_unique
from stockroom.domain.models.category import Category
from stockroom.domain.models.product import Product


def test_category_crud(client, headers):
    created = client.post("/api/categories", json={"name": " Granite ", "description": "Hard stone"}, headers=headers)
    assert created.status_code == 201
    category = created.json()
    assert category["name"] == "Granite"

    updated = client.put(f"/api/categories/{category['id']}", json={"description": "Igneous"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "Granite"
    assert updated.json()["description"] == "Igneous"

    deleted = client.delete(f"/api/categories/{category['id']}", headers=headers)
    assert deleted.json() == {"message": "Category deleted successfully"}
    assert client.get(f"/api/categories/{category['id']}", headers=headers).status_code == 404


def test_categories_and_brands_are_alphabetical(client, headers):
    for name in ["Quartz", "Ceramic", "Marble"]:
        client.post("/api/categories", json={"name": name}, headers=headers)
        client.post("/api/brands", json={"name": name}, headers=headers)

    assert [c["name"] for c in client.get("/api/categories", headers=headers).json()] == ["Ceramic", "Marble", "Quartz"]
    assert [b["name"] for b in client.get("/api/brands", headers=headers).json()] == ["Ceramic", "Marble", "Quartz"]


def test_duplicate_name_within_a_tenant_names_the_field(client, headers):
    client.post("/api/brands", json={"name": "Cosentino"}, headers=headers)

    resp = client.post("/api/brands", json={"name": "Cosentino"}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Brand name already exists"
    assert resp.json()["error"]["details"]["field"] == "name"


def test_uniqueness_is_per_tenant(client, headers, other_headers):
    assert client.post("/api/brands", json={"name": "Cosentino"}, headers=headers).status_code == 201
    assert client.post("/api/brands", json={"name": "Cosentino"}, headers=other_headers).status_code == 201


def test_currency_code_is_normalized(client, headers):
    resp = client.post("/api/currencies", json={"code": "eur", "name": "Euro", "symbol": "€"}, headers=headers)

    assert resp.status_code == 201
    assert resp.json()["code"] == "EUR"


def test_currency_code_must_be_three_letters(client, headers):
    resp = client.post("/api/currencies", json={"code": "E1R", "name": "Euro", "symbol": "€"}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "code"


def test_duplicate_currency_code(client, headers):
    client.post("/api/currencies", json={"code": "ALL", "name": "Lek", "symbol": "L"}, headers=headers)

    resp = client.post("/api/currencies", json={"code": "all", "name": "Lek", "symbol": "L"}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Currency code already exists"


def test_missing_required_field_is_named(client, headers):
    resp = client.post("/api/clients", json={"email": "a@b.c"}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "ValidationFailedError"
    assert resp.json()["error"]["details"]["field"] == "full_name"


def test_client_crud(client, headers):
    created = client.post(
        "/api/clients",
        json={"full_name": "Arta Hoxha", "number": "+355 69 000 0000", "email": "arta@example.com"},
        headers=headers,
    ).json()

    updated = client.put(f"/api/clients/{created['id']}", json={"address": "Rruga e Durresit"}, headers=headers)

    assert updated.json()["address"] == "Rruga e Durresit"
    assert updated.json()["full_name"] == "Arta Hoxha"
    assert len(client.get("/api/clients", headers=headers).json()) == 1


def test_other_tenants_rows_are_invisible(client, headers, other_headers):
    category = client.post("/api/categories", json={"name": "Granite"}, headers=headers).json()

    assert client.get("/api/categories", headers=other_headers).json() == []
    assert client.get(f"/api/categories/{category['id']}", headers=other_headers).status_code == 404
    assert client.put(f"/api/categories/{category['id']}", json={"name": "Mine"}, headers=other_headers).status_code == 404
    assert client.delete(f"/api/categories/{category['id']}", headers=other_headers).status_code == 404
    assert client.get(f"/api/categories/{category['id']}", headers=headers).json()["name"] == "Granite"


def test_payload_cannot_override_owner(client, headers, other_headers):
    created = client.post("/api/brands", json={"name": "Caesarstone", "user_id": "tenant-b"}, headers=headers)

    assert created.status_code == 201
    assert client.get("/api/brands", headers=other_headers).json() == []
    assert len(client.get("/api/brands", headers=headers).json()) == 1


def test_deleting_a_currency_clears_references(client, headers, make_product):
    currency = client.post("/api/currencies", json={"code": "USD", "name": "Dollar", "symbol": "$"}, headers=headers).json()
    product = make_product(currency_id=currency["id"])
    assert product["currency"]["code"] == "USD"

    assert client.delete(f"/api/currencies/{currency['id']}", headers=headers).status_code == 200

    reloaded = client.get(f"/api/products/{product['id']}", headers=headers).json()
    assert reloaded["currency_id"] is None
    assert reloaded["currency"] is None


def test_update_refuses_null_category_name(client, headers):
    category = client.post("/api/categories", json={"name": "Slate"}, headers=headers).json()

    resp = client.put(f"/api/categories/{category['id']}", json={"name": None}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "name"
    assert client.get(f"/api/categories/{category['id']}", headers=headers).json()["name"] == "Slate"


def _integrity_error(message):
    return IntegrityError("UPDATE ...", {}, Exception(message))


def test_unique_violation_is_recognised_from_sqlite_columns():
    exc = _integrity_error("UNIQUE constraint failed: products.barcode, products.user_id")

    assert violates_unique(exc, Product, "barcode")
    assert not violates_unique(exc, Product, "name")


def test_unique_violation_is_recognised_from_the_postgres_constraint_name():
    exc = _integrity_error('duplicate key value violates unique constraint "uq_categories_name_user"')

    assert violates_unique(exc, Category, "name")


def test_not_null_failure_is_not_a_unique_violation():
    assert not violates_unique(_integrity_error("NOT NULL constraint failed: products.name"), Product, "barcode")
    assert not violates_unique(
        _integrity_error('null value in column "name" of relation "products" violates not-null constraint'),
        Product,
        "barcode",
    )
