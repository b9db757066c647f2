import io

from openpyxl import load_workbook


def _sheet(resp, name):
    return load_workbook(io.BytesIO(resp.content))[name]


def test_general_report_lists_final_products_with_a_total_row(client, headers, make_product, make_final_product):
    product = make_product(price_per_square_meter="10.00")
    created = make_final_product(
        [{"product_id": product["id"], "length": "2", "width": "2"}],
        name="Vanity",
        order_date="2024-06-15",
    )
    client.put(f"/api/final-products/{created['id']}/done", headers=headers)

    resp = client.get("/api/reports/final-products.xlsx", headers=headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attachment" in resp.headers["content-disposition"]

    ws = _sheet(resp, "General Report")
    assert ws["A1"].value == "General report"
    assert [ws.cell(row=3, column=c).value for c in range(1, 5)] == ["Final Product", "Date", "State", "Total"]
    assert [ws.cell(row=4, column=c).value for c in range(1, 5)] == ["Vanity", "2024-06-15", "Done", "$48.00"]
    assert ws.cell(row=6, column=1).value == "TOTAL"
    assert ws.cell(row=6, column=4).value == "$48.00"


def test_general_report_uses_the_currency_symbol(client, headers, make_product, make_final_product):
    currency = client.post("/api/currencies", json={"code": "EUR", "name": "Euro", "symbol": "€"}, headers=headers).json()
    product = make_product(price_per_square_meter="1000")
    make_final_product(
        [{"product_id": product["id"], "length": "2", "width": "1"}],
        currency_id=currency["id"],
        apply_tax=False,
    )

    ws = _sheet(client.get("/api/reports/final-products.xlsx", headers=headers), "General Report")

    assert ws.cell(row=4, column=3).value == "Pending"
    assert ws.cell(row=4, column=4).value == "€2,000.00"


def test_general_report_date_range(client, headers, make_final_product):
    make_final_product([], name="Old", order_date="2023-01-10")
    make_final_product([], name="New", order_date="2024-01-10")

    resp = client.get(
        "/api/reports/final-products.xlsx",
        params={"date_from": "2024-01-01", "date_to": "2024-12-31"},
        headers=headers,
    )

    ws = _sheet(resp, "General Report")
    assert ws.cell(row=4, column=1).value == "New"
    assert ws.cell(row=5, column=1).value is None


def test_general_report_with_nothing_in_range(client, headers):
    resp = client.get("/api/reports/final-products.xlsx", headers=headers)

    assert resp.status_code == 404


def test_general_report_rejects_an_inverted_range(client, headers):
    resp = client.get(
        "/api/reports/final-products.xlsx",
        params={"date_from": "2024-02-01", "date_to": "2024-01-01"},
        headers=headers,
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "date_from"


def test_products_report(client, headers, make_product):
    brand = client.post("/api/brands", json={"name": "Laminam"}, headers=headers).json()
    make_product(name="Sintered", barcode="SN-1", price_per_square_meter="1250.5", square_meters="3.5", brand_id=brand["id"])

    resp = client.get("/api/reports/products.xlsx", headers=headers)

    assert resp.status_code == 200
    ws = _sheet(resp, "Products Inventory")
    assert ws["A1"].value == "Products Inventory Report"
    assert [ws.cell(row=4, column=c).value for c in range(1, 6)] == ["Sintered", "SN-1", "$1,250.50", "3.50", "Laminam"]


def test_products_report_only_covers_the_tenant(client, headers, other_headers, make_product):
    make_product(request_headers=other_headers)

    assert client.get("/api/reports/products.xlsx", headers=headers).status_code == 404
