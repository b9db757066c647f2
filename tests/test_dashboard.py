from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

from stockroom.application.services.dashboard_service import MONTH_NAMES, last_months, sales_by_month, stock_by_month
from stockroom.application.services.final_product_service import get_current_date


def _final_product(status, order_date, prices, apply_tax=True):
    return SimpleNamespace(
        status=status,
        order_date=order_date,
        created_at=None,
        apply_tax=apply_tax,
        components=[SimpleNamespace(total_price=Decimal(p)) for p in prices],
    )


def test_last_months_crosses_the_year():
    assert last_months(date(2024, 2, 15)) == [
        (2023, 9), (2023, 10), (2023, 11), (2023, 12), (2024, 1), (2024, 2),
    ]


def test_sales_by_month_counts_only_done_orders():
    final_products = [
        _final_product("done", date(2024, 2, 3), ["40.00"]),
        _final_product("done", date(2024, 2, 20), ["10.00"], apply_tax=False),
        _final_product("pending", date(2024, 2, 4), ["1000.00"]),
        _final_product("done", date(2023, 1, 1), ["99.00"]),
    ]

    series = sales_by_month(final_products, today=date(2024, 2, 28))

    assert [m.month for m in series] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]
    assert series[-1].price == Decimal("58.00")
    assert all(m.price == Decimal("0.00") for m in series[:-1])


def test_stock_by_month_sums_added_square_meters():
    products = [
        SimpleNamespace(created_at=datetime(2024, 1, 5, 10), square_meters=Decimal("12.5")),
        SimpleNamespace(created_at=datetime(2024, 1, 25, 10), square_meters=Decimal("2.5")),
        SimpleNamespace(created_at=datetime(2023, 12, 1, 10), square_meters=Decimal("4")),
    ]

    series = stock_by_month(products, today=date(2024, 1, 31))

    assert series[-1].m2 == Decimal("15.0000")
    assert series[-2].m2 == Decimal("4.0000")


def test_summary_endpoint(client, headers, other_headers, make_product, make_final_product):
    client.post("/api/clients", json={"full_name": "Besa Kola"}, headers=headers)
    client.post("/api/categories", json={"name": "Granite"}, headers=headers)
    product = make_product(price_per_square_meter="10", square_meters="20")
    done = make_final_product([{"product_id": product["id"], "length": "2", "width": "2"}])
    make_final_product([])
    client.put(f"/api/final-products/{done['id']}/done", headers=headers)
    make_product(request_headers=other_headers)

    resp = client.get("/api/dashboard/summary", headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    stats = body["stats"]
    assert stats["total_products"] == 1
    assert stats["total_final_products"] == 2
    assert stats["done_final_products"] == 1
    assert stats["pending_final_products"] == 1
    assert stats["total_clients"] == 1
    assert stats["total_categories"] == 1
    assert stats["total_brands"] == 0
    assert Decimal(stats["total_square_meters"]) == Decimal("20")
    assert Decimal(stats["total_value"]) == Decimal("200")

    assert len(body["recent_final_products"]) == 2
    assert len(body["sales_by_month"]) == 6
    assert len(body["stock_by_month"]) == 6
    current_month = body["sales_by_month"][-1]
    assert current_month["month"] == MONTH_NAMES[get_current_date().month - 1]
    assert Decimal(current_month["price"]) == Decimal("48")
