import copy
from datetime import date, datetime

import pytest

from analytics.aggregation import aggregate, daily_sales, monthly_movement
from models.analytics import ReportingWindow
from models.inventory import PurchaseLot, SaleRecord

MARCH = ReportingWindow(start=datetime(2024, 3, 1), end=datetime(2024, 3, 31, 23, 59, 59))


@pytest.fixture
def products():
    return [
        {"id": "P1", "name": "Widget", "category": "Hardware", "quantity": 15},
        {"id": "P2", "name": "Gadget", "category": "Garden", "quantity": 4},
    ]


def test_window_filter_is_inclusive(products):
    sales = [
        {"productId": "P1", "quantity": 1, "total": 1, "date": "2024-02-29T23:59:59"},
        {"productId": "P1", "quantity": 2, "total": 2, "date": "2024-03-01T00:00:00"},
        {"productId": "P1", "quantity": 3, "total": 3, "date": "2024-03-31T23:59:59"},
        {"productId": "P1", "quantity": 4, "total": 4, "date": "2024-04-01T00:00:00"},
    ]
    data = aggregate(products, [], sales, MARCH)
    assert [sale.quantity for sale in data.sales_by_product["P1"]] == [2, 3]
    assert data.skipped.total == 0


def test_purchase_history_is_kept_beyond_the_window(products):
    purchases = [
        {"productId": "P1", "quantity": 5, "unitCost": 2, "date": "2024-03-10"},
        {"productId": "P1", "quantity": 7, "unitCost": 1, "date": "2024-01-10"},
    ]
    data = aggregate(products, purchases, [], MARCH)
    assert [lot.quantity for lot in data.purchases_by_product["P1"]] == [5]
    # History is ordered oldest first
    assert [lot.quantity for lot in data.purchase_history_by_product["P1"]] == [7, 5]


def test_malformed_records_are_skipped_and_counted(products):
    purchases = [
        {"productId": "P1", "quantity": 5, "unitCost": 2, "date": "not-a-date"},
        {"productId": "P1", "quantity": "five", "unitCost": 2, "date": "2024-03-02"},
        {"productId": "P1", "quantity": 5, "unitCost": -2, "date": "2024-03-02"},
        {"productId": "P1", "quantity": 5, "unitCost": 2, "date": "2024-03-02"},
    ]
    sales = [
        {"productId": "P1", "quantity": 1, "total": 1},
        {"productId": "P1", "quantity": 0, "total": 1, "date": "2024-03-02"},
        None,
        {"productId": "P1", "quantity": 1, "total": 1, "date": "2024-03-02"},
    ]
    raw_products = products + [{"name": "No id"}, {"id": "P1", "name": "Duplicate"}]

    data = aggregate(raw_products, purchases, sales, MARCH)

    assert data.skipped.malformed_purchases == 3
    assert data.skipped.malformed_sales == 3
    assert data.skipped.malformed_products == 1
    assert data.skipped.duplicate_products == 1
    assert data.skipped.total == 8
    assert [product.name for product in data.products] == ["Widget", "Gadget"]
    assert len(data.purchases_by_product["P1"]) == 1
    assert len(data.sales_by_product["P1"]) == 1


def test_unknown_products_are_ignored_and_counted(products):
    purchases = [{"productId": "NOPE", "quantity": 5, "unitCost": 2, "date": "2024-03-02"}]
    sales = [{"productName": "Nobody", "quantity": 1, "total": 1, "date": "2024-03-02"}]
    data = aggregate(products, purchases, sales, MARCH)
    assert data.skipped.unknown_product == 2
    assert data.purchases_by_product == {}
    assert data.sales_by_product == {}


def test_product_name_references_resolve_to_ids(products):
    sales = [
        {"productName": "Gadget", "quantity": 2, "total": 20, "date": "2024-03-05"},
        {"product_name": "Widget", "quantity": 1, "total": 10, "date": "2024-03-05"},
        # An unknown id with a known name still resolves through the name
        {"productId": "legacy-9", "productName": "Widget", "quantity": 4, "total": 40, "date": "2024-03-06"},
    ]
    data = aggregate(products, [], sales, MARCH)
    assert data.sold_quantity("P2") == 2
    assert data.sold_quantity("P1") == 5
    assert all(sale.product_id == "P1" for sale in data.sales_by_product["P1"])


def test_category_filter(products):
    sales = [
        {"productId": "P1", "quantity": 1, "total": 10, "date": "2024-03-05"},
        {"productId": "P2", "quantity": 1, "total": 10, "date": "2024-03-05"},
    ]
    data = aggregate(products, [], sales, MARCH, category="Garden")
    assert [product.id for product in data.products] == ["P2"]
    assert list(data.sales_by_product) == ["P2"]
    # Out-of-scope records are not counted as skipped
    assert data.skipped.total == 0

    assert len(aggregate(products, [], sales, MARCH, category="all").products) == 2


def test_timezone_aware_dates_are_normalized(products):
    sales = [{"productId": "P1", "quantity": 1, "total": 1, "date": "2024-04-01T01:00:00+02:00"}]
    data = aggregate(products, [], sales, MARCH)
    # 2024-03-31T23:00 UTC falls inside March
    assert data.sold_quantity("P1") == 1


def test_inputs_are_not_mutated(products):
    purchases = [{"productName": "Widget", "quantity": 5, "unitCost": 2, "date": "2024-03-02"}]
    sales = [{"productName": "Widget", "quantity": 1, "total": 1, "date": "2024-03-02"}]
    snapshot = copy.deepcopy((products, purchases, sales))
    aggregate(products, purchases, sales, MARCH)
    assert (products, purchases, sales) == snapshot


def test_accepts_parsed_records(products):
    lot = PurchaseLot(product_id="P1", quantity=3, unit_cost=4, purchase_date="2024-03-03")
    data = aggregate(products, [lot], [], MARCH)
    assert data.purchases_by_product["P1"] == [lot]


def test_daily_sales_sum_per_day():
    sales = [
        SaleRecord(product_id="P1", quantity=2, sale_date="2024-03-02T08:00:00"),
        SaleRecord(product_id="P1", quantity=3, sale_date="2024-03-01T08:00:00"),
        SaleRecord(product_id="P1", quantity=4, sale_date="2024-03-02T18:00:00"),
        SaleRecord(product_id="P2", quantity=1, sale_date="2024-03-02T18:00:00"),
    ]
    series = daily_sales(sales)
    assert series["P1"] == [(date(2024, 3, 1), 3.0), (date(2024, 3, 2), 6.0)]
    assert series["P2"] == [(date(2024, 3, 2), 1.0)]
    assert daily_sales([]) == {}


def test_monthly_movement_buckets_by_year_month():
    purchases = [
        PurchaseLot(product_id="P1", quantity=10, unit_cost=1, purchase_date="2024-01-15"),
        PurchaseLot(product_id="P1", quantity=5, unit_cost=1, purchase_date="2024-03-02"),
    ]
    sales = [
        SaleRecord(product_id="P1", quantity=2, sale_date="2024-02-10"),
        SaleRecord(product_id="P1", quantity=3, sale_date="2024-03-20"),
    ]
    movement = monthly_movement(purchases, sales)
    assert list(movement.index) == ["2024-01", "2024-02", "2024-03"]
    assert list(movement["purchased"]) == [10.0, 0.0, 5.0]
    assert list(movement["sold"]) == [0.0, 2.0, 3.0]


def test_monthly_movement_empty():
    movement = monthly_movement([], [])
    assert movement.empty
    assert list(movement.columns) == ["purchased", "sold"]


def test_product_movement(products):
    purchases = [{"productId": "P2", "quantity": 8, "unitCost": 1, "date": "2024-03-02"}]
    data = aggregate(products, purchases, [], MARCH)
    assert list(data.product_movement("P2")["purchased"]) == [8.0]
    assert data.product_movement("P1").empty


def test_numeric_dates_are_malformed(products):
    purchases = [{"productId": "P1", "quantity": 5, "unitCost": 2, "date": 20240302}]
    sales = [
        {"productId": "P1", "quantity": 1, "total": 1, "date": 20240301},
        {"productId": "P1", "quantity": 1, "total": 1, "date": "2024-03-01"},
    ]
    data = aggregate(products, purchases, sales, MARCH)
    assert data.skipped.malformed_sales == 1
    assert data.skipped.malformed_purchases == 1
    assert data.sold_quantity("P1") == 1
    assert data.purchase_history_by_product == {}
