import pytest

from analytics.stock_health import analyze_stock_health, classify_product
from config.config import AnalyticsConfig
from models.enums import HealthBucket
from models.inventory import Product


def _product(quantity, reorder_point=10):
    return Product(id="P1", name="Widget", current_quantity=quantity, reorder_point=reorder_point)


@pytest.mark.parametrize(
    "quantity, has_sales, expected",
    [
        (0, True, HealthBucket.LOW_STOCK),  # zero stock with sales is not dead stock
        (0, False, HealthBucket.LOW_STOCK),
        (5, False, HealthBucket.DEAD_STOCK),
        (500, False, HealthBucket.DEAD_STOCK),  # dead stock takes priority over overstock
        (10, True, HealthBucket.LOW_STOCK),
        (11, True, HealthBucket.HEALTHY),
        (30, True, HealthBucket.HEALTHY),
        (31, True, HealthBucket.OVERSTOCK),
    ],
)
def test_classification_priority(quantity, has_sales, expected):
    assert classify_product(_product(quantity), has_sales) == expected


def test_custom_overstock_multiplier():
    config = AnalyticsConfig(overstock_multiplier=2.0)
    assert classify_product(_product(21), True, config) == HealthBucket.OVERSTOCK


def test_default_reorder_point_applies(make_data):
    data = make_data(
        [{"id": "P1", "name": "Widget", "quantity": 10}],
        sales=[{"productId": "P1", "quantity": 1, "total": 5, "date": "2024-03-01"}],
    )
    report = analyze_stock_health(data)
    assert report.entries[0].bucket == HealthBucket.LOW_STOCK


def test_report_counts_and_score(make_data):
    products = [
        {"id": "H", "name": "Healthy", "quantity": 20, "reorderPoint": 10},
        {"id": "L", "name": "Low", "quantity": 0, "reorderPoint": 10},
        {"id": "O", "name": "Over", "quantity": 100, "reorderPoint": 10},
        {"id": "D", "name": "Dead", "quantity": 12, "reorderPoint": 10},
    ]
    sales = [
        {"productId": pid, "quantity": 1, "total": 10, "date": "2024-03-01"} for pid in ("H", "L", "O")
    ]
    report = analyze_stock_health(make_data(products, sales=sales))

    assert report.total_products == 4
    assert report.counts == {
        HealthBucket.DEAD_STOCK: 1,
        HealthBucket.LOW_STOCK: 1,
        HealthBucket.OVERSTOCK: 1,
        HealthBucket.HEALTHY: 1,
    }
    assert report.healthy_count == 1
    assert report.overall_score == pytest.approx(25.0)


def test_no_products_scores_zero(make_data):
    report = analyze_stock_health(make_data([]))
    assert report.overall_score == 0.0
    assert report.total_products == 0


def test_missing_reorder_point_still_uses_default_for_health(make_data):
    data = make_data(
        [{"id": "P1", "name": "Widget", "quantity": 5, "reorderLevel": None}],
        sales=[{"productId": "P1", "quantity": 1, "total": 5, "date": "2024-03-01"}],
    )
    assert analyze_stock_health(data).entries[0].bucket == HealthBucket.LOW_STOCK
