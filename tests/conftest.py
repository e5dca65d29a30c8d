import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import analytics`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def report_now() -> datetime:
    """Fixed reference time so preset windows are reproducible."""
    return datetime(2024, 3, 31, 23, 59, 59)


@pytest.fixture
def scenario_products() -> list[dict]:
    """Three products in camelCase, as the inventory collaborator returns them."""
    return [
        {"id": "P1", "name": "Widget", "category": "Hardware", "quantity": 15, "reorderPoint": 10},
        {"id": "P2", "name": "Gadget", "category": "Hardware", "quantity": 20, "reorderPoint": 10},
        {"id": "P3", "name": "Doohickey", "category": "Garden", "quantity": 0, "reorderPoint": 10},
    ]


@pytest.fixture
def scenario_purchases() -> list[dict]:
    return [
        {"productId": "P1", "quantity": 10, "unitCost": 100, "date": "2024-01-01"},
        {"productId": "P1", "quantity": 10, "unitCost": 120, "date": "2024-02-01"},
        {"productId": "P2", "quantity": 40, "unitCost": 5, "date": "2024-03-05"},
        {"productId": "P3", "quantity": 5, "unitCost": 8, "date": "2024-03-10"},
    ]


@pytest.fixture
def scenario_sales() -> list[dict]:
    return [
        {"productId": "P1", "quantity": 5, "totalAmount": 700, "date": "2024-03-10T10:00:00"},
        {"productName": "Gadget", "quantity": 20, "total": 200, "date": "2024-03-12T11:30:00"},
        {"product_id": "P3", "quantity": 5, "total_amount": 100, "created_at": "2024-03-15T09:00:00Z"},
    ]


@pytest.fixture
def make_data():
    """Factory that aggregates raw records over a window covering every test date by default."""
    from analytics.aggregation import aggregate
    from models.analytics import ReportingWindow

    wide_window = ReportingWindow(start=datetime(2000, 1, 1), end=datetime(2100, 1, 1))

    def _make(products, purchases=(), sales=(), window=None, category=None):
        return aggregate(products, purchases, sales, window or wide_window, category=category)

    return _make
