"""
Per-product performance metrics: sales velocity and days of stock remaining.
"""

from analytics.aggregation import AggregatedData
from config.config import AnalyticsConfig
from models.analytics import PerformanceEntry, PerformanceReport
from models.enums import PerformanceStatus
from models.inventory import Product


def _reorder_level(product: Product) -> int:
    """Reorder point for status checks; 0 when the product record carried none."""
    return product.reorder_point if product.has_reorder_point else 0


def _status(product: Product, reorder_level: int, config: AnalyticsConfig) -> PerformanceStatus:
    if product.current_quantity <= reorder_level:
        return PerformanceStatus.LOW
    if product.current_quantity <= reorder_level * config.warning_stock_multiplier:
        return PerformanceStatus.WARNING
    return PerformanceStatus.GOOD


def analyze_performance(data: AggregatedData, config: AnalyticsConfig | None = None) -> PerformanceReport:
    """
    Sales velocity is units sold per day of the reporting window. Days of
    stock is on-hand divided by velocity, capped at ``days_of_stock_cap``
    when nothing sold. A product without a reorder point is checked against
    a reorder level of 0, unlike stock health which applies the default.
    """
    config = config or AnalyticsConfig()
    window_days = data.window.days
    entries = []
    for product in data.products:
        velocity = data.sold_quantity(product.id) / window_days
        if velocity > 0:
            days_of_stock = round(product.current_quantity / velocity)
        else:
            days_of_stock = config.days_of_stock_cap
        reorder_level = _reorder_level(product)
        entries.append(
            PerformanceEntry(
                product_id=product.id,
                product_name=product.name,
                sales_velocity=velocity,
                stock_level=product.current_quantity,
                reorder_point=reorder_level,
                days_of_stock=days_of_stock,
                status=_status(product, reorder_level, config),
            )
        )
    return PerformanceReport(entries=entries, window_days=window_days)
