"""
Stock health classification.

Rules, first match wins:
  1. no sale in the window and stock on hand  -> dead-stock
  2. quantity <= reorder point                -> low-stock
  3. quantity >  reorder point x 3            -> overstock
  4. otherwise                                -> healthy
"""

import logging

from analytics.aggregation import AggregatedData
from config.config import AnalyticsConfig
from models.analytics import HealthEntry, StockHealthReport
from models.enums import HealthBucket
from models.inventory import Product

logger = logging.getLogger(__name__)


def classify_product(product: Product, has_sales: bool, config: AnalyticsConfig | None = None) -> HealthBucket:
    config = config or AnalyticsConfig()
    quantity = product.current_quantity
    if not has_sales and quantity > 0:
        return HealthBucket.DEAD_STOCK
    if quantity <= product.reorder_point:
        return HealthBucket.LOW_STOCK
    if quantity > product.reorder_point * config.overstock_multiplier:
        return HealthBucket.OVERSTOCK
    return HealthBucket.HEALTHY


def analyze_stock_health(data: AggregatedData, config: AnalyticsConfig | None = None) -> StockHealthReport:
    entries = [
        HealthEntry(
            product_id=product.id,
            product_name=product.name,
            bucket=classify_product(product, data.has_sales(product.id), config),
        )
        for product in data.products
    ]
    counts = {bucket: 0 for bucket in HealthBucket}
    for entry in entries:
        counts[entry.bucket] += 1

    total = len(entries)
    overall_score = counts[HealthBucket.HEALTHY] * 100.0 / total if total else 0.0
    logger.info(
        f"Stock health score {overall_score:.1f}: "
        + ", ".join(f"{bucket.value}={count}" for bucket, count in counts.items())
    )
    return StockHealthReport(entries=entries, counts=counts, overall_score=overall_score, total_products=total)
