"""
Turnover analysis: how fast stock sells relative to the stock held.

``average_stock = current_quantity + sold / 2`` is a simplified proxy for the
period average, not a time-weighted average.
"""

import logging

import numpy as np

from analytics.aggregation import AggregatedData
from config.config import AnalyticsConfig
from models.analytics import TurnoverEntry, TurnoverReport
from models.enums import TurnoverBucket

logger = logging.getLogger(__name__)


def turnover_ratio(sold_quantity: float, current_quantity: float) -> tuple[float, float]:
    """Returns (average_stock, turnover_ratio); the ratio is 0 when average stock is 0."""
    average_stock = current_quantity + sold_quantity / 2
    if average_stock <= 0:
        return average_stock, 0.0
    return average_stock, sold_quantity / average_stock


def _bucket(ratio: float, config: AnalyticsConfig) -> TurnoverBucket:
    if ratio > config.high_turnover_ratio:
        return TurnoverBucket.HIGH
    if ratio < config.low_turnover_ratio:
        return TurnoverBucket.LOW
    return TurnoverBucket.NORMAL


def analyze_turnover(data: AggregatedData, config: AnalyticsConfig | None = None) -> TurnoverReport:
    config = config or AnalyticsConfig()
    entries: list[TurnoverEntry] = []
    for product in data.products:
        sold = data.sold_quantity(product.id)
        average_stock, ratio = turnover_ratio(sold, product.current_quantity)
        entries.append(
            TurnoverEntry(
                product_id=product.id,
                product_name=product.name,
                category=product.category,
                sold_quantity=sold,
                average_stock=average_stock,
                turnover_ratio=ratio,
                bucket=_bucket(ratio, config),
            )
        )

    # Simple mean over products, not weighted by revenue or volume
    average_turnover = float(np.mean([entry.turnover_ratio for entry in entries])) if entries else 0.0
    report = TurnoverReport(
        entries=entries,
        average_turnover=average_turnover,
        high_turnover_count=sum(1 for entry in entries if entry.bucket == TurnoverBucket.HIGH),
        low_turnover_count=sum(1 for entry in entries if entry.bucket == TurnoverBucket.LOW),
    )
    logger.info(
        f"Turnover: average {average_turnover:.2f}, {report.high_turnover_count} high, "
        f"{report.low_turnover_count} low"
    )
    return report
