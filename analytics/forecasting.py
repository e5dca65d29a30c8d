"""
Short-horizon demand forecasting from daily sales.

Each product's history is one summed quantity per distinct sale date. The
next-day estimate is the mean daily demand plus a naive linear trend:
``(last - first) / number_of_dates``.
"""

import logging
from datetime import date
from typing import Sequence

import numpy as np

from analytics.aggregation import AggregatedData
from config.config import AnalyticsConfig
from models.analytics import ForecastEntry, ForecastReport
from models.enums import ForecastConfidence

logger = logging.getLogger(__name__)


def forecast_confidence(observation_days: int, config: AnalyticsConfig | None = None) -> ForecastConfidence:
    config = config or AnalyticsConfig()
    if observation_days >= config.high_confidence_days:
        return ForecastConfidence.HIGH
    if observation_days >= config.medium_confidence_days:
        return ForecastConfidence.MEDIUM
    return ForecastConfidence.LOW


def forecast_series(
    product_id: str,
    series: Sequence[tuple[date, float]],
    product_name: str = "",
    config: AnalyticsConfig | None = None,
) -> ForecastEntry | None:
    """
    Forecast one product from its daily series (dates ascending).
    Returns None when the series is empty: there is no basis for a forecast.
    """
    if not series:
        return None
    quantities = [quantity for _, quantity in series]
    days = len(quantities)
    average = float(np.mean(quantities))
    trend = (quantities[-1] - quantities[0]) / days if days >= 2 else 0.0
    return ForecastEntry(
        product_id=product_id,
        product_name=product_name,
        average_daily_demand=average,
        trend_per_day=trend,
        forecasted_demand=average + trend,
        confidence=forecast_confidence(days, config),
        observation_days=days,
    )


def forecast_demand(data: AggregatedData, config: AnalyticsConfig | None = None) -> ForecastReport:
    """Forecast every in-scope product that sold at least once in the window."""
    entries: list[ForecastEntry] = []
    for product in data.products:
        entry = forecast_series(
            product.id,
            data.daily_sales_by_product.get(product.id, []),
            product_name=product.name,
            config=config,
        )
        if entry is not None:
            entries.append(entry)
    logger.info(f"Forecast demand for {len(entries)} of {len(data.products)} products")
    return ForecastReport(entries=entries)
