"""
Analytics orchestrator: one entry point that aggregates the request inputs
once and fans out to every analysis branch.

Branches depend only on the aggregated data, never on each other. Each one
runs through ``run_branch``, which turns an exception into a failed
BranchResult, so one broken branch leaves the rest of the report intact.
"""

import asyncio
import logging
from datetime import datetime
from functools import partial
from typing import Any, Callable, Iterable

from analytics.abc_analysis import classify_revenue
from analytics.aggregation import AggregatedData, aggregate
from analytics.cost_basis import resolve_costing_method
from analytics.forecasting import forecast_demand
from analytics.movement import analyze_stock_movement
from analytics.performance import analyze_performance
from analytics.stock_health import analyze_stock_health
from analytics.turnover import analyze_turnover
from analytics.valuation import build_valuation
from analytics.window import resolve_window
from config.config import AnalyticsConfig
from connectors.inventory_source import InventoryDataSource
from models.analytics import AnalyticsReport, AnalyticsSummary, BranchResult
from models.enums import CostingMethod, DateRangePreset

logger = logging.getLogger(__name__)

# Report field name -> branch; order is the report order
BRANCH_NAMES = (
    "valuation",
    "abc_analysis",
    "turnover_analysis",
    "demand_forecast",
    "stock_health",
    "stock_movement",
    "performance_metrics",
)


def run_branch(name: str, func: Callable[[], Any]) -> BranchResult:
    """Run one analysis branch, capturing any exception into the result."""
    try:
        value = func()
    except Exception as e:
        logger.error(f"Analytics branch '{name}' failed: {type(e).__name__}: {e}")
        return BranchResult(name=name, ok=False, error=f"{type(e).__name__}: {e}")
    return BranchResult(name=name, ok=True, value=value)


def build_branches(
    data: AggregatedData, costing_method: CostingMethod | str | None, config: AnalyticsConfig
) -> dict[str, Callable[[], Any]]:
    branches = {
        "valuation": partial(build_valuation, data, costing_method, config),
        "abc_analysis": partial(classify_revenue, data, config),
        "turnover_analysis": partial(analyze_turnover, data, config),
        "demand_forecast": partial(forecast_demand, data, config),
        "stock_health": partial(analyze_stock_health, data, config),
        "stock_movement": partial(analyze_stock_movement, data),
        "performance_metrics": partial(analyze_performance, data, config),
    }
    return {name: branches[name] for name in BRANCH_NAMES}


def _summarize(data: AggregatedData, results: dict[str, BranchResult]) -> AnalyticsSummary:
    valuation = results["valuation"]
    turnover = results["turnover_analysis"]
    health = results["stock_health"]
    return AnalyticsSummary(
        total_products=len(data.products),
        total_value=valuation.value.total_value if valuation.ok else 0.0,
        average_turnover=turnover.value.average_turnover if turnover.ok else 0.0,
        stock_health_score=health.value.overall_score if health.ok else 0.0,
        skipped_records=data.skipped.total,
    )


def _assemble(
    data: AggregatedData, method: CostingMethod, results: dict[str, BranchResult]
) -> AnalyticsReport:
    report = AnalyticsReport(
        window=data.window,
        costing_method=method.value,
        summary=_summarize(data, results),
        skipped_records=data.skipped,
        **results,
    )
    if report.failed_branches:
        logger.warning(f"Analytics report is partial; failed branches: {report.failed_branches}")
    return report


def _prepare(
    products: Iterable[Any],
    purchases: Iterable[Any],
    sales: Iterable[Any],
    window_start: Any,
    window_end: Any,
    costing_method: CostingMethod | str | None,
    category: str | None,
    date_range: DateRangePreset | str | None,
    now: datetime | None,
    config: AnalyticsConfig | None,
) -> tuple[AggregatedData, CostingMethod, dict[str, Callable[[], Any]]]:
    config = config or AnalyticsConfig()
    window = resolve_window(window_start, window_end, date_range or config.default_date_range, now)
    requested_method = costing_method if costing_method is not None else config.default_costing_method
    method, _ = resolve_costing_method(requested_method)
    logger.info(
        f"Computing analytics for {window.start.isoformat()} .. {window.end.isoformat()} "
        f"(method={method.value}, category={category or 'all'})"
    )
    data = aggregate(products, purchases, sales, window, category=category)
    return data, method, build_branches(data, requested_method, config)


def compute_analytics(
    products: Iterable[Any],
    purchases: Iterable[Any],
    sales: Iterable[Any],
    window_start: Any = None,
    window_end: Any = None,
    costing_method: CostingMethod | str | None = None,
    *,
    category: str | None = None,
    date_range: DateRangePreset | str | None = None,
    now: datetime | None = None,
    config: AnalyticsConfig | None = None,
) -> AnalyticsReport:
    """
    Compute the full analytics report for one reporting window.

    Args:
        products: Product records from the inventory collaborator.
        purchases: Purchase lot records.
        sales: Sale records.
        window_start: Inclusive window start (datetime, date or ISO string).
            Defaults to ``window_end - date_range``.
        window_end: Inclusive window end. Defaults to ``now``.
        costing_method: ``fifo``, ``lifo`` or ``weighted_average``. Unknown names
            fall back to weighted average.
        category: Optional product category filter.
        date_range: Preset used for missing window bounds.
        now: Reference time for preset windows; the current time if omitted.
        config: Thresholds and defaults.

    Returns:
        AnalyticsReport whose branches are tagged successes or failures.

    Raises:
        AnalyticsConfigurationError: For an invalid window or preset.
    """
    data, method, branches = _prepare(
        products, purchases, sales, window_start, window_end, costing_method, category, date_range, now, config
    )
    results = {name: run_branch(name, func) for name, func in branches.items()}
    return _assemble(data, method, results)


async def compute_analytics_async(
    products: Iterable[Any],
    purchases: Iterable[Any],
    sales: Iterable[Any],
    window_start: Any = None,
    window_end: Any = None,
    costing_method: CostingMethod | str | None = None,
    *,
    category: str | None = None,
    date_range: DateRangePreset | str | None = None,
    now: datetime | None = None,
    config: AnalyticsConfig | None = None,
) -> AnalyticsReport:
    """Same as ``compute_analytics``, with the branches run concurrently in worker threads."""
    data, method, branches = _prepare(
        products, purchases, sales, window_start, window_end, costing_method, category, date_range, now, config
    )
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(run_branch, name, func) for name, func in branches.items())
    )
    return _assemble(data, method, dict(zip(branches, outcomes)))


async def compute_analytics_from_source(
    source: InventoryDataSource,
    window_start: Any = None,
    window_end: Any = None,
    costing_method: CostingMethod | str | None = None,
    **kwargs: Any,
) -> AnalyticsReport:
    """Fetch the three snapshots from a data source concurrently, then compute the report."""
    products, purchases, sales = await asyncio.gather(
        source.get_all_products(),
        source.get_all_purchases(),
        source.get_all_sales(),
    )
    return await compute_analytics_async(
        products, purchases, sales, window_start, window_end, costing_method, **kwargs
    )
