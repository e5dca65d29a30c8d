"""
ABC (Pareto) classification of products by realized revenue.

Products are ranked by revenue in the window, highest first, and placed into
bands by cumulative revenue share: up to 70% is A, up to 90% is B, the rest
is C. Equal revenues keep the product input order.
"""

import logging

from analytics.aggregation import AggregatedData
from config.config import AnalyticsConfig
from models.analytics import ABCCategorySummary, ABCEntry, ABCReport
from models.enums import ABCCategory

logger = logging.getLogger(__name__)


def _band(cumulative_percent: float, config: AnalyticsConfig) -> ABCCategory:
    if cumulative_percent <= config.abc_a_threshold:
        return ABCCategory.A
    if cumulative_percent <= config.abc_b_threshold:
        return ABCCategory.B
    return ABCCategory.C


def _empty_summary() -> dict[ABCCategory, ABCCategorySummary]:
    return {category: ABCCategorySummary() for category in ABCCategory}


def classify_revenue(data: AggregatedData, config: AnalyticsConfig | None = None) -> ABCReport:
    """
    Rank products by revenue and assign A/B/C bands.

    Every in-scope product is ranked, including products without sales in the
    window. A product whose share alone passes the A threshold lands in B or
    C, so band A may be empty. With zero total revenue no ranking is
    meaningful and the report is empty.
    """
    config = config or AnalyticsConfig()
    revenue = {product.id: data.revenue(product.id) for product in data.products}
    total_revenue = sum(revenue.values())
    if total_revenue <= 0:
        logger.info("No revenue in window; ABC classification skipped")
        return ABCReport(entries=[], summary=_empty_summary(), total_revenue=0.0)

    # sorted() is stable with reverse=True, so ties keep input order
    ranked = sorted(data.products, key=lambda product: revenue[product.id], reverse=True)

    entries: list[ABCEntry] = []
    cumulative_revenue = 0.0
    for rank, product in enumerate(ranked, start=1):
        product_revenue = revenue[product.id]
        cumulative_revenue += product_revenue
        if rank == len(ranked):
            cumulative_percent = 100.0
        else:
            cumulative_percent = min(cumulative_revenue * 100.0 / total_revenue, 100.0)
        category = _band(cumulative_percent, config)
        entries.append(
            ABCEntry(
                rank=rank,
                product_id=product.id,
                product_name=product.name,
                revenue=product_revenue,
                share_percent=product_revenue * 100.0 / total_revenue,
                cumulative_percent=cumulative_percent,
                category=category,
            )
        )

    summary = {}
    for category in ABCCategory:
        members = [entry for entry in entries if entry.category == category]
        band_revenue = sum(entry.revenue for entry in members)
        summary[category] = ABCCategorySummary(
            count=len(members),
            revenue=band_revenue,
            share_percent=band_revenue * 100.0 / total_revenue,
        )

    logger.info(
        f"ABC classification: A={summary[ABCCategory.A].count}, "
        f"B={summary[ABCCategory.B].count}, C={summary[ABCCategory.C].count}"
    )
    return ABCReport(entries=entries, summary=summary, total_revenue=total_revenue)
