"""
Inventory valuation: on-hand quantity times unit cost, per product and in total.
"""

import logging

from analytics.aggregation import AggregatedData
from analytics.cost_basis import CostBasisEngine
from config.config import AnalyticsConfig
from models.analytics import ValuationEntry, ValuationReport
from models.enums import CostingMethod

logger = logging.getLogger(__name__)


def build_valuation(
    data: AggregatedData,
    method: str | CostingMethod | None,
    config: AnalyticsConfig | None = None,
) -> ValuationReport:
    """
    Value every in-scope product under the requested costing method.

    The report total is the plain sum of entry values taken in entry order,
    so it equals ``sum(entry.total_value for entry in report.entries)`` exactly.
    """
    config = config or AnalyticsConfig()
    engine = CostBasisEngine(method)
    lots_by_product = (
        data.purchase_history_by_product if config.valuation_uses_full_history else data.purchases_by_product
    )

    entries: list[ValuationEntry] = []
    for product in data.products:
        on_hand = product.current_quantity
        unit_cost = engine.unit_cost(lots_by_product.get(product.id, []), on_hand)
        entries.append(
            ValuationEntry(
                product_id=product.id,
                product_name=product.name,
                unit_cost=unit_cost,
                on_hand_quantity=on_hand,
                total_value=unit_cost * on_hand,
            )
        )

    total_value = sum(entry.total_value for entry in entries)
    logger.info(f"Valued {len(entries)} products with {engine.method.value}: total {total_value:.2f}")
    return ValuationReport(
        method=engine.method,
        entries=entries,
        total_value=total_value,
        product_count=len(entries),
        fallback_applied=engine.fallback_applied,
    )
