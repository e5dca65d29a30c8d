"""
Cost basis engine: per-product unit cost under FIFO, LIFO or Weighted-Average.

FIFO and LIFO walk the product's purchase lots (oldest first, or newest
first) and consume up to the on-hand quantity. When on-hand exceeds every
recorded lot, the shortfall carries zero cost, which dilutes the unit cost;
opening balances are not tracked, so no reconciliation is attempted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from models.enums import CostingMethod
from models.inventory import PurchaseLot

logger = logging.getLogger(__name__)

_METHOD_ALIASES: dict[str, CostingMethod] = {
    "fifo": CostingMethod.FIFO,
    "lifo": CostingMethod.LIFO,
    "weighted_average": CostingMethod.WEIGHTED_AVERAGE,
    "weighted-average": CostingMethod.WEIGHTED_AVERAGE,
    "weighted average": CostingMethod.WEIGHTED_AVERAGE,
    "average": CostingMethod.WEIGHTED_AVERAGE,
}


def resolve_costing_method(method: str | CostingMethod | None) -> tuple[CostingMethod, bool]:
    """
    Map a caller-supplied method name to a CostingMethod.

    Returns:
        (method, fallback_applied). Unknown or missing names fall back to
        Weighted-Average; this is the only implicit method resolution.
    """
    if isinstance(method, CostingMethod):
        return method, False
    key = str(method).strip().lower() if method is not None else ""
    resolved = _METHOD_ALIASES.get(key)
    if resolved is None:
        logger.warning(f"Unknown costing method {method!r}; falling back to weighted average")
        return CostingMethod.WEIGHTED_AVERAGE, True
    return resolved, False


@dataclass(frozen=True)
class ConsumptionStep:
    """Quantity taken from one lot during a FIFO/LIFO walk."""

    purchase_date: datetime
    quantity: float
    unit_cost: float

    @property
    def cost(self) -> float:
        return self.quantity * self.unit_cost


def consume_lots(lots: Sequence[PurchaseLot], on_hand: float, newest_first: bool = False) -> list[ConsumptionStep]:
    """
    Walk lots in date order, taking ``min(remaining, lot.quantity)`` from each
    until ``on_hand`` is covered or the lots run out.

    Lots sharing a date keep their input order (reversed for a newest-first walk).
    """
    ordered = sorted(lots, key=lambda lot: lot.purchase_date)
    if newest_first:
        ordered.reverse()

    steps: list[ConsumptionStep] = []
    remaining = on_hand
    for lot in ordered:
        if remaining <= 0:
            break
        taken = min(remaining, lot.quantity)
        steps.append(ConsumptionStep(purchase_date=lot.purchase_date, quantity=taken, unit_cost=lot.unit_cost))
        remaining -= taken
    return steps


def _layered_unit_cost(lots: Sequence[PurchaseLot], on_hand: float, newest_first: bool) -> float:
    if on_hand <= 0 or not lots:
        return 0.0
    consumed_cost = sum(step.cost for step in consume_lots(lots, on_hand, newest_first=newest_first))
    return consumed_cost / on_hand


def fifo_unit_cost(lots: Sequence[PurchaseLot], on_hand: float) -> float:
    return _layered_unit_cost(lots, on_hand, newest_first=False)


def lifo_unit_cost(lots: Sequence[PurchaseLot], on_hand: float) -> float:
    return _layered_unit_cost(lots, on_hand, newest_first=True)


def weighted_average_unit_cost(lots: Sequence[PurchaseLot]) -> float:
    """Quantity-weighted mean cost over every lot, independent of on-hand quantity."""
    total_quantity = sum(lot.quantity for lot in lots)
    if total_quantity <= 0:
        return 0.0
    return sum(lot.total_cost for lot in lots) / total_quantity


class CostBasisEngine:
    """
    Computes unit costs for one costing method.

    Usage:
        engine = CostBasisEngine("fifo")
        cost = engine.unit_cost(lots, on_hand=15)
    """

    def __init__(self, method: str | CostingMethod | None = CostingMethod.WEIGHTED_AVERAGE):
        self.method, self.fallback_applied = resolve_costing_method(method)

    def unit_cost(self, lots: Sequence[PurchaseLot], on_hand: float) -> float:
        """Unit cost for the given lots; 0 when nothing is on hand or nothing was purchased."""
        if on_hand <= 0 or not lots:
            return 0.0
        if self.method == CostingMethod.FIFO:
            return fifo_unit_cost(lots, on_hand)
        if self.method == CostingMethod.LIFO:
            return lifo_unit_cost(lots, on_hand)
        return weighted_average_unit_cost(lots)
