"""
Data aggregation for the analytics engine.

Parses raw product, purchase and sale records, filters transactions to the
reporting window and groups them per product id. Malformed records and
records that reference unknown products are skipped and counted, never raised.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from models.analytics import ReportingWindow, SkipStats
from models.inventory import Product, ProductReference, PurchaseLot, SaleRecord

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass
class AggregatedData:
    """
    Per-product view of one request's inputs.

    ``purchases_by_product`` and ``sales_by_product`` hold only records inside
    the window. ``purchase_history_by_product`` holds every valid lot,
    oldest first, regardless of the window.
    """

    window: ReportingWindow
    products: list[Product]
    purchases_by_product: dict[str, list[PurchaseLot]] = field(default_factory=dict)
    purchase_history_by_product: dict[str, list[PurchaseLot]] = field(default_factory=dict)
    sales_by_product: dict[str, list[SaleRecord]] = field(default_factory=dict)
    daily_sales_by_product: dict[str, list[tuple[date, float]]] = field(default_factory=dict)
    monthly_movement: pd.DataFrame = field(default_factory=lambda: _empty_movement())
    skipped: SkipStats = field(default_factory=SkipStats)

    def windowed_purchases(self) -> list[PurchaseLot]:
        return [lot for lots in self.purchases_by_product.values() for lot in lots]

    def windowed_sales(self) -> list[SaleRecord]:
        return [sale for sales in self.sales_by_product.values() for sale in sales]

    def sold_quantity(self, product_id: str) -> float:
        return sum(sale.quantity for sale in self.sales_by_product.get(product_id, []))

    def revenue(self, product_id: str) -> float:
        return sum(sale.revenue_amount for sale in self.sales_by_product.get(product_id, []))

    def has_sales(self, product_id: str) -> bool:
        return bool(self.sales_by_product.get(product_id))

    def product_movement(self, product_id: str) -> pd.DataFrame:
        """Month-bucketed purchased / sold quantities for a single product."""
        return monthly_movement(
            self.purchases_by_product.get(product_id, []),
            self.sales_by_product.get(product_id, []),
        )


def _empty_movement() -> pd.DataFrame:
    return pd.DataFrame({"purchased": pd.Series(dtype=float), "sold": pd.Series(dtype=float)})


def _monthly_totals(events: list[tuple[datetime, float]]) -> pd.Series:
    if not events:
        return pd.Series(dtype=float)
    frame = pd.DataFrame(events, columns=["date", "quantity"])
    months = pd.to_datetime(frame["date"]).dt.strftime("%Y-%m")
    return frame.groupby(months)["quantity"].sum()


def monthly_movement(purchases: list[PurchaseLot], sales: list[SaleRecord]) -> pd.DataFrame:
    """
    Sum purchased and sold quantities per ``YYYY-MM`` month.

    Returns:
        pd.DataFrame indexed by month (ascending) with float columns
        ``purchased`` and ``sold``. Months with activity on only one side
        carry 0 on the other.
    """
    purchased = _monthly_totals([(lot.purchase_date, lot.quantity) for lot in purchases])
    sold = _monthly_totals([(sale.sale_date, sale.quantity) for sale in sales])
    if purchased.empty and sold.empty:
        return _empty_movement()
    movement = pd.concat({"purchased": purchased, "sold": sold}, axis=1).fillna(0.0)
    return movement.astype(float).sort_index()


def daily_sales(sales: list[SaleRecord]) -> dict[str, list[tuple[date, float]]]:
    """Collapse sale lines into one summed quantity per product per calendar date, dates ascending."""
    if not sales:
        return {}
    frame = pd.DataFrame(
        {
            "product_id": [sale.product_id for sale in sales],
            "day": [sale.sale_day for sale in sales],
            "quantity": [sale.quantity for sale in sales],
        }
    )
    totals = frame.groupby(["product_id", "day"], sort=True)["quantity"].sum()
    series: dict[str, list[tuple[date, float]]] = defaultdict(list)
    for (product_id, day), quantity in totals.items():
        series[product_id].append((day, float(quantity)))
    return dict(series)


def _parse_records(
    raw_records: Iterable[Any], model: type[RecordT], kind: str
) -> tuple[list[RecordT], int]:
    parsed: list[RecordT] = []
    malformed = 0
    for raw in raw_records:
        if isinstance(raw, model):
            parsed.append(raw)
            continue
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as e:
            malformed += 1
            logger.debug(f"Skipping malformed {kind} record {raw!r}: {e.error_count()} error(s)")
    return parsed, malformed


class ProductResolver:
    """Resolves a record's product reference to a product id, preferring the id over the name."""

    def __init__(self, products: list[Product]):
        self._ids = {product.id for product in products}
        self._ids_by_name: dict[str, str] = {}
        for product in products:
            self._ids_by_name.setdefault(product.name, product.id)

    def resolve(self, record: ProductReference) -> str | None:
        if record.product_id and record.product_id in self._ids:
            return record.product_id
        if record.product_name:
            return self._ids_by_name.get(record.product_name)
        return None


def _unique_products(products: list[Product], skipped: SkipStats) -> list[Product]:
    seen: set[str] = set()
    unique: list[Product] = []
    for product in products:
        if product.id in seen:
            skipped.duplicate_products += 1
            logger.debug(f"Skipping duplicate product id {product.id}")
            continue
        seen.add(product.id)
        unique.append(product)
    return unique


def aggregate(
    products: Iterable[Any],
    purchases: Iterable[Any],
    sales: Iterable[Any],
    window: ReportingWindow,
    category: str | None = None,
) -> AggregatedData:
    """
    Parse, filter and group the request inputs.

    Args:
        products: Product records (dicts in either naming convention, or Product).
        purchases: Purchase lot records.
        sales: Sale records.
        window: Inclusive reporting window.
        category: Optional product category filter; ``None`` or ``"all"`` keeps every product.

    Returns:
        AggregatedData keyed by product id.
    """
    skipped = SkipStats()

    parsed_products, skipped.malformed_products = _parse_records(products, Product, "product")
    all_products = _unique_products(parsed_products, skipped)
    resolver = ProductResolver(all_products)

    if category and category != ALL_CATEGORIES:
        in_scope = [product for product in all_products if product.category == category]
    else:
        in_scope = all_products
    scope_ids = {product.id for product in in_scope}

    lots, skipped.malformed_purchases = _parse_records(purchases, PurchaseLot, "purchase")
    sale_records, skipped.malformed_sales = _parse_records(sales, SaleRecord, "sale")

    history: dict[str, list[PurchaseLot]] = defaultdict(list)
    windowed_lots: dict[str, list[PurchaseLot]] = defaultdict(list)
    for lot in lots:
        product_id = resolver.resolve(lot)
        if product_id is None:
            skipped.unknown_product += 1
            continue
        if product_id not in scope_ids:
            continue
        lot = lot.model_copy(update={"product_id": product_id})
        history[product_id].append(lot)
        if window.contains(lot.purchase_date):
            windowed_lots[product_id].append(lot)

    windowed_sales: dict[str, list[SaleRecord]] = defaultdict(list)
    for sale in sale_records:
        product_id = resolver.resolve(sale)
        if product_id is None:
            skipped.unknown_product += 1
            continue
        if product_id not in scope_ids or not window.contains(sale.sale_date):
            continue
        windowed_sales[product_id].append(sale.model_copy(update={"product_id": product_id}))

    # Stable sort keeps input order for lots received on the same date
    for product_id in history:
        history[product_id].sort(key=lambda lot: lot.purchase_date)

    data = AggregatedData(
        window=window,
        products=in_scope,
        purchases_by_product=dict(windowed_lots),
        purchase_history_by_product=dict(history),
        sales_by_product=dict(windowed_sales),
        skipped=skipped,
    )
    data.daily_sales_by_product = daily_sales(data.windowed_sales())
    data.monthly_movement = monthly_movement(data.windowed_purchases(), data.windowed_sales())

    if skipped.total:
        logger.info(
            f"Skipped {skipped.total} record(s): {skipped.malformed_products} malformed products, "
            f"{skipped.duplicate_products} duplicate products, {skipped.malformed_purchases} malformed purchases, "
            f"{skipped.malformed_sales} malformed sales, {skipped.unknown_product} unknown product references"
        )
    logger.info(
        f"Aggregated {len(in_scope)} products, {sum(len(v) for v in windowed_lots.values())} purchases and "
        f"{sum(len(v) for v in windowed_sales.values())} sales in window "
        f"{window.start.isoformat()} .. {window.end.isoformat()}"
    )
    return data
