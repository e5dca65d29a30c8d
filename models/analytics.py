"""
Derived analytics results. Every object here is created fresh for one request
and never persisted or updated in place.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from models.enums import (
    ABCCategory,
    CostingMethod,
    ForecastConfidence,
    HealthBucket,
    PerformanceStatus,
    TurnoverBucket,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_serializable(value: Any) -> Any:
    """Convert result objects into JSON-ready structures with camelCase keys."""
    if isinstance(value, BranchResult):
        return to_serializable(value.value) if value.ok else {"error": value.error}
    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): to_serializable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, dict):
        return {
            (k.value if isinstance(k, Enum) else str(k)): to_serializable(v) for k, v in value.items()
        }
    if isinstance(value, list | tuple):
        return [to_serializable(v) for v in value]
    return value


@dataclass(frozen=True)
class ReportingWindow:
    """Inclusive [start, end] reporting window in naive UTC."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def days(self) -> int:
        """Whole days covered by the window, never less than one."""
        return max(round((self.end - self.start).total_seconds() / 86400), 1)


@dataclass
class SkipStats:
    """Counts of input records excluded from aggregation."""

    malformed_products: int = 0
    duplicate_products: int = 0
    malformed_purchases: int = 0
    malformed_sales: int = 0
    unknown_product: int = 0

    @property
    def total(self) -> int:
        return (
            self.malformed_products
            + self.duplicate_products
            + self.malformed_purchases
            + self.malformed_sales
            + self.unknown_product
        )


# --- Valuation ---


@dataclass(frozen=True)
class ValuationEntry:
    product_id: str
    product_name: str
    unit_cost: float
    on_hand_quantity: int
    total_value: float


@dataclass
class ValuationReport:
    method: CostingMethod
    entries: list[ValuationEntry]
    total_value: float
    product_count: int
    fallback_applied: bool = False

    def by_product(self) -> dict[str, ValuationEntry]:
        return {entry.product_id: entry for entry in self.entries}


# --- ABC / Pareto ---


@dataclass(frozen=True)
class ABCEntry:
    rank: int
    product_id: str
    product_name: str
    revenue: float
    share_percent: float
    cumulative_percent: float
    category: ABCCategory


@dataclass(frozen=True)
class ABCCategorySummary:
    count: int = 0
    revenue: float = 0.0
    share_percent: float = 0.0


@dataclass
class ABCReport:
    entries: list[ABCEntry]
    summary: dict[ABCCategory, ABCCategorySummary]
    total_revenue: float

    def category_of(self, product_id: str) -> ABCCategory | None:
        for entry in self.entries:
            if entry.product_id == product_id:
                return entry.category
        return None


# --- Turnover ---


@dataclass(frozen=True)
class TurnoverEntry:
    product_id: str
    product_name: str
    category: str
    sold_quantity: float
    average_stock: float
    turnover_ratio: float
    bucket: TurnoverBucket


@dataclass
class TurnoverReport:
    entries: list[TurnoverEntry]
    average_turnover: float
    high_turnover_count: int
    low_turnover_count: int


# --- Demand forecast ---


@dataclass(frozen=True)
class ForecastEntry:
    product_id: str
    product_name: str
    average_daily_demand: float
    trend_per_day: float
    forecasted_demand: float
    confidence: ForecastConfidence
    observation_days: int


@dataclass
class ForecastReport:
    entries: list[ForecastEntry]

    def by_product(self) -> dict[str, ForecastEntry]:
        return {entry.product_id: entry for entry in self.entries}


# --- Stock health ---


@dataclass(frozen=True)
class HealthEntry:
    product_id: str
    product_name: str
    bucket: HealthBucket


@dataclass
class StockHealthReport:
    entries: list[HealthEntry]
    counts: dict[HealthBucket, int]
    overall_score: float
    total_products: int

    @property
    def healthy_count(self) -> int:
        return self.counts.get(HealthBucket.HEALTHY, 0)


# --- Stock movement ---


@dataclass(frozen=True)
class MonthlyMovement:
    month: str
    purchased_quantity: float
    sold_quantity: float
    net_movement: float


@dataclass
class StockMovementReport:
    monthly: list[MonthlyMovement]
    total_purchased: float
    total_sold: float
    net_movement: float


# --- Performance metrics ---


@dataclass(frozen=True)
class PerformanceEntry:
    product_id: str
    product_name: str
    sales_velocity: float
    stock_level: int
    reorder_point: int
    days_of_stock: int
    status: PerformanceStatus


@dataclass
class PerformanceReport:
    entries: list[PerformanceEntry]
    window_days: int


# --- Orchestration ---


@dataclass
class BranchResult:
    """Tagged outcome of one analysis branch: a value on success, an error message on failure."""

    name: str
    ok: bool
    value: Any = None
    error: str | None = None


@dataclass
class AnalyticsSummary:
    total_products: int
    total_value: float
    average_turnover: float
    stock_health_score: float
    skipped_records: int


@dataclass
class AnalyticsReport:
    window: ReportingWindow
    costing_method: str
    valuation: BranchResult
    abc_analysis: BranchResult
    turnover_analysis: BranchResult
    demand_forecast: BranchResult
    stock_health: BranchResult
    stock_movement: BranchResult
    performance_metrics: BranchResult
    summary: AnalyticsSummary
    skipped_records: SkipStats = field(default_factory=SkipStats)

    def branches(self) -> list[BranchResult]:
        return [
            self.valuation,
            self.abc_analysis,
            self.turnover_analysis,
            self.demand_forecast,
            self.stock_health,
            self.stock_movement,
            self.performance_metrics,
        ]

    @property
    def failed_branches(self) -> list[str]:
        return [branch.name for branch in self.branches() if not branch.ok]

    def to_dict(self) -> dict[str, Any]:
        return to_serializable(self)
