"""
Centralized Enum definitions for the inventory analytics engine.
"""

from enum import Enum


class CostingMethod(str, Enum):
    """Conventions for assigning a monetary cost to units on hand"""

    FIFO = "fifo"  # First In, First Out
    LIFO = "lifo"  # Last In, First Out
    WEIGHTED_AVERAGE = "weighted_average"


class ABCCategory(str, Enum):
    """Revenue contribution bands of a Pareto analysis"""

    A = "A"
    B = "B"
    C = "C"


class TurnoverBucket(str, Enum):
    """Sell-through buckets for the turnover ratio"""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class ForecastConfidence(str, Enum):
    """Confidence of a demand forecast, driven by the number of observed sale days"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HealthBucket(str, Enum):
    """Stock health labels, listed in evaluation priority order"""

    DEAD_STOCK = "dead-stock"
    LOW_STOCK = "low-stock"
    OVERSTOCK = "overstock"
    HEALTHY = "healthy"


class PerformanceStatus(str, Enum):
    """Stock level status relative to the reorder point"""

    LOW = "low"
    WARNING = "warning"
    GOOD = "good"


class DateRangePreset(str, Enum):
    """Named reporting windows ending at the request time"""

    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    LAST_90_DAYS = "last_90_days"
    LAST_YEAR = "last_year"
