"""
Configuration classes for the inventory analytics engine.
Defines classification thresholds and request defaults in a type-safe, extensible way.
"""

import os
from dataclasses import dataclass, fields

from analytics.exceptions import AnalyticsConfigurationError
from utils.env import load_project_dotenv

ENV_PREFIX = "INVENTORY_ANALYTICS_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class AnalyticsConfig:
    # ABC bands: cumulative revenue share (percent) up to which a product is A / B
    abc_a_threshold: float = 70.0
    abc_b_threshold: float = 90.0
    # Turnover buckets
    high_turnover_ratio: float = 2.0
    low_turnover_ratio: float = 0.5
    # Forecast confidence: minimum distinct sale dates
    high_confidence_days: int = 10
    medium_confidence_days: int = 5
    # Stock health: overstock when quantity > reorder_point * overstock_multiplier
    overstock_multiplier: float = 3.0
    # Performance status: warning when quantity <= reorder_point * warning_stock_multiplier
    warning_stock_multiplier: float = 1.5
    days_of_stock_cap: int = 999
    default_costing_method: str = "weighted_average"
    default_date_range: str = "last_30_days"
    # Value stock against every recorded lot, not only lots inside the window
    valuation_uses_full_history: bool = True

    def __post_init__(self):
        if not 0 <= self.abc_a_threshold <= self.abc_b_threshold <= 100:
            raise AnalyticsConfigurationError(
                f"ABC thresholds must satisfy 0 <= A ({self.abc_a_threshold}) <= B ({self.abc_b_threshold}) <= 100"
            )
        if self.low_turnover_ratio > self.high_turnover_ratio:
            raise AnalyticsConfigurationError(
                f"low_turnover_ratio ({self.low_turnover_ratio}) exceeds high_turnover_ratio ({self.high_turnover_ratio})"
            )
        if self.medium_confidence_days > self.high_confidence_days:
            raise AnalyticsConfigurationError(
                f"medium_confidence_days ({self.medium_confidence_days}) exceeds high_confidence_days ({self.high_confidence_days})"
            )

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "AnalyticsConfig":
        """
        Build a config from ``INVENTORY_ANALYTICS_<FIELD>`` environment variables.
        A project-level ``.env`` is loaded first; unset variables keep their defaults.
        """
        load_project_dotenv()
        overrides = {}
        for config_field in fields(cls):
            raw = os.getenv(prefix + config_field.name.upper())
            if raw is None:
                continue
            overrides[config_field.name] = _coerce(config_field.name, config_field.type, raw)
        return cls(**overrides)


def _coerce(name: str, field_type, raw: str):
    value = raw.strip()
    if field_type is bool:
        if value.lower() in _TRUE_VALUES:
            return True
        if value.lower() in _FALSE_VALUES:
            return False
        raise AnalyticsConfigurationError(f"{ENV_PREFIX}{name.upper()}: expected a boolean, got {raw!r}")
    try:
        return field_type(value)
    except ValueError as e:
        raise AnalyticsConfigurationError(f"{ENV_PREFIX}{name.upper()}: {e}") from e


# Example usage:
# config = AnalyticsConfig(abc_a_threshold=80.0, abc_b_threshold=95.0)
# config = AnalyticsConfig.from_env()
