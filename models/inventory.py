"""
Inventory-related input records for the analytics engine.
Includes the Product, PurchaseLot and SaleRecord models supplied by the
inventory, purchasing and sales collaborators.

Collaborators name their fields either in camelCase or snake_case, so every
field accepts both spellings (plus the legacy names used by older sources).
"""

from datetime import date, datetime
from numbers import Number
from typing import Any

import pandas as pd
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_REORDER_POINT = 10
DEFAULT_REORDER_QUANTITY = 50
DEFAULT_CATEGORY = "Uncategorized"

_REORDER_POINT_KEYS = ("reorder_point", "reorderPoint", "reorder_level", "reorderLevel")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a date-like value into a naive UTC datetime.

    Accepts datetimes, dates, pandas Timestamps and ISO-8601 strings.
    Numbers are rejected: pandas would read them as epoch nanoseconds.
    Timezone-aware values are converted to UTC and made naive so that every
    timestamp in a request compares consistently.

    Raises:
        ValueError: If the value is missing or cannot be parsed.
    """
    if value is None or value == "":
        raise ValueError("date is missing")
    if isinstance(value, Number):
        raise ValueError(f"numeric date {value!r} is not a timestamp")
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"unparseable date {value!r}: {e}") from e
    if pd.isna(timestamp):
        raise ValueError(f"unparseable date {value!r}")
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return timestamp.to_pydatetime()


class Product(BaseModel):
    """
    Product snapshot as owned by the inventory module. Read-only to the engine.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "product_id", "productId"))
    name: str = ""
    category: str = DEFAULT_CATEGORY
    current_quantity: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("current_quantity", "currentQuantity", "quantity"),
    )
    reorder_point: int = Field(
        default=DEFAULT_REORDER_POINT,
        ge=0,
        validation_alias=AliasChoices(*_REORDER_POINT_KEYS),
    )
    reorder_quantity: int = Field(
        default=DEFAULT_REORDER_QUANTITY,
        ge=0,
        validation_alias=AliasChoices("reorder_quantity", "reorderQuantity"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _category_or_default(cls, value: Any) -> Any:
        return value or DEFAULT_CATEGORY

    @field_validator("current_quantity", mode="before")
    @classmethod
    def _missing_quantity_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _drop_null_reorder_point(cls, data: Any) -> Any:
        # A null reorder point counts as absent, leaving the field unset
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (k in _REORDER_POINT_KEYS and v is None)}
        return data

    @field_validator("reorder_quantity", mode="before")
    @classmethod
    def _reorder_quantity_default(cls, value: Any) -> Any:
        return DEFAULT_REORDER_QUANTITY if value is None else value

    @property
    def has_reorder_point(self) -> bool:
        """True when the source record carried a reorder point, False when the default applies."""
        return "reorder_point" in self.model_fields_set


class ProductReference(BaseModel):
    """Base for transaction records that point at a product by id or by name."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    product_id: str | None = Field(default=None, validation_alias=AliasChoices("product_id", "productId"))
    product_name: str | None = Field(default=None, validation_alias=AliasChoices("product_name", "productName"))

    @field_validator("product_id", mode="before")
    @classmethod
    def _product_id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _requires_product_reference(self):
        if not self.product_id and not self.product_name:
            raise ValueError("record references no product (product_id or product_name required)")
        return self


class PurchaseLot(ProductReference):
    """One receipt of stock at a specific unit cost and date."""

    quantity: float = Field(gt=0)
    unit_cost: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("unit_cost", "unitCost", "unit_price", "unitPrice"),
    )
    purchase_date: datetime = Field(
        validation_alias=AliasChoices("purchase_date", "purchaseDate", "date", "created_at", "createdAt")
    )

    @field_validator("unit_cost", mode="before")
    @classmethod
    def _missing_cost_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("purchase_date", mode="before")
    @classmethod
    def _parse_purchase_date(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_cost


class SaleRecord(ProductReference):
    """One sale line. Revenue is the realized line total."""

    quantity: float = Field(gt=0)
    revenue_amount: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices(
            "revenue_amount", "revenueAmount", "total_amount", "totalAmount", "total"
        ),
    )
    sale_date: datetime = Field(
        validation_alias=AliasChoices("sale_date", "saleDate", "date", "created_at", "createdAt")
    )

    @field_validator("revenue_amount", mode="before")
    @classmethod
    def _missing_revenue_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("sale_date", mode="before")
    @classmethod
    def _parse_sale_date(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @property
    def sale_day(self) -> date:
        return self.sale_date.date()
