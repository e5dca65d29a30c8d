"""
Module: connectors.inventory_source

Read accessors the analytics engine consumes from the inventory, purchasing
and sales collaborators, plus an in-memory implementation for tests and demos.
"""

import asyncio
import copy
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class InventoryDataSource(Protocol):
    """Snapshot accessors. Each returns plain record dicts in either naming convention."""

    async def get_all_products(self) -> list[dict[str, Any]]: ...

    async def get_all_purchases(self) -> list[dict[str, Any]]: ...

    async def get_all_sales(self) -> list[dict[str, Any]]: ...


class InMemoryInventorySource:
    """
    In-memory inventory source.
    Every accessor returns a deep copy, so callers can never alter the stored records.
    """

    def __init__(
        self,
        products: list[dict[str, Any]] | None = None,
        purchases: list[dict[str, Any]] | None = None,
        sales: list[dict[str, Any]] | None = None,
        latency: float = 0.0,
    ):
        self._products = list(products or [])
        self._purchases = list(purchases or [])
        self._sales = list(sales or [])
        self.latency = latency

    async def _snapshot(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if self.latency:
            await asyncio.sleep(self.latency)
        return copy.deepcopy(records)

    async def get_all_products(self) -> list[dict[str, Any]]:
        return await self._snapshot(self._products)

    async def get_all_purchases(self) -> list[dict[str, Any]]:
        return await self._snapshot(self._purchases)

    async def get_all_sales(self) -> list[dict[str, Any]]:
        return await self._snapshot(self._sales)
