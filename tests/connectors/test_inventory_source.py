import pytest

from connectors.inventory_source import InMemoryInventorySource, InventoryDataSource


@pytest.fixture
def source(scenario_products, scenario_purchases, scenario_sales):
    return InMemoryInventorySource(scenario_products, scenario_purchases, scenario_sales)


def test_implements_protocol(source):
    assert isinstance(source, InventoryDataSource)


@pytest.mark.asyncio
async def test_accessors_return_records(source, scenario_products, scenario_purchases, scenario_sales):
    assert await source.get_all_products() == scenario_products
    assert await source.get_all_purchases() == scenario_purchases
    assert await source.get_all_sales() == scenario_sales


@pytest.mark.asyncio
async def test_snapshots_are_copies(source, scenario_products):
    products = await source.get_all_products()
    products[0]["quantity"] = 999
    products.append({"id": "NEW"})

    again = await source.get_all_products()
    assert again == scenario_products
    assert again[0]["quantity"] == 15


@pytest.mark.asyncio
async def test_empty_source():
    source = InMemoryInventorySource(latency=0.001)
    assert await source.get_all_products() == []
    assert await source.get_all_purchases() == []
    assert await source.get_all_sales() == []
