"""
Demo script for the inventory valuation and analytics engine.

Generates a synthetic quarter of purchases and sales, serves them through an
in-memory inventory source and prints the analytics report for each costing
method.
"""

import argparse
import asyncio
import json

from analytics.orchestrator import compute_analytics_from_source
from config.config import AnalyticsConfig
from connectors.inventory_source import InMemoryInventorySource
from models.enums import CostingMethod
from utils.data_generation import generate_synthetic_inventory_data
from utils.logger import get_logger

logger = get_logger("inventory_analytics_demo")


def _print_report(report) -> None:
    summary = report.summary
    print(f"\n=== {report.costing_method.upper()} ===")
    print(f"Products:            {summary.total_products}")
    print(f"Inventory value:     {summary.total_value:,.2f}")
    print(f"Average turnover:    {summary.average_turnover:.2f}")
    print(f"Stock health score:  {summary.stock_health_score:.1f}")
    if report.abc_analysis.ok:
        for category, band in report.abc_analysis.value.summary.items():
            print(f"  Band {category.value}: {band.count} products, {band.share_percent:.1f}% of revenue")
    if report.failed_branches:
        print(f"Failed branches: {', '.join(report.failed_branches)}")


async def main(args: argparse.Namespace) -> None:
    products, purchases, sales = generate_synthetic_inventory_data(
        start_date_str=args.start, end_date_str=args.end, num_products=args.products, seed=args.seed
    )
    source = InMemoryInventorySource(products, purchases, sales)
    config = AnalyticsConfig.from_env()

    for method in CostingMethod:
        report = await compute_analytics_from_source(
            source, window_end=args.end, costing_method=method, date_range=args.date_range, config=config
        )
        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            _print_report(report)
    logger.info("Demo finished")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inventory analytics demo")
    parser.add_argument("--start", default="2024-01-01")
    parser.add_argument("--end", default="2024-03-31")
    parser.add_argument("--products", type=int, default=12)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--date-range", default="last_90_days")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    asyncio.run(main(parser.parse_args()))
