"""
Stock movement analytics: monthly purchased vs. sold quantities in the window.
"""

from analytics.aggregation import AggregatedData
from models.analytics import MonthlyMovement, StockMovementReport


def analyze_stock_movement(data: AggregatedData) -> StockMovementReport:
    monthly = [
        MonthlyMovement(
            month=str(month),
            purchased_quantity=float(row["purchased"]),
            sold_quantity=float(row["sold"]),
            net_movement=float(row["purchased"] - row["sold"]),
        )
        for month, row in data.monthly_movement.iterrows()
    ]
    total_purchased = sum(lot.quantity for lot in data.windowed_purchases())
    total_sold = sum(sale.quantity for sale in data.windowed_sales())
    return StockMovementReport(
        monthly=monthly,
        total_purchased=total_purchased,
        total_sold=total_sold,
        net_movement=total_purchased - total_sold,
    )
