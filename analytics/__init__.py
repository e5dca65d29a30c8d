"""
Inventory valuation and analytics engine.

Turns product, purchase and sale snapshots into valuation, ABC, turnover,
forecast, stock health, movement and performance reports.
"""
