import pandas as pd
import numpy as np


def generate_synthetic_inventory_data(
    start_date_str: str = "2024-01-01",
    end_date_str: str = "2024-03-31",
    num_products: int = 12,
    seed: int = 42,
    num_categories: int = 3,
    base_daily_sales_lambda: float = 2.0,
    sales_lambda_decay: float = 0.15,
    no_sale_day_prob: float = 0.35,
    dead_stock_every: int = 5,
    base_unit_cost: float = 20.0,
    unit_cost_step: float = 7.5,
    cost_drift_std_dev: float = 0.05,
    markup: float = 0.4,
    purchase_interval_days: int = 21,
    purchase_quantity_range: tuple[int, int] = (20, 80),
    reorder_point_range: tuple[int, int] = (5, 25),
    max_on_hand: int = 150,
) -> tuple[list[dict], list[dict], list[dict]]:
    """
    Generates synthetic products, purchase lots and sale lines for the analytics engine.

    Records use the camelCase field names of the upstream collaborators
    (``productId``, ``unitCost``, ``totalAmount``, ``date``...).

    Args:
        start_date_str: Start date string (YYYY-MM-DD).
        end_date_str: End date string (YYYY-MM-DD).
        num_products: Number of products to simulate.
        seed: Random seed for reproducibility.
        num_categories: Number of product categories.
        base_daily_sales_lambda: Poisson mean of daily unit sales for the best seller.
        sales_lambda_decay: Relative drop in sales mean for each following product,
            which gives the revenue curve a Pareto-like shape.
        no_sale_day_prob: Probability that a product records no sale on a given day.
        dead_stock_every: Every n-th product never sells (0 disables).
        base_unit_cost: Unit cost of the first product.
        unit_cost_step: Added unit cost per product index.
        cost_drift_std_dev: Relative std dev of unit cost between purchase lots.
        markup: Selling price markup over unit cost.
        purchase_interval_days: Days between purchase lots for a product.
        purchase_quantity_range: Inclusive (min, max) quantity per purchase lot.
        reorder_point_range: Inclusive (min, max) reorder point.
        max_on_hand: Upper bound for current quantity.

    Returns:
        A tuple containing:
        - products: list of product dicts.
        - purchases: list of purchase lot dicts.
        - sales: list of sale line dicts.
    """
    np.random.seed(seed)
    dates = pd.date_range(start=start_date_str, end=end_date_str)
    categories = [f"Category {i}" for i in range(1, num_categories + 1)]

    products, purchases, sales = [], [], []
    for index in range(num_products):
        product_id = f"P{index + 1:03d}"
        unit_cost = round(base_unit_cost + unit_cost_step * index, 2)
        price = round(unit_cost * (1 + markup), 2)

        purchased_total = 0
        for lot_date in dates[::purchase_interval_days]:
            quantity = int(np.random.randint(purchase_quantity_range[0], purchase_quantity_range[1] + 1))
            lot_cost = max(0.0, unit_cost * (1 + np.random.normal(0, cost_drift_std_dev)))
            purchases.append(
                {
                    "productId": product_id,
                    "quantity": quantity,
                    "unitCost": round(float(lot_cost), 2),
                    "date": lot_date.isoformat(),
                }
            )
            purchased_total += quantity

        is_dead_stock = dead_stock_every > 0 and (index + 1) % dead_stock_every == 0
        sales_lambda = base_daily_sales_lambda * (1 - sales_lambda_decay) ** index
        sold_total = 0
        if not is_dead_stock:
            for sale_date in dates:
                if np.random.rand() < no_sale_day_prob:
                    continue
                quantity = int(np.random.poisson(sales_lambda))
                if quantity <= 0:
                    continue
                sales.append(
                    {
                        "productId": product_id,
                        "productName": f"Product {index + 1}",
                        "quantity": quantity,
                        "totalAmount": round(quantity * price, 2),
                        "date": (sale_date + pd.Timedelta(hours=int(np.random.randint(9, 21)))).isoformat(),
                    }
                )
                sold_total += quantity

        products.append(
            {
                "id": product_id,
                "name": f"Product {index + 1}",
                "category": categories[index % num_categories],
                "quantity": int(min(max(purchased_total - sold_total, 0), max_on_hand)),
                "reorderPoint": int(np.random.randint(reorder_point_range[0], reorder_point_range[1] + 1)),
                "reorderQuantity": 50,
            }
        )

    print(
        f"Generated {len(products)} products, {len(purchases)} purchase lots and {len(sales)} sales "
        f"between {start_date_str} and {end_date_str}"
    )
    return products, purchases, sales
