"""
Synthetic Data Generator

Generates a realistic gold star schema for development and demos:
- Customers with demographics
- Products across categories with a cost
- Sales line items spread over several years
"""

import random
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import polars as pl
from faker import Faker
import numpy as np

from gold_analytics.config import get_settings
from gold_analytics.data.tables import GoldTables

fake = Faker()


# =============================================================================
# CONFIGURATION
# =============================================================================

CATEGORIES = [
    ("Bikes", ["Mountain Bikes", "Road Bikes", "Touring Bikes"]),
    ("Components", ["Frames", "Wheels", "Brakes", "Chains", "Pedals"]),
    ("Clothing", ["Jerseys", "Shorts", "Gloves", "Caps", "Socks"]),
    ("Accessories", ["Helmets", "Bottles and Cages", "Tires and Tubes", "Locks"]),
]

COST_RANGES = {
    "Bikes": (300, 2200),
    "Components": (20, 900),
    "Clothing": (3, 60),
    "Accessories": (1, 40),
}

COUNTRIES = [
    ("United States", 0.35),
    ("Australia", 0.20),
    ("United Kingdom", 0.12),
    ("Germany", 0.11),
    ("France", 0.11),
    ("Canada", 0.11),
]


# =============================================================================
# GENERATORS
# =============================================================================

class CustomerGenerator:
    """Generate customer dimension rows"""

    def generate(self, n: int = 1000) -> pl.DataFrame:
        """Generate n customers"""
        countries = [c[0] for c in COUNTRIES]
        weights = [c[1] for c in COUNTRIES]
        customers = []

        for key in range(1, n + 1):
            customers.append({
                "customer_key": key,
                "customer_number": f"AW{key:08d}",
                "first_name": fake.first_name(),
                "last_name": fake.last_name(),
                # A few customers come without a birthdate, as in real exports
                "birthdate": fake.date_of_birth(minimum_age=18, maximum_age=90)
                if random.random() > 0.01 else None,
                "gender": random.choice(["Male", "Female", "n/a"]),
                "country": random.choices(countries, weights=weights)[0],
            })

        return pl.DataFrame(customers, infer_schema_length=None)


class ProductGenerator:
    """Generate product dimension rows"""

    def generate(self, n: int = 200) -> pl.DataFrame:
        """Generate n products"""
        products = []

        for key in range(1, n + 1):
            category, subcategories = random.choice(CATEGORIES)
            subcategory = random.choice(subcategories)
            low, high = COST_RANGES[category]

            products.append({
                "product_key": key,
                "product_name": f"{fake.word().title()} {subcategory} {key}",
                "category": category,
                "subcategory": subcategory,
                "cost": float(random.randint(low, high)),
            })

        return pl.DataFrame(products)


class SalesGenerator:
    """Generate sales fact rows for existing customers and products"""

    def __init__(
        self,
        customers_df: pl.DataFrame,
        products_df: pl.DataFrame,
    ):
        self.customer_keys = customers_df["customer_key"].to_list()
        self.product_data = products_df.select(["product_key", "cost"]).to_dicts()

    def generate(
        self,
        n_orders: int = 10000,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> pl.DataFrame:
        """Generate n_orders orders, each with one or more line items"""
        end_date = end_date or date.today()
        start_date = start_date or end_date - timedelta(days=4 * 365)
        span_days = (end_date - start_date).days

        lines = []

        for order_idx in range(1, n_orders + 1):
            order_number = f"SO{43000 + order_idx}"
            customer_key = random.choice(self.customer_keys)
            order_date = start_date + timedelta(days=random.randint(0, span_days))
            shipping_date = order_date + timedelta(days=7)

            n_items = np.random.choice([1, 2, 3, 4], p=[0.55, 0.25, 0.15, 0.05])

            for product in random.sample(self.product_data, k=min(int(n_items), len(self.product_data))):
                quantity = int(np.random.choice([1, 2, 3], p=[0.85, 0.10, 0.05]))
                # Markup over cost, kept integral like the warehouse prices
                price = float(round(product["cost"] * random.uniform(1.2, 1.8)))

                lines.append({
                    "order_number": order_number,
                    "product_key": product["product_key"],
                    "customer_key": customer_key,
                    # A small share of legacy rows lost their order date
                    "order_date": order_date if random.random() > 0.001 else None,
                    "shipping_date": shipping_date,
                    "sales_amount": price * quantity,
                    "quantity": quantity,
                    "price": price,
                })

        return pl.DataFrame(lines, infer_schema_length=None)


# =============================================================================
# MAIN GENERATOR
# =============================================================================

class DataGenerator:
    """Main data generator orchestrator"""

    def __init__(self, output_dir: Optional[str] = None, seed: int = 42):
        self.output_dir = Path(output_dir or get_settings().reporting.data_dir)

        # Seed for reproducibility
        random.seed(seed)
        np.random.seed(seed)
        Faker.seed(seed)

    def generate_all(
        self,
        n_customers: int = 1000,
        n_products: int = 200,
        n_orders: int = 10000,
        end_date: Optional[date] = None,
        save: bool = True,
    ) -> GoldTables:
        """Generate the complete gold dataset"""
        customers_df = CustomerGenerator().generate(n_customers)
        products_df = ProductGenerator().generate(n_products)
        sales_df = SalesGenerator(customers_df, products_df).generate(n_orders, end_date=end_date)

        tables = GoldTables.from_frames(customers_df, products_df, sales_df)

        if save:
            self._save_data(tables)

        return tables

    def _save_data(self, tables: GoldTables) -> None:
        """Save generated tables as CSV, the same layout the CSV loader reads"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for name, df in tables.by_name().items():
            df.write_csv(self.output_dir / f"{name}.csv")
