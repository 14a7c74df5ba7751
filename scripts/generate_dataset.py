"""
Gold Dataset Generator
Writes synthetic dim_customers, dim_products and fact_sales CSV exports
"""

import argparse
from datetime import date

from gold_analytics.data.generators import DataGenerator


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a synthetic gold dataset")
    parser.add_argument("--output-dir", default=None, help="Target directory (default: REPORT_DATA_DIR)")
    parser.add_argument("--customers", type=int, default=1000, help="Number of customers")
    parser.add_argument("--products", type=int, default=200, help="Number of products")
    parser.add_argument("--orders", type=int, default=10000, help="Number of orders")
    parser.add_argument("--end-date", type=date.fromisoformat, default=None, help="Last order date (YYYY-MM-DD)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    return parser.parse_args()


def main():
    args = parse_args()

    print("=" * 60)
    print("📊 Gold Dataset Generator")
    print("=" * 60 + "\n")

    generator = DataGenerator(output_dir=args.output_dir, seed=args.seed)
    tables = generator.generate_all(
        n_customers=args.customers,
        n_products=args.products,
        n_orders=args.orders,
        end_date=args.end_date,
    )

    for name, df in tables.by_name().items():
        print(f"   ✅ {name}.csv: {len(df):,} rows")

    print(f"\n📁 Output: {generator.output_dir}\n")


if __name__ == "__main__":
    main()
