"""
Test Suite Configuration
"""
from datetime import date

import pytest
import polars as pl

from gold_analytics.config import Settings
from gold_analytics.data.tables import GoldTables
from gold_analytics.database.connection import close_database, init_database
from gold_analytics.ingestion.seed_db import create_schema


AS_OF = date(2024, 1, 15)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        APP_ENV="testing",
        DEBUG=True,
    )


@pytest.fixture
def as_of() -> date:
    """Fixed evaluation date so ages and recency do not drift"""
    return AS_OF


@pytest.fixture
def sample_customers_df() -> pl.DataFrame:
    """Customer dimension; Ann shares John's birthdate and never ordered"""
    return pl.DataFrame({
        "customer_key": [1, 2, 3, 4],
        "customer_number": ["AW00000001", "AW00000002", "AW00000003", "AW00000004"],
        "first_name": ["John", "Jane", "Bob", "Ann"],
        "last_name": ["Doe", "Smith", None, "Lee"],
        "birthdate": [date(1980, 5, 10), date(2005, 3, 1), None, date(1980, 5, 10)],
        "gender": ["Male", "Female", "Male", "Female"],
        "country": ["Australia", "Canada", "Australia", "Germany"],
    })


@pytest.fixture
def sample_products_df() -> pl.DataFrame:
    """Product dimension; the frame has no sales"""
    return pl.DataFrame({
        "product_key": [10, 11, 12, 13],
        "product_name": ["Road-150", "Sport Helmet", "Team Jersey", "HL Frame"],
        "category": ["Bikes", "Accessories", "Clothing", "Components"],
        "subcategory": ["Road Bikes", "Helmets", "Jerseys", "Frames"],
        "cost": [1200.0, 35.0, 500.0, 100.0],
    })


@pytest.fixture
def sample_sales_df() -> pl.DataFrame:
    """
    Sales lines.

    Customer 1 orders 100 and 50 one month apart. Customer 2 spans more than
    a year. Customer 3 has a zero-quantity line and an undated line.
    """
    return pl.DataFrame({
        "order_number": ["SO1", "SO2", "SO3", "SO3", "SO4", "SO5", "SO6"],
        "product_key": [10, 11, 10, 12, 12, 11, 11],
        "customer_key": [1, 1, 2, 2, 2, 3, 3],
        "order_date": [
            date(2023, 1, 5),
            date(2023, 2, 10),
            date(2022, 3, 15),
            date(2022, 3, 15),
            date(2023, 6, 20),
            date(2023, 6, 1),
            None,
        ],
        "shipping_date": [
            date(2023, 1, 12),
            date(2023, 2, 17),
            date(2022, 3, 22),
            date(2022, 3, 22),
            date(2023, 6, 27),
            date(2023, 6, 8),
            None,
        ],
        "sales_amount": [100.0, 50.0, 3000.0, 1000.0, 2500.0, 0.0, 40.0],
        "quantity": [1, 1, 1, 2, 5, 0, 1],
        "price": [100.0, 50.0, 3000.0, 500.0, 500.0, 0.0, 40.0],
    })


@pytest.fixture
def gold_tables(sample_customers_df, sample_products_df, sample_sales_df) -> GoldTables:
    """Sample star schema conformed to the table schemas"""
    return GoldTables.from_frames(sample_customers_df, sample_products_df, sample_sales_df)


@pytest.fixture
def empty_tables() -> GoldTables:
    """Star schema with no rows at all"""
    return GoldTables.from_frames(pl.DataFrame(), pl.DataFrame(), pl.DataFrame())


@pytest.fixture
async def gold_db(tmp_path):
    """SQLite database with the gold schema created, initialized as the app database"""
    engine = await init_database(f"sqlite+aiosqlite:///{tmp_path / 'gold.db'}")
    await create_schema(engine)

    yield engine

    await close_database()
