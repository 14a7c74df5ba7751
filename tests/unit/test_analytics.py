"""
Unit Tests - Analytical Queries
"""
from datetime import date

import pytest
import polars as pl

from gold_analytics.analytics import exploration, measures, segmentation, trends
from gold_analytics.analytics.registry import QUERIES, get_query, list_queries, run_query
from gold_analytics.data.tables import GoldTables


class TestExploration:
    """Tests for exploration queries"""

    def test_schema_columns(self, gold_tables):
        """Test schema columns"""
        result = exploration.schema_columns(gold_tables)

        fact_columns = result.filter(pl.col("table_name") == "fact_sales")["column_name"].to_list()
        assert fact_columns[:3] == ["order_number", "product_key", "customer_key"]
        assert set(result["table_name"].unique().to_list()) == {"dim_customers", "dim_products", "fact_sales"}

    def test_distinct_countries(self, gold_tables):
        """Test distinct countries"""
        result = exploration.distinct_countries(gold_tables)

        assert result["country"].to_list() == ["Australia", "Canada", "Germany"]

    def test_product_hierarchy(self, gold_tables):
        """Test product hierarchy"""
        result = exploration.product_hierarchy(gold_tables)

        assert result["category"].to_list() == ["Accessories", "Bikes", "Clothing", "Components"]

    def test_order_date_range(self, gold_tables):
        """Test order date range"""
        row = exploration.order_date_range(gold_tables).row(0, named=True)

        assert row["first_order_date"] == date(2022, 3, 15)
        assert row["last_order_date"] == date(2023, 6, 20)
        assert row["order_range_months"] == 15

    def test_birthdate_range(self, gold_tables, as_of):
        """Test birthdate range"""
        row = exploration.birthdate_range(gold_tables, as_of).row(0, named=True)

        assert row["oldest_birthdate"] == date(1980, 5, 10)
        assert row["oldest_age"] == 44
        assert row["youngest_age"] == 19

    def test_tied_extreme_birthdates_all_returned(self, gold_tables, as_of):
        """Test tied extreme birthdates all returned"""
        result = exploration.oldest_and_youngest_customers(gold_tables, as_of)

        assert result["age_extreme"].to_list() == ["oldest", "oldest", "youngest"]
        assert result["customer_key"].to_list() == [1, 4, 2]
        assert result["age"].to_list() == [44, 44, 19]

    def test_extremes_without_birthdates(self, empty_tables):
        """Test extremes without birthdates"""
        result = exploration.oldest_and_youngest_customers(empty_tables, date(2024, 1, 1))

        assert result.height == 0
        assert "age_extreme" in result.columns

    async def test_database_catalogue(self, gold_db):
        """Test database catalogue"""
        tables = await exploration.list_tables(gold_db)
        columns = await exploration.list_columns(gold_db, "fact_sales")

        assert tables["table_name"].to_list() == ["dim_customers", "dim_products", "fact_sales"]
        assert "order_date" in columns["column_name"].to_list()


class TestMeasures:
    """Tests for headline measures"""

    def test_business_metrics(self, gold_tables):
        """Test business metrics"""
        row = measures.business_metrics(gold_tables).row(0, named=True)

        assert row["total_sales"] == 6690.0
        assert row["total_quantity"] == 11
        assert row["avg_price"] == pytest.approx(4190 / 7)
        assert row["total_orders"] == 6
        assert row["total_products"] == 4
        assert row["total_customers"] == 4
        assert row["customers_with_orders"] == 3

    def test_key_metrics_report(self, gold_tables):
        """Test key metrics report"""
        result = measures.key_metrics_report(gold_tables)

        assert result.columns == ["measure_name", "measure_value"]
        values = dict(zip(result["measure_name"], result["measure_value"]))
        assert values["Total Sales"] == 6690.0
        assert values["Total Orders"] == 6.0

    def test_metrics_on_empty_tables(self, empty_tables):
        """Test metrics on empty tables"""
        row = measures.business_metrics(empty_tables).row(0, named=True)

        assert row["total_orders"] == 0
        assert row["avg_price"] is None


class TestMagnitude:
    """Tests for grouped breakdowns"""

    def test_customers_by_country_ties_by_name(self, gold_tables):
        """Test customers by country ties by name"""
        result = measures.customers_by_country(gold_tables)

        assert result["country"].to_list() == ["Australia", "Canada", "Germany"]
        assert result["total_customers"].to_list() == [2, 1, 1]

    def test_revenue_by_category(self, gold_tables):
        """Test revenue by category"""
        result = measures.revenue_by_category(gold_tables)

        assert result["category"].to_list() == ["Clothing", "Bikes", "Accessories"]
        assert result["total_revenue"].to_list() == [3500.0, 3100.0, 90.0]

    def test_items_by_country(self, gold_tables):
        """Test items by country"""
        result = measures.items_by_country(gold_tables)

        assert result["country"].to_list() == ["Canada", "Australia"]
        assert result["total_sold_items"].to_list() == [8, 3]

    def test_null_group_keys_dropped(self):
        """Test null group keys dropped"""
        customers = pl.DataFrame({"customer_key": [1, 2], "country": ["Canada", None]})
        tables = GoldTables.from_frames(customers, pl.DataFrame(), pl.DataFrame())

        result = measures.customers_by_country(tables)

        assert result["country"].to_list() == ["Canada"]


class TestRanking:
    """Tests for top and bottom rankings"""

    def test_top_products(self, gold_tables):
        """Test top products"""
        result = measures.top_products_by_revenue(gold_tables, n=2)

        assert result["product_name"].to_list() == ["Team Jersey", "Road-150"]

    def test_bottom_products(self, gold_tables):
        """Test bottom products"""
        result = measures.bottom_products_by_revenue(gold_tables, n=1)

        assert result["product_name"].to_list() == ["Sport Helmet"]

    def test_top_customers(self, gold_tables):
        """Test top customers"""
        result = measures.top_customers_by_revenue(gold_tables)

        assert result["customer_key"].to_list() == [2, 1, 3]

    def test_fewest_orders_ties_broken_by_key(self, gold_tables):
        """Test fewest orders ties broken by key"""
        result = measures.customers_with_fewest_orders(gold_tables, n=2)

        assert result["total_orders"].to_list() == [2, 2]
        assert result["customer_key"].to_list() == [1, 2]


class TestTrends:
    """Tests for change-over-time queries"""

    def test_monthly_sales(self, gold_tables):
        """Test monthly sales"""
        result = trends.monthly_sales(gold_tables)

        assert result["month_start"].to_list() == [
            date(2022, 3, 1), date(2023, 1, 1), date(2023, 2, 1), date(2023, 6, 1),
        ]
        assert result["total_sales"].to_list() == [4000.0, 100.0, 50.0, 2500.0]
        assert result["total_customers"].to_list() == [1, 1, 1, 2]

    def test_yearly_sales(self, gold_tables):
        """Test yearly sales"""
        result = trends.yearly_sales(gold_tables)

        assert result["order_year"].to_list() == [2022, 2023]
        assert result["total_sales"].to_list() == [4000.0, 2650.0]

    def test_running_total_is_non_decreasing(self, gold_tables):
        """Test running total is non decreasing"""
        result = trends.cumulative_sales(gold_tables)

        assert result["running_total_sales"].to_list() == [4000.0, 4100.0, 4150.0, 6650.0]

    def test_running_total_resets_each_year(self, gold_tables):
        """Test running total resets each year"""
        result = trends.cumulative_sales(gold_tables, reset_each_year=True)

        assert result["running_total_sales"].to_list() == [4000.0, 100.0, 150.0, 2650.0]
        assert result["moving_average_price"].to_list() == pytest.approx([1750.0, 100.0, 75.0, 400.0 / 3])

    def test_moving_average_price(self, gold_tables):
        """Test moving average price"""
        result = trends.cumulative_sales(gold_tables)

        assert result["moving_average_price"].to_list() == pytest.approx([1750.0, 925.0, 1900.0 / 3, 537.5])

    def test_yearly_product_performance(self, gold_tables):
        """Test yearly product performance"""
        result = trends.yearly_product_performance(gold_tables)
        road = result.filter(pl.col("product_name") == "Road-150")

        assert road["order_year"].to_list() == [2022, 2023]
        assert road["avg_sales"].to_list() == [1550.0, 1550.0]
        assert road["compared_to_average"].to_list() == ["Above Avg", "Below Avg"]
        assert road["py_sales"].to_list() == [None, 3000.0]
        assert road["compared_to_last_year"].to_list() == ["No Change", "Decrease"]

    def test_first_year_and_single_year_products(self, gold_tables):
        """Test first year and single year products"""
        result = trends.yearly_product_performance(gold_tables)
        helmet = result.filter(pl.col("product_name") == "Sport Helmet").row(0, named=True)

        assert helmet["compared_to_average"] == "Avg"
        assert helmet["compared_to_last_year"] == "No Change"

    def test_equal_revenue_is_no_change(self):
        """Test equal revenue is no change"""
        products = pl.DataFrame({"product_key": [1], "product_name": ["Flat"]})
        sales = pl.DataFrame({
            "order_number": ["SO1", "SO2"],
            "product_key": [1, 1],
            "customer_key": [1, 1],
            "order_date": [date(2022, 5, 1), date(2023, 5, 1)],
            "sales_amount": [100.0, 100.0],
        })
        tables = GoldTables.from_frames(pl.DataFrame(), products, sales)

        result = trends.yearly_product_performance(tables)

        assert result["compared_to_last_year"].to_list() == ["No Change", "No Change"]
        assert result["diff_py"].to_list() == [None, 0.0]


class TestSegmentation:
    """Tests for segmentation and part-to-whole queries"""

    def test_products_by_cost_range(self, gold_tables):
        """Test products by cost range"""
        result = segmentation.products_by_cost_range(gold_tables)

        counts = dict(zip(result["cost_range"], result["total_products"]))
        assert counts == {"100-500": 2, "Above 1000": 1, "Below 100": 1}

    def test_customers_by_segment(self, gold_tables, as_of):
        """Test customers by segment"""
        result = segmentation.customers_by_segment(gold_tables, as_of)

        assert result["customer_segment"].to_list() == ["New", "VIP"]
        assert result["total_customers"].to_list() == [2, 1]

    def test_category_contribution_sums_to_100(self, gold_tables):
        """Test category contribution sums to 100"""
        result = segmentation.category_contribution(gold_tables)

        assert result["category"].to_list() == ["Clothing", "Bikes", "Accessories"]
        assert result["overall_sales"].to_list() == [6690.0] * 3
        assert result["percentage_of_total"].sum() == pytest.approx(100, abs=0.05)

    def test_category_contribution_without_sales(self, empty_tables):
        """Test category contribution without sales"""
        result = segmentation.category_contribution(empty_tables)

        assert result.height == 0


class TestRegistry:
    """Tests for the query registry"""

    def test_every_query_runs(self, gold_tables, as_of):
        """Test every query runs"""
        for query in list_queries():
            result = query.run(gold_tables, as_of=as_of)
            assert isinstance(result, pl.DataFrame), query.name

    def test_parameters(self):
        """Test declared query parameters"""
        assert get_query("top_products_by_revenue").parameters == ["n"]
        assert get_query("customers_by_segment").parameters == ["as_of"]
        assert get_query("distinct_countries").parameters == []

    def test_unaccepted_and_none_parameters_ignored(self, gold_tables):
        """Test unaccepted and none parameters ignored"""
        result = run_query("top_products_by_revenue", gold_tables, n=None, as_of=date(2024, 1, 1))

        assert result.height == 3

    def test_run_with_parameter(self, gold_tables):
        """Test run with parameter"""
        result = run_query("top_customers_by_revenue", gold_tables, n=1)

        assert result["customer_key"].to_list() == [2]

    def test_unknown_query(self):
        """Test unknown query"""
        with pytest.raises(KeyError, match="Unknown query"):
            get_query("nope")

    def test_names_unique_and_themed(self):
        """Test names unique and themed"""
        themes = {query.theme for query in QUERIES.values()}

        assert len(QUERIES) == len(list_queries())
        assert {"exploration", "magnitude", "ranking", "cumulative", "part_to_whole"} <= themes
