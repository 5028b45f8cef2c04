"""
Unit Tests - Seed Record Preparation
"""
from datetime import datetime
from decimal import Decimal

import polars as pl

from shoplab.data import sample_frames
from shoplab.ingestion.seed_db import SEED_ORDER, frame_to_records


class TestFrameToRecords:
    """Tests for frame_to_records"""

    def test_money_columns_become_decimal(self, sample_products_df):
        records = frame_to_records(sample_products_df)

        assert records[0]["price"] == Decimal("999.99")
        assert isinstance(records[0]["price"], Decimal)
        assert records[0]["stock_quantity"] == 10

    def test_null_values_are_dropped(self, sample_orders_df):
        records = frame_to_records(sample_orders_df)

        pending = next(r for r in records if r["order_id"] == 4)
        assert "status" not in pending
        assert pending["order_date"] == datetime(2024, 2, 10, 16, 45)

        delivered = next(r for r in records if r["order_id"] == 1)
        assert delivered["status"] == "Delivered"

    def test_empty_frame(self):
        assert frame_to_records(pl.DataFrame({"price": []})) == []


class TestSampleData:
    """Shape of the bundled sample data"""

    def test_seed_order_matches_frames(self):
        assert [name for name, _ in SEED_ORDER] == list(sample_frames())

    def test_one_customer_never_orders(self, sample_customers_df, sample_orders_df):
        ordering = set(sample_orders_df["customer_id"].to_list())
        idle = set(sample_customers_df["customer_id"].to_list()) - ordering

        assert len(ordering) == 4
        assert idle == {5}
