"""Shared fixtures: a small retail dataset as it arrives from the exports.

Accepted facts (6):
    O1 2024-01-15  C1 P1 S1  2 x 100 = 200
    O2 15-01-2024  C1 P2 S1  3 x  20 =  60
    O3 2024-02-20  C2 P3 S2 10 x   5 =  50
    O4 32-13-2024  C3 P1 S2  1 x 100 = 100   (date fails)
    O5 20-02-2024  C2 P2 S1  1 x  20 =  20
    O9 (empty)     C4 P3 S2  2 x   5 =  10   (date fails)

Rejected (4): O6 unknown customer, O7 unknown product, second O2 duplicate,
O8 invalid quantity.
"""

from collections.abc import Generator
from pathlib import Path
from tempfile import TemporaryDirectory

import pandas as pd
import pytest

from retail_core import DataPaths


@pytest.fixture
def raw_customers() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "customer_id": ["C1", "C2", "C3", "C4", "C5"],
            "customer_name": ["Ana", "Bruno", "Carla", "Diego", "Elena"],
            "gender": ["F", "M", "F", "M", "F"],
            "age": ["34", "41", "29", "", "52"],
            "city": ["Lisbon", "Porto", "Lisbon", "Braga", "Faro"],
        }
    )


@pytest.fixture
def raw_products() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "product_id": ["P1", "P2", "P3"],
            "product_name": ["Headphones", "T-Shirt", "Coffee"],
            "category": ["Electronics", "Clothing", "Grocery"],
            "unit_price": ["100.00", "20.00", "5.00"],
        }
    )


@pytest.fixture
def raw_sales() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "order_id": ["O1", "O2", "O3", "O4", "O5", "O6", "O7", "O2", "O8", "O9"],
            "order_date": [
                "2024-01-15",
                "15-01-2024",
                "2024-02-20",
                "32-13-2024",
                "20-02-2024",
                "2024-03-01",
                "2024-03-02",
                "2024-03-03",
                "2024-03-04",
                "",
            ],
            "customer_id": ["C1", "C1", "C2", "C3", "C2", "C9", "C1", "C1", "C3", "C4"],
            "product_id": ["P1", "P2", "P3", "P1", "P2", "P1", "P9", "P1", "P3", "P3"],
            "store_id": ["S1", "S1", "S2", "S2", "S1", "S1", "S1", "S1", "S2", "S2"],
            "quantity": ["2", "3", "10", "1", "1", "1", "1", "1", "abc", "2"],
            "unit_price": ["100.00", "20.00", "5.00", "100.00", "20.00", "100.00", "10.00", "100.00", "5.00", "5.00"],
        }
    )


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for testing."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_paths(
    temp_data_dir: Path,
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> DataPaths:
    """DataPaths whose raw directory holds the sample exports."""
    paths = DataPaths.from_root(temp_data_dir)
    paths.ensure_dirs()
    raw_customers.to_csv(paths.raw_customers, index=False)
    raw_products.to_csv(paths.raw_products, index=False)
    raw_sales.to_csv(paths.raw_sales, index=False)
    return paths


def _build_facts(rows: list[tuple]) -> pd.DataFrame:
    """Build a fact table from (order_id, date, customer, product, store, qty, price) tuples.

    ``date`` is an ISO string or None.
    """
    df = pd.DataFrame(
        rows,
        columns=[
            "order_id",
            "order_date",
            "customer_id",
            "product_id",
            "store_id",
            "quantity",
            "unit_price",
        ],
    )
    df["order_date_clean"] = pd.to_datetime(df["order_date"], format="%Y-%m-%d", errors="coerce")
    df["quantity"] = df["quantity"].astype("int64")
    df["unit_price"] = df["unit_price"].astype("float64")
    df["total_sales"] = df["quantity"] * df["unit_price"]
    return df


@pytest.fixture
def make_facts():
    """Factory fixture for hand-built fact tables."""
    return _build_facts
