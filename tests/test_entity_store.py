"""Tests for loading, typing and validating the three retail tables."""

from pathlib import Path

import pandas as pd
import pytest

from retail_core import DataPaths
from retail_core.exceptions import DataQualityError, LoadError
from retail_core.store import EntityStore, build_store, load_customers, load_products, load_sales, load_store
from retail_core.store.schema import FACT_COLUMNS, REJECTED_COLUMNS


@pytest.fixture
def store(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> EntityStore:
    return build_store(raw_customers, raw_products, raw_sales)


def test_accepted_facts(store: EntityStore) -> None:
    assert store.facts.columns.tolist() == FACT_COLUMNS
    assert store.facts["order_id"].tolist() == ["O1", "O2", "O3", "O4", "O5", "O9"]
    assert store.facts["order_id"].is_unique


def test_rejected_rows_are_identified_by_order_id(store: EntityStore) -> None:
    assert store.rejected.columns.tolist() == REJECTED_COLUMNS
    assert store.rejected["order_id"].tolist() == ["O6", "O7", "O2", "O8"]
    assert store.rejected["reason"].tolist() == [
        "unknown_customer",
        "unknown_product",
        "duplicate_order_id",
        "invalid_quantity",
    ]


def test_first_duplicate_order_wins(store: EntityStore) -> None:
    o2 = store.facts[store.facts["order_id"] == "O2"].iloc[0]
    assert o2["product_id"] == "P2"
    assert o2["quantity"] == 3


def test_referential_integrity_holds(store: EntityStore) -> None:
    assert store.facts["customer_id"].isin(store.customers["customer_id"]).all()
    assert store.facts["product_id"].isin(store.products["product_id"]).all()


def test_total_is_quantity_times_unit_price(store: EntityStore) -> None:
    facts = store.facts
    assert (facts["total_sales"] == facts["quantity"] * facts["unit_price"]).all()
    assert facts["total_sales"].tolist() == [200.0, 60.0, 50.0, 100.0, 20.0, 10.0]


def test_incoming_total_column_is_ignored(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    raw_sales = raw_sales.assign(total_sales="999")
    store = build_store(raw_customers, raw_products, raw_sales)
    assert 999.0 not in store.facts["total_sales"].tolist()


def test_order_dates_are_repaired(store: EntityStore) -> None:
    facts = store.facts.set_index("order_id")

    assert facts.loc["O1", "order_date_clean"] == pd.Timestamp(2024, 1, 15)
    assert facts.loc["O2", "order_date_clean"] == pd.Timestamp(2024, 1, 15)
    assert facts.loc["O2", "order_date_format"] == "dmy"
    assert pd.isna(facts.loc["O4", "order_date_clean"])
    assert pd.isna(facts.loc["O9", "order_date_clean"])
    # raw value is kept alongside the repaired one
    assert facts.loc["O4", "order_date"] == "32-13-2024"


def test_date_summary_counts_accepted_rows(store: EntityStore) -> None:
    assert store.date_summary.to_dict() == {
        "total_rows": 6,
        "converted_rows": 4,
        "failed_rows": 2,
    }


def test_dimensions_are_typed(store: EntityStore) -> None:
    customers = store.customers.set_index("customer_id")
    assert customers.loc["C1", "age"] == 34
    assert pd.isna(customers.loc["C4", "age"])
    assert store.products.set_index("product_id").loc["P1", "unit_price"] == 100.0


def test_invalid_unit_price_is_rejected(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    raw_sales.loc[0, "unit_price"] = "free"
    store = build_store(raw_customers, raw_products, raw_sales)

    rejected = store.rejected.set_index("order_id")
    assert rejected.loc["O1", "reason"] == "invalid_unit_price"
    assert "O1" not in store.facts["order_id"].tolist()


def test_headers_are_normalized(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    raw_customers = raw_customers.rename(columns={"customer_id": "Customer ID", "city": " City "})
    raw_sales = raw_sales.rename(columns={"order_date": "Order Date", "unit_price": "Unit Price"})

    store = build_store(raw_customers, raw_products, raw_sales)
    assert len(store.facts) == 6


def test_missing_columns_raise(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    with pytest.raises(DataQualityError, match="Missing required columns in retail_sales_data"):
        build_store(raw_customers, raw_products, raw_sales.drop(columns=["store_id"]))


def test_duplicate_dimension_keys_raise(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    dupes = pd.concat([raw_products, raw_products.iloc[[0]]], ignore_index=True)
    with pytest.raises(DataQualityError, match="Duplicate product_id"):
        build_store(raw_customers, dupes, raw_sales)


def test_blank_order_id_is_rejected(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    sales = raw_sales.iloc[0:3].copy()
    sales["order_id"] = ["", "  ", "X"]
    store = build_store(raw_customers, raw_products, sales)

    assert store.facts["order_id"].tolist() == ["X"]
    assert store.rejected["reason"].tolist() == ["missing_order_id", "missing_order_id"]


def test_old_order_date_reaches_facts(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    sales = raw_sales.iloc[0:2].copy()
    sales["order_date"] = ["01-01-1600", "2024-01-15"]
    store = build_store(raw_customers, raw_products, sales)

    assert store.date_summary.failed_rows == 0
    assert store.facts["order_date_clean"].dt.year.tolist() == [1600, 2024]


def test_empty_sales_build_an_empty_store(
    raw_customers: pd.DataFrame,
    raw_products: pd.DataFrame,
    raw_sales: pd.DataFrame,
) -> None:
    store = build_store(raw_customers, raw_products, raw_sales.iloc[0:0])

    assert store.facts.empty
    assert store.rejected.empty
    assert store.date_summary.total_rows == 0


def test_load_store_from_files(test_paths: DataPaths, store: EntityStore) -> None:
    loaded = load_store(test_paths)

    assert loaded.facts["order_id"].tolist() == store.facts["order_id"].tolist()
    assert loaded.facts["total_sales"].tolist() == store.facts["total_sales"].tolist()
    assert loaded.rejected["reason"].tolist() == store.rejected["reason"].tolist()
    assert loaded.date_summary == store.date_summary


def test_individual_loaders(test_paths: DataPaths) -> None:
    assert load_customers(test_paths.raw_customers)["customer_id"].tolist() == [
        "C1",
        "C2",
        "C3",
        "C4",
        "C5",
    ]
    assert load_products(test_paths.raw_products)["category"].tolist() == [
        "Electronics",
        "Clothing",
        "Grocery",
    ]
    sales = load_sales(test_paths.raw_sales)
    assert len(sales) == 10
    assert sales.loc[9, "order_date"] == ""


def test_missing_source_file_propagates(temp_data_dir: Path) -> None:
    paths = DataPaths.from_root(temp_data_dir)
    with pytest.raises(FileNotFoundError):
        load_store(paths)


def test_unparseable_source_raises_load_error(test_paths: DataPaths) -> None:
    test_paths.raw_products.write_text("")
    with pytest.raises(LoadError, match="Cannot parse products"):
        load_store(test_paths)
