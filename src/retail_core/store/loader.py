"""Bulk loaders for the customer, product and sales exports.

Sources are delimited text read with every column as a string; typing and
validation happen after load so a single bad cell rejects a row instead of
failing the whole file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pandas.api.types import is_datetime64_any_dtype, is_numeric_dtype

from retail_core.cleaning_utils import strip_invisibles, to_float, to_int
from retail_core.exceptions import DataQualityError, LoadError
from retail_core.store.schema import (
    CUSTOMERS,
    PRODUCTS,
    REASON_DUPLICATE_ORDER,
    REASON_INVALID_QUANTITY,
    REASON_INVALID_UNIT_PRICE,
    REASON_MISSING_ORDER,
    REASON_UNKNOWN_CUSTOMER,
    REASON_UNKNOWN_PRODUCT,
    REJECTED_COLUMNS,
    SALES,
    TableSchema,
    normalize_headers,
    require_columns,
)

logger = logging.getLogger(__name__)


def read_table(path: str | Path, schema: TableSchema) -> pd.DataFrame:
    """Read a delimited-text export as strings and check its columns.

    Args:
        path: CSV file to read.
        schema: Expected table shape.

    Returns:
        DataFrame with snake_case headers and cleaned string cells.

    Raises:
        OSError: If the file is missing or unreadable (propagated as-is).
        LoadError: If the file cannot be parsed as delimited text.
        DataQualityError: If required columns are missing.
    """
    path = Path(path)
    logger.info("Loading %s from %s", schema.name, path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    except OSError:
        logger.error("Cannot read %s source: %s", schema.name, path)
        raise
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot parse {schema.name} source {path}: {e}") from e

    df = clean_table(df, schema)
    logger.info("Loaded %d %s rows", len(df), schema.name)
    return df


def clean_table(df: pd.DataFrame, schema: TableSchema) -> pd.DataFrame:
    """Normalize headers, check required columns and strip text cells."""
    df = normalize_headers(df)
    require_columns(df, schema)
    for col in df.columns:
        if not (is_numeric_dtype(df[col]) or is_datetime64_any_dtype(df[col])):
            df[col] = df[col].map(lambda v: strip_invisibles(v) or "")
    return df


def _check_unique_keys(df: pd.DataFrame, schema: TableSchema) -> pd.DataFrame:
    blank = df[schema.key] == ""
    if blank.any():
        logger.warning("Dropping %d %s rows with an empty %s", int(blank.sum()), schema.name, schema.key)
        df = df[~blank]
    dupes = df[schema.key][df[schema.key].duplicated()].unique().tolist()
    if dupes:
        raise DataQualityError(f"Duplicate {schema.key} values in {schema.name}: {dupes}")
    return df.reset_index(drop=True)


def prepare_customers(df: pd.DataFrame) -> pd.DataFrame:
    """Clean and type the customer dimension.

    Raises:
        DataQualityError: If columns are missing or ``customer_id`` repeats.
    """
    df = _check_unique_keys(clean_table(df, CUSTOMERS), CUSTOMERS)
    out = df[list(CUSTOMERS.columns)].copy()
    out["age"] = pd.array([to_int(v) for v in out["age"]], dtype="Int64")
    return out


def prepare_products(df: pd.DataFrame) -> pd.DataFrame:
    """Clean and type the product dimension.

    Raises:
        DataQualityError: If columns are missing or ``product_id`` repeats.
    """
    df = _check_unique_keys(clean_table(df, PRODUCTS), PRODUCTS)
    out = df[list(PRODUCTS.columns)].copy()
    out["unit_price"] = pd.array([to_float(v) for v in out["unit_price"]], dtype="Float64")
    return out


def load_customers(path: str | Path) -> pd.DataFrame:
    """Load the customer dimension from a CSV export."""
    return prepare_customers(read_table(path, CUSTOMERS))


def load_products(path: str | Path) -> pd.DataFrame:
    """Load the product dimension from a CSV export."""
    return prepare_products(read_table(path, PRODUCTS))


def load_sales(path: str | Path) -> pd.DataFrame:
    """Load raw sales transactions from a CSV export.

    Rows are returned as cleaned strings; use
    :func:`retail_core.store.build_store` to validate and type them.
    """
    return read_table(path, SALES)


def validate_sales(
    sales: pd.DataFrame,
    customers: pd.DataFrame,
    products: pd.DataFrame,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Split raw sales rows into accepted rows and rejected rows.

    Checks run in this order and a row is rejected with the first reason
    that applies:

    1. ``missing_order_id``: the order id is blank
    2. ``duplicate_order_id``: the order id was already seen (first occurrence wins)
    3. ``invalid_quantity``: quantity is not a whole number
    4. ``invalid_unit_price``: unit price is not a number
    5. ``unknown_customer``: customer id not in the customer dimension
    6. ``unknown_product``: product id not in the product dimension

    Args:
        sales: Raw sales rows (strings).
        customers: Prepared customer dimension.
        products: Prepared product dimension.

    Returns:
        Tuple of (accepted, rejected). ``accepted`` has typed ``quantity`` and
        ``unit_price`` columns. ``rejected`` has ``order_id`` and ``reason``.
    """
    df = clean_table(sales, SALES).reset_index(drop=True)

    quantity = df["quantity"].map(to_int)
    unit_price = df["unit_price"].map(to_float)

    missing_order = df["order_id"] == ""
    checks = [
        (REASON_MISSING_ORDER, missing_order),
        (REASON_DUPLICATE_ORDER, df["order_id"].duplicated(keep="first") & ~missing_order),
        (REASON_INVALID_QUANTITY, quantity.isna()),
        (REASON_INVALID_UNIT_PRICE, unit_price.isna()),
        (REASON_UNKNOWN_CUSTOMER, ~df["customer_id"].isin(customers["customer_id"])),
        (REASON_UNKNOWN_PRODUCT, ~df["product_id"].isin(products["product_id"])),
    ]

    reason = pd.Series(None, index=df.index, dtype="object")
    for label, failed in checks:
        hit = failed & reason.isna()
        reason[hit] = label
        if hit.any():
            logger.warning(
                "Rejected %d sales rows (%s): %s",
                int(hit.sum()),
                label,
                df.loc[hit, "order_id"].tolist(),
            )

    ok = reason.isna()
    rejected = pd.DataFrame(
        {"order_id": df.loc[~ok, "order_id"], "reason": reason[~ok]},
        columns=REJECTED_COLUMNS,
    ).reset_index(drop=True)

    accepted = df[ok].copy()
    accepted["quantity"] = quantity[ok].astype("int64")
    accepted["unit_price"] = unit_price[ok].astype("float64")
    accepted = accepted.reset_index(drop=True)

    logger.info("Accepted %d of %d sales rows (%d rejected)", len(accepted), len(df), len(rejected))
    return accepted, rejected
