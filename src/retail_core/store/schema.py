"""Column contracts for the customer, product and sales tables."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from retail_core.cleaning_utils import to_snake
from retail_core.exceptions import DataQualityError


@dataclass(frozen=True)
class TableSchema:
    """Expected shape of one loaded table.

    Attributes:
        name: Table name used in logs and error messages.
        key: Primary key column.
        columns: Required columns, in output order.
    """

    name: str
    key: str
    columns: tuple[str, ...]


CUSTOMERS = TableSchema(
    name="customers",
    key="customer_id",
    columns=("customer_id", "customer_name", "gender", "age", "city"),
)

PRODUCTS = TableSchema(
    name="products",
    key="product_id",
    columns=("product_id", "product_name", "category", "unit_price"),
)

SALES = TableSchema(
    name="retail_sales_data",
    key="order_id",
    columns=(
        "order_id",
        "order_date",
        "customer_id",
        "product_id",
        "store_id",
        "quantity",
        "unit_price",
    ),
)

# Columns of the validated fact table (fact_retail_sales)
FACT_COLUMNS = [
    "order_id",
    "order_date",
    "order_date_clean",
    "order_date_format",
    "customer_id",
    "product_id",
    "store_id",
    "quantity",
    "unit_price",
    "total_sales",
]

REJECTED_COLUMNS = ["order_id", "reason"]

# Rejection reasons
REASON_MISSING_ORDER = "missing_order_id"
REASON_DUPLICATE_ORDER = "duplicate_order_id"
REASON_UNKNOWN_CUSTOMER = "unknown_customer"
REASON_UNKNOWN_PRODUCT = "unknown_product"
REASON_INVALID_QUANTITY = "invalid_quantity"
REASON_INVALID_UNIT_PRICE = "invalid_unit_price"


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with snake_case column names."""
    out = df.copy()
    out.columns = [to_snake(str(c)) for c in out.columns]
    return out


def require_columns(df: pd.DataFrame, schema: TableSchema) -> None:
    """Raise DataQualityError if ``df`` lacks any column of ``schema``."""
    missing = [c for c in schema.columns if c not in df.columns]
    if missing:
        raise DataQualityError(
            f"Missing required columns in {schema.name}: {missing}. "
            f"Required: {list(schema.columns)}"
        )
