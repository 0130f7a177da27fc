"""In-memory snapshot of the three retail tables.

The store is built once: dimensions are typed and checked for unique keys,
sales rows are validated against them, and order dates of the accepted rows
are repaired. Nothing mutates the snapshot afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import pandas as pd

from retail_core.dates import ConversionSummary, DateStrategy, normalize_dates
from retail_core.sales.core import with_totals
from retail_core.store.loader import (
    prepare_customers,
    prepare_products,
    read_table,
    validate_sales,
)
from retail_core.store.schema import CUSTOMERS, FACT_COLUMNS, PRODUCTS, SALES

if TYPE_CHECKING:
    from retail_core.config import DataPaths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityStore:
    """Validated customers, products and sales facts.

    Attributes:
        customers: Customer dimension (one row per ``customer_id``).
        products: Product dimension (one row per ``product_id``).
        facts: fact_retail_sales, one row per accepted order.
        rejected: Sales rows refused at load, with ``order_id`` and ``reason``.
        date_summary: Conversion counts of the order date repair pass.
    """

    customers: pd.DataFrame
    products: pd.DataFrame
    facts: pd.DataFrame
    rejected: pd.DataFrame
    date_summary: ConversionSummary


def build_store(
    customers: pd.DataFrame,
    products: pd.DataFrame,
    sales: pd.DataFrame,
    strategies: Optional[Sequence[DateStrategy]] = None,
) -> EntityStore:
    """Validate raw tables in memory and return an EntityStore.

    This function does NOT read or write files.

    Args:
        customers: Raw customer rows.
        products: Raw product rows.
        sales: Raw sales rows; ``order_date`` may mix formats.
        strategies: Ordered date strategies; defaults to ISO then dd-mm-yyyy.

    Returns:
        EntityStore with typed dimensions, the fact table and rejections.

    Raises:
        DataQualityError: If a table misses required columns or a dimension
            has duplicate identifiers.
        ConfigError: If ``strategies`` is invalid.
    """
    customers_df = prepare_customers(customers)
    products_df = prepare_products(products)
    accepted, rejected = validate_sales(sales, customers_df, products_df)

    result = normalize_dates(accepted["order_date"], strategies)
    accepted["order_date_clean"] = result.dates
    accepted["order_date_format"] = result.strategy

    facts = with_totals(accepted)[FACT_COLUMNS]

    logger.info(
        "Built store: %d customers, %d products, %d facts, %d rejected",
        len(customers_df),
        len(products_df),
        len(facts),
        len(rejected),
    )
    return EntityStore(
        customers=customers_df,
        products=products_df,
        facts=facts,
        rejected=rejected,
        date_summary=result.summary,
    )


def load_store(
    paths: DataPaths,
    strategies: Optional[Sequence[DateStrategy]] = None,
) -> EntityStore:
    """Load the three raw exports under ``paths`` and build the store.

    Raises:
        OSError: If a source file is missing or unreadable.
        LoadError: If a source file cannot be parsed.
        DataQualityError: See :func:`build_store`.
    """
    customers = read_table(paths.raw_customers, CUSTOMERS)
    products = read_table(paths.raw_products, PRODUCTS)
    sales = read_table(paths.raw_sales, SALES)
    return build_store(customers, products, sales, strategies)
