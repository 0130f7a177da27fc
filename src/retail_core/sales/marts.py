"""Gold layer: report views over fact_retail_sales.

Every view is a pure function of the fact table (and the product dimension
where a join is needed). Inputs are never mutated, and an empty input yields
an empty DataFrame with the view's columns.

Views:
    monthly_revenue: revenue per (year, month), chronological
    category_year_revenue: revenue per (category, year), highest first
    customer_segmentation: New vs Repeat customer counts
    top_products_per_store: top-N products per store by revenue rank
    customer_lifetime_value: customers above the average transaction value
"""

from __future__ import annotations

import logging

import pandas as pd

from retail_core.exceptions import ConfigError
from retail_core.sales.core import dated_facts, with_totals

logger = logging.getLogger(__name__)

TOP_N_PRODUCTS = 5

MONTHLY_REVENUE_COLUMNS = ["year", "month", "year_month", "revenue"]
CATEGORY_YEAR_COLUMNS = ["category", "sales_year", "revenue"]
SEGMENTATION_COLUMNS = ["customer_type", "customers"]
TOP_PRODUCTS_COLUMNS = ["store_id", "product_id", "revenue", "rnk"]
LIFETIME_VALUE_COLUMNS = ["customer_id", "lifetime_value"]

SEGMENT_NEW = "New"
SEGMENT_REPEAT = "Repeat"


def monthly_revenue(facts: pd.DataFrame) -> pd.DataFrame:
    """Revenue per calendar month of the normalized order date.

    Rows without a normalized date are excluded.

    Args:
        facts: fact_retail_sales DataFrame.

    Returns:
        DataFrame with columns year, month, year_month ("YYYY-MM") and revenue,
        ordered chronologically.
    """
    df = dated_facts(facts)
    if df.empty:
        return pd.DataFrame(columns=MONTHLY_REVENUE_COLUMNS)

    out = (
        df.assign(
            year=df["order_date_clean"].dt.year.astype("int64"),
            month=df["order_date_clean"].dt.month.astype("int64"),
        )
        .groupby(["year", "month"], as_index=False)["total_sales"]
        .sum()
        .rename(columns={"total_sales": "revenue"})
        .sort_values(["year", "month"])
        .reset_index(drop=True)
    )
    out["year_month"] = out["year"].astype(str) + "-" + out["month"].astype(str).str.zfill(2)
    logger.debug("monthly_revenue: %d months", len(out))
    return out[MONTHLY_REVENUE_COLUMNS]


def category_year_revenue(facts: pd.DataFrame, products: pd.DataFrame) -> pd.DataFrame:
    """Revenue per product category and order year.

    Facts are inner-joined to the product dimension on product_id; rows
    without a normalized date are excluded.

    Args:
        facts: fact_retail_sales DataFrame.
        products: Product dimension with product_id and category.

    Returns:
        DataFrame with columns category, sales_year and revenue, sorted by
        revenue descending then category ascending.
    """
    df = dated_facts(facts)
    if df.empty:
        return pd.DataFrame(columns=CATEGORY_YEAR_COLUMNS)

    joined = df.merge(products[["product_id", "category"]], on="product_id", how="inner")
    if joined.empty:
        return pd.DataFrame(columns=CATEGORY_YEAR_COLUMNS)

    out = (
        joined.assign(sales_year=joined["order_date_clean"].dt.year.astype("int64"))
        .groupby(["category", "sales_year"], as_index=False)["total_sales"]
        .sum()
        .rename(columns={"total_sales": "revenue"})
        .sort_values(["revenue", "category", "sales_year"], ascending=[False, True, True])
        .reset_index(drop=True)
    )
    return out[CATEGORY_YEAR_COLUMNS]


def customer_segmentation(facts: pd.DataFrame) -> pd.DataFrame:
    """Count customers as New (one order) or Repeat (more than one order).

    Only customers with at least one order appear. Only segments that occur
    are reported, New before Repeat.
    """
    if facts.empty:
        return pd.DataFrame(columns=SEGMENTATION_COLUMNS)

    orders = facts.groupby("customer_id")["order_id"].count()
    segment = orders.gt(1).map({True: SEGMENT_REPEAT, False: SEGMENT_NEW})
    counts = segment.value_counts()

    rows = [
        {"customer_type": label, "customers": int(counts[label])}
        for label in (SEGMENT_NEW, SEGMENT_REPEAT)
        if label in counts.index
    ]
    return pd.DataFrame(rows, columns=SEGMENTATION_COLUMNS)


def top_products_per_store(facts: pd.DataFrame, n: int = TOP_N_PRODUCTS) -> pd.DataFrame:
    """Rank products by revenue within each store and keep ranks 1..n.

    Ranking follows SQL ``RANK()``: tied revenues share a rank and the next
    distinct revenue skips by the size of the tie (100, 80, 80, 50 ranks as
    1, 2, 2, 4). A tie at the cut-off can therefore return more than n rows.

    Args:
        facts: fact_retail_sales DataFrame.
        n: Highest rank to keep (default: 5).

    Returns:
        DataFrame with columns store_id, product_id, revenue and rnk, ordered
        by store_id, rnk, product_id.

    Raises:
        ConfigError: If n is not a positive integer.
    """
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise ConfigError(f"Invalid top-N size {n!r}. Must be a positive integer.")

    df = with_totals(facts)
    if df.empty:
        return pd.DataFrame(columns=TOP_PRODUCTS_COLUMNS)

    revenue = (
        df.groupby(["store_id", "product_id"], as_index=False)["total_sales"]
        .sum()
        .rename(columns={"total_sales": "revenue"})
    )
    revenue["rnk"] = (
        revenue.groupby("store_id")["revenue"].rank(method="min", ascending=False).astype("int64")
    )

    out = (
        revenue[revenue["rnk"] <= n]
        .sort_values(["store_id", "rnk", "product_id"])
        .reset_index(drop=True)
    )
    logger.debug("top_products_per_store: %d rows across %d stores", len(out), out["store_id"].nunique())
    return out[TOP_PRODUCTS_COLUMNS]


def customer_lifetime_value(facts: pd.DataFrame) -> pd.DataFrame:
    """Customers whose lifetime revenue exceeds the average transaction value.

    The threshold is the mean ``total_sales`` of individual transactions,
    not the mean lifetime value per customer.

    Returns:
        DataFrame with columns customer_id and lifetime_value, sorted by
        lifetime_value descending then customer_id ascending.
    """
    df = with_totals(facts)
    if df.empty:
        return pd.DataFrame(columns=LIFETIME_VALUE_COLUMNS)

    threshold = df["total_sales"].mean()
    lifetime = (
        df.groupby("customer_id", as_index=False)["total_sales"]
        .sum()
        .rename(columns={"total_sales": "lifetime_value"})
    )
    out = (
        lifetime[lifetime["lifetime_value"] > threshold]
        .sort_values(["lifetime_value", "customer_id"], ascending=[False, True])
        .reset_index(drop=True)
    )
    logger.debug(
        "customer_lifetime_value: %d of %d customers above %.2f",
        len(out),
        len(lifetime),
        threshold,
    )
    return out[LIFETIME_VALUE_COLUMNS]
