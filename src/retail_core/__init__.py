"""Retail Core - retail sales cleaning and reporting.

This package loads customer, product and sales exports, repairs order
dates, and computes the report views consumed by the sales dashboard:

- **Bronze (raw)**: CSV exports of customers, products and transactions
- **Silver (core facts)**: fact_retail_sales, validated and date-repaired
- **Gold (marts)**: report views for the dashboard

Module Structure:
    retail_core.store: Loading and referential integrity (EntityStore)
    retail_core.dates: Ordered multi-format date repair
    retail_core.sales: Report views and CSV export
    retail_core.qa: Data quality checks
    retail_core.config: DataPaths configuration

Quick Start:
    >>> from retail_core import DataPaths
    >>> from retail_core.store import load_store
    >>> from retail_core.sales import build_reports
    >>> from retail_core.qa import run_sales_qa
    >>>
    >>> paths = DataPaths.from_root("data")
    >>> store = load_store(paths)
    >>> print(store.date_summary.to_dict())
    >>> reports = build_reports(store)
    >>> print(reports["monthly_revenue"].head())
    >>> print(run_sales_qa(store).summary)
"""

__version__ = "0.1.0"

from retail_core.config import DataPaths
from retail_core.exceptions import (
    ConfigError,
    DataQualityError,
    ETLError,
    LoadError,
    RetailAPIError,
)

__all__ = [
    "ConfigError",
    "DataPaths",
    "DataQualityError",
    "ETLError",
    "LoadError",
    "RetailAPIError",
    "__version__",
]
