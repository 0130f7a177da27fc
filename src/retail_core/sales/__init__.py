"""Sales domain module.

This module provides the report views over the validated fact table
(fact_retail_sales):

- **monthly_revenue**: revenue per calendar month, chronological.
- **category_year_revenue**: revenue per product category and year.
- **customer_segmentation**: New vs Repeat customer counts.
- **top_products_per_store**: top 5 products per store by revenue rank.
- **customer_lifetime_value**: customers whose lifetime revenue exceeds
  the average transaction value.

Example:
    >>> from retail_core import DataPaths
    >>> from retail_core.store import load_store
    >>> from retail_core.sales import build_reports, get_report
    >>>
    >>> store = load_store(DataPaths.from_root("data"))
    >>> trend = get_report(store, "monthly_revenue")
    >>> reports = build_reports(store)
"""

from retail_core.sales.api import (
    REPORT_VIEWS,
    build_reports,
    export_reports,
    get_report,
    run_pipeline,
)

__all__ = [
    "REPORT_VIEWS",
    "build_reports",
    "export_reports",
    "get_report",
    "run_pipeline",
]
