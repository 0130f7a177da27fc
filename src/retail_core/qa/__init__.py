"""QA module for sales data quality checks.

Example:
    >>> from retail_core import DataPaths
    >>> from retail_core.store import load_store
    >>> from retail_core.qa import run_sales_qa
    >>>
    >>> store = load_store(DataPaths.from_root("data"))
    >>> result = run_sales_qa(store)
    >>> print(result.summary)
    >>> if result.has_issues:
    ...     print(result.invalid_date_values)
"""

from retail_core.qa.api import SalesQAResult, run_sales_qa

__all__ = ["SalesQAResult", "run_sales_qa"]
