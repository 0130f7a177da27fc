"""Public API for the sales data quality checks.

This module runs the date repair and load checks on an EntityStore in
memory, without reading or writing files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from retail_core.store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class SalesQAResult:
    """Result of the sales QA checks.

    Attributes:
        summary: Dictionary with counts and flags.
        failed_dates: Fact rows whose order date could not be normalized.
        invalid_date_values: Distinct raw order dates that failed, sorted.
        date_length_profile: Count of raw order dates per string length.
        rejected_rows: Sales rows refused at load (order_id, reason).
    """

    summary: dict
    failed_dates: pd.DataFrame
    invalid_date_values: list[str]
    date_length_profile: pd.DataFrame
    rejected_rows: pd.DataFrame

    @property
    def has_issues(self) -> bool:
        return bool(self.summary["failed_rows"] or self.summary["rejected_rows"])


def run_sales_qa(store: EntityStore) -> SalesQAResult:
    """Run the data quality checks on a built EntityStore.

    This function:
    - does NOT read or write any files,
    - does NOT print (logging only).

    Args:
        store: EntityStore returned by build_store or load_store.

    Returns:
        SalesQAResult with the summary and the offending rows.
    """
    facts = store.facts
    failed_mask = facts["order_date_clean"].isna()
    failed_dates = facts[failed_mask].reset_index(drop=True)

    invalid_date_values = sorted(set(failed_dates["order_date"].astype(str)))

    date_length_profile = (
        facts["order_date"]
        .astype(str)
        .str.len()
        .value_counts()
        .rename_axis("length")
        .reset_index(name="rows")
        .sort_values("length")
        .reset_index(drop=True)
    )

    rejected = store.rejected
    summary = {
        **store.date_summary.to_dict(),
        "success_rate": store.date_summary.success_rate,
        "rejected_rows": len(rejected),
        "rejected_by_reason": {
            str(reason): int(count) for reason, count in rejected["reason"].value_counts().items()
        },
        "distinct_invalid_dates": len(invalid_date_values),
        "total_customers": len(store.customers),
        "total_products": len(store.products),
        "total_stores": int(facts["store_id"].nunique()),
    }

    logger.info(
        "QA complete: %d of %d dates failed, %d rows rejected",
        summary["failed_rows"],
        summary["total_rows"],
        summary["rejected_rows"],
    )

    return SalesQAResult(
        summary=summary,
        failed_dates=failed_dates,
        invalid_date_values=invalid_date_values,
        date_length_profile=date_length_profile,
        rejected_rows=rejected,
    )
