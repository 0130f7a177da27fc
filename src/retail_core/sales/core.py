"""Silver layer: helpers over the validated fact table (fact_retail_sales).

``total_sales`` is derived from ``quantity`` and ``unit_price``. Readers call
:func:`with_totals` instead of trusting a stored column, so the derived value
can never drift from its inputs.
"""

from __future__ import annotations

import logging

import pandas as pd

logger = logging.getLogger(__name__)


def with_totals(facts: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``facts`` with ``total_sales`` recomputed.

    Any incoming ``total_sales`` column is overwritten.

    Args:
        facts: DataFrame with ``quantity`` and ``unit_price`` columns.

    Returns:
        New DataFrame with ``total_sales = quantity * unit_price``.
    """
    out = facts.copy()
    out["total_sales"] = out["quantity"] * out["unit_price"]
    return out


def dated_facts(facts: pd.DataFrame) -> pd.DataFrame:
    """Return fact rows whose order date was normalized, with totals recomputed."""
    out = with_totals(facts)
    return out[out["order_date_clean"].notna()]


def total_revenue(facts: pd.DataFrame, dated_only: bool = False) -> float:
    """Sum of ``total_sales`` over all facts, or only over dated facts."""
    df = dated_facts(facts) if dated_only else with_totals(facts)
    return float(df["total_sales"].sum())
