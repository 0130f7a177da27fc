"""Public API for sales reports.

This module exposes the report views by name, builds them all at once, and
writes them as CSV files for the dashboard layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from retail_core.exceptions import ConfigError, ETLError
from retail_core.sales.marts import (
    category_year_revenue,
    customer_lifetime_value,
    customer_segmentation,
    monthly_revenue,
    top_products_per_store,
)
from retail_core.sales.metadata import StageMetadata, write_metadata

if TYPE_CHECKING:
    from retail_core.config import DataPaths
    from retail_core.store import EntityStore

logger = logging.getLogger(__name__)

FACT_TABLE_NAME = "fact_retail_sales"
EXPORT_VERSION = "marts_v1"

_VIEWS: dict[str, Callable[[EntityStore], pd.DataFrame]] = {
    "monthly_revenue": lambda store: monthly_revenue(store.facts),
    "category_year_revenue": lambda store: category_year_revenue(store.facts, store.products),
    "customer_segmentation": lambda store: customer_segmentation(store.facts),
    "top_products_per_store": lambda store: top_products_per_store(store.facts),
    "customer_lifetime_value": lambda store: customer_lifetime_value(store.facts),
}

REPORT_VIEWS: tuple[str, ...] = tuple(_VIEWS)


def get_report(store: EntityStore, view: str) -> pd.DataFrame:
    """Compute one report view.

    Args:
        store: Validated EntityStore.
        view: One of REPORT_VIEWS.

    Returns:
        DataFrame for the requested view.

    Raises:
        ConfigError: If view is unknown.

    Examples:
        >>> df = get_report(store, "monthly_revenue")
        >>> df = get_report(store, "top_products_per_store")
    """
    if view not in _VIEWS:
        raise ConfigError(f"Invalid view '{view}'. Must be one of {list(REPORT_VIEWS)}.")
    logger.info("Building report %s", view)
    return _VIEWS[view](store)


def build_reports(store: EntityStore) -> dict[str, pd.DataFrame]:
    """Compute every report view, keyed by view name."""
    return {view: get_report(store, view) for view in REPORT_VIEWS}


def export_reports(
    paths: DataPaths,
    store: EntityStore,
    reports: dict[str, pd.DataFrame] | None = None,
) -> dict[str, Path]:
    """Write the fact table and every report view as CSV.

    The fact table goes to ``paths.clean_sales`` and views go to
    ``paths.mart_sales``; each directory gets stage metadata in ``_meta/``.

    Args:
        paths: DataPaths configuration.
        store: Validated EntityStore.
        reports: Precomputed views; built from ``store`` when None.

    Returns:
        Mapping of output name to written file path.

    Raises:
        ETLError: If writing any output fails.
    """
    if reports is None:
        reports = build_reports(store)

    paths.ensure_dirs()
    written: dict[str, Path] = {}

    fact_path = paths.clean_sales / f"{FACT_TABLE_NAME}.csv"
    _write_stage(
        paths.clean_sales,
        "fact",
        {FACT_TABLE_NAME: (store.facts, fact_path)},
    )
    written[FACT_TABLE_NAME] = fact_path

    outputs = {name: (df, paths.mart_sales / f"{name}.csv") for name, df in reports.items()}
    _write_stage(paths.mart_sales, "marts", outputs)
    written.update({name: path for name, (_, path) in outputs.items()})

    return written


def _write_stage(
    stage_dir: Path,
    stage: str,
    outputs: dict[str, tuple[pd.DataFrame, Path]],
) -> None:
    """Write outputs of one stage and record its metadata."""
    try:
        for name, (df, path) in outputs.items():
            df.to_csv(path, index=False, encoding="utf-8")
            logger.info("Wrote %s: %s (%d rows)", name, path, len(df))
    except OSError as e:
        logger.error("Error writing %s stage: %s", stage, e)
        write_metadata(
            stage_dir,
            StageMetadata(
                stage=stage,
                version=EXPORT_VERSION,
                last_run=datetime.now().isoformat(),
                status="failed",
            ),
        )
        raise ETLError(f"Failed to write {stage} outputs to {stage_dir}: {e}") from e

    write_metadata(
        stage_dir,
        StageMetadata(
            stage=stage,
            version=EXPORT_VERSION,
            last_run=datetime.now().isoformat(),
            status="ok",
            row_counts={name: len(df) for name, (df, _) in outputs.items()},
        ),
    )


def run_pipeline(paths: DataPaths) -> dict[str, pd.DataFrame]:
    """Load the raw exports, build every report and write them to disk.

    Returns:
        Mapping of view name to report DataFrame.
    """
    # Import here to avoid a circular import with retail_core.store
    from retail_core.store import load_store

    store = load_store(paths)
    reports = build_reports(store)
    export_reports(paths, store, reports)
    return reports
