"""Example: Retail sales reports for the dashboard

This example loads the three raw exports, repairs order dates, prints the
data quality summary and writes every report view as CSV:
1. Load customers, products and transactions (Bronze)
2. Validate and repair into fact_retail_sales (Silver/Core)
3. Build the report views (Gold/Mart)

Prerequisites:
- Place customers.csv, products.csv and retail_sales_data.csv under data/a_raw/
"""

import logging
from pathlib import Path

from retail_core import DataPaths
from retail_core.qa import run_sales_qa
from retail_core.sales import build_reports, export_reports
from retail_core.store import load_store

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

paths = DataPaths.from_root(Path("data"))

store = load_store(paths)

print("\nDate conversion:")
for key, value in store.date_summary.to_dict().items():
    print(f"  - {key}: {value}")

qa_result = run_sales_qa(store)
if qa_result.has_issues:
    print("\nUnparseable order dates:")
    print(qa_result.invalid_date_values)
    print("\nRejected rows:")
    print(qa_result.rejected_rows)

reports = build_reports(store)
for name, df in reports.items():
    print(f"\n{name}: {len(df)} rows")
    print(df.head())

written = export_reports(paths, store, reports)

print("\nData Layers Created:")
print(f"  - Silver (core): {paths.clean_sales}")
print(f"  - Gold (mart): {paths.mart_sales}")
for name, path in written.items():
    print(f"    {name}: {path}")
