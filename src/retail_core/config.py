"""Filesystem configuration for Retail Core.

A single dataclass describes where the raw tables live and where the
cleaned fact table and report views are written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataPaths:
    """All filesystem paths used by the retail pipeline.

    Attributes:
        data_root: Root directory for all data layers.

    Directory Structure:
        data_root/
        ├── a_raw/           # Bronze: batch exports
        │   ├── customers.csv
        │   ├── products.csv
        │   └── retail_sales_data.csv
        ├── b_clean/
        │   └── sales/       # Silver: fact_retail_sales
        └── c_processed/
            └── sales/       # Gold: report views
    """

    data_root: Path

    @classmethod
    def from_root(cls, data_root: str | Path) -> DataPaths:
        """Create DataPaths from a root directory.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.raw_sales
            PosixPath('data/a_raw/retail_sales_data.csv')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        return cls(data_root=data_root)

    @property
    def raw_dir(self) -> Path:
        return self.data_root / "a_raw"

    @property
    def raw_customers(self) -> Path:
        """Bronze layer: customer dimension export."""
        return self.raw_dir / "customers.csv"

    @property
    def raw_products(self) -> Path:
        """Bronze layer: product dimension export."""
        return self.raw_dir / "products.csv"

    @property
    def raw_sales(self) -> Path:
        """Bronze layer: sales transaction export."""
        return self.raw_dir / "retail_sales_data.csv"

    @property
    def clean_sales(self) -> Path:
        """Silver layer: fact_retail_sales."""
        return self.data_root / "b_clean" / "sales"

    @property
    def mart_sales(self) -> Path:
        """Gold layer: report views."""
        return self.data_root / "c_processed" / "sales"

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        for path in [self.raw_dir, self.clean_sales, self.mart_sales]:
            path.mkdir(parents=True, exist_ok=True)
