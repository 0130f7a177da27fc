"""Entity store: customers, products and sales transactions.

Example:
    >>> from retail_core import DataPaths
    >>> from retail_core.store import load_store
    >>>
    >>> store = load_store(DataPaths.from_root("data"))
    >>> store.facts.head()
    >>> store.rejected  # order_id, reason
"""

from retail_core.store.entity_store import EntityStore, build_store, load_store
from retail_core.store.loader import load_customers, load_products, load_sales

__all__ = [
    "EntityStore",
    "build_store",
    "load_customers",
    "load_products",
    "load_sales",
    "load_store",
]
