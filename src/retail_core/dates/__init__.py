"""Date repair for raw order dates.

Raw exports mix ISO (``yyyy-mm-dd``) and European (``dd-mm-yyyy``) dates.
This module converts them into a typed date column using an explicit,
ordered list of parse strategies and reports how many rows converted.

Example:
    >>> from retail_core.dates import normalize_dates
    >>> result = normalize_dates(["2024-02-20", "15-01-2024", "32-13-2024"])
    >>> result.summary.to_dict()
    {'total_rows': 3, 'converted_rows': 2, 'failed_rows': 1}
"""

from retail_core.dates.normalizer import (
    DEFAULT_DATE_STRATEGIES,
    ConversionSummary,
    DateStrategy,
    NormalizationResult,
    normalize_dates,
    parse_date_value,
)

__all__ = [
    "DEFAULT_DATE_STRATEGIES",
    "ConversionSummary",
    "DateStrategy",
    "NormalizationResult",
    "normalize_dates",
    "parse_date_value",
]
