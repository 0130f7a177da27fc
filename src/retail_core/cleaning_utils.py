"""Shared utilities for cleaning delimited-text exports.

Key utilities:
- Text normalization: strip invisible characters, remove accents
- Number parsing: currency symbols, thousands separators, parenthesised negatives
- Column naming: convert headers to snake_case

Examples:
    >>> from retail_core.cleaning_utils import to_float, to_int, to_snake
    >>> to_float("$1,234.50")
    1234.5
    >>> to_int("3")
    3
    >>> to_snake("Customer ID")
    'customer_id'
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Optional

import pandas as pd

NBSP = "\u00a0"  # Non-breaking space
NNBSP = "\u202f"  # Narrow non-breaking space
ZW = "".join(chr(c) for c in (0x200B, 0x200C, 0x200D, 0xFEFF))  # Zero-width characters

_CURRENCY_RE = re.compile(r"[^\d,.\-\(\)\s]")


def strip_invisibles(x: Any) -> Optional[str]:
    """Remove invisible and problematic whitespace characters from text.

    Strips carriage returns, tabs, non-breaking and zero-width spaces, then
    collapses runs of whitespace.

    Args:
        x: Value to clean (string, number, or None).

    Returns:
        Cleaned string or None if input is None/NaN.

    Examples:
        >>> strip_invisibles("  C001  ")
        'C001'
        >>> strip_invisibles(None)
    """
    if x is None or x is pd.NA or (isinstance(x, float) and pd.isna(x)):
        return None
    s = str(x)
    s = s.replace("\r", "").replace("\t", " ").replace(NBSP, " ").replace(NNBSP, " ")
    s = re.sub(r"[%s]" % re.escape(ZW), "", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def to_float(x: Any) -> Optional[float]:
    """Parse a number written the way spreadsheet exports write it.

    Handles:
    - US format: '1,234.56'
    - EU format: '1.234,56'
    - Negative in parentheses: '(12.50)'
    - Currency symbols: '$ 19.99'

    Args:
        x: Value to parse (string, number, or None).

    Returns:
        Parsed float or None if the value is empty or not a number.

    Examples:
        >>> to_float("1.234,56")
        1234.56
        >>> to_float("(12.50)")
        -12.5
        >>> to_float("n/a")
    """
    if x is None or (isinstance(x, float) and (math.isnan(x) or math.isinf(x))):
        return None
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return float(x)
    s = strip_invisibles(x) or ""
    if not s:
        return None

    neg = False
    if s.startswith("(") and s.endswith(")"):
        neg, s = True, s[1:-1].strip()

    s = _CURRENCY_RE.sub("", s)
    s = re.sub(r"\s+", "", s)
    if not s or not re.search(r"\d", s):
        return None

    # 1.234,56 (EU)
    if re.fullmatch(r"-?\d{1,3}(?:\.\d{3})+,\d{1,2}", s):
        s = s.replace(".", "").replace(",", ".")
    # 1,234.56 or 1,234 (US thousands)
    elif re.fullmatch(r"-?\d{1,3}(?:,\d{3})+(?:\.\d+)?", s):
        s = s.replace(",", "")
    elif "," in s and "." not in s:
        s = s.replace(",", ".")

    try:
        v = float(s)
    except ValueError:
        return None
    if math.isnan(v) or math.isinf(v):
        return None
    return -v if neg else v


def to_int(x: Any) -> Optional[int]:
    """Parse a whole number, rejecting values with a fractional part.

    Examples:
        >>> to_int("12")
        12
        >>> to_int("2.5")
    """
    f = to_float(x)
    if f is None or not f.is_integer():
        return None
    return int(f)


def remove_accents(s: str) -> str:
    """Remove accents and diacritics from a string.

    Examples:
        >>> remove_accents("São Paulo")
        'Sao Paulo'
    """
    return "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")


def to_snake(s: str) -> str:
    """Convert a column header to snake_case.

    Examples:
        >>> to_snake("Order Date")
        'order_date'
        >>> to_snake("Unit Price ($)")
        'unit_price'
    """
    s0 = strip_invisibles(s) or ""
    s1 = remove_accents(s0).lower()
    s1 = re.sub(r"[^\w\s]", " ", s1)
    s1 = re.sub(r"\s+", "_", s1).strip("_")
    return s1
