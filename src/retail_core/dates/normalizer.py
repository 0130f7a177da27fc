"""Ordered multi-format date parsing with conversion tracking.

Each strategy is an explicit ``strftime`` format. Strategies are tried in
order and each one only sees the rows every earlier strategy rejected, so a
value that is valid under the first format is never reinterpreted by a later
one. Values that match no strategy stay NaT; nothing is guessed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

from retail_core.cleaning_utils import strip_invisibles
from retail_core.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateStrategy:
    """A named date format tried during normalization.

    Attributes:
        name: Short label recorded for rows this strategy parsed, e.g. "iso".
        format: ``strftime`` format the whole string must match.
    """

    name: str
    format: str


DEFAULT_DATE_STRATEGIES: tuple[DateStrategy, ...] = (
    DateStrategy("iso", "%Y-%m-%d"),
    DateStrategy("dmy", "%d-%m-%Y"),
)


@dataclass(frozen=True)
class ConversionSummary:
    """Row counts for a date normalization pass.

    Attributes:
        total_rows: Number of input values.
        converted_rows: Values parsed into a calendar date.
        failed_rows: Values left absent.
    """

    total_rows: int
    converted_rows: int
    failed_rows: int

    @property
    def success_rate(self) -> float:
        if self.total_rows == 0:
            return 0.0
        return self.converted_rows / self.total_rows

    def to_dict(self) -> dict[str, int]:
        return {
            "total_rows": self.total_rows,
            "converted_rows": self.converted_rows,
            "failed_rows": self.failed_rows,
        }


@dataclass
class NormalizationResult:
    """Output of :func:`normalize_dates`.

    Attributes:
        dates: ``datetime64[s]`` Series aligned with the input; NaT where parsing failed.
        strategy: Name of the strategy that parsed each row, None where parsing failed.
        summary: Conversion counts.
    """

    dates: pd.Series
    strategy: pd.Series
    summary: ConversionSummary

    @property
    def failed_mask(self) -> pd.Series:
        return self.dates.isna()


def _validate_strategies(strategies: Optional[Sequence[DateStrategy]]) -> tuple[DateStrategy, ...]:
    if strategies is None:
        return DEFAULT_DATE_STRATEGIES
    strategies = tuple(strategies)
    if not strategies:
        raise ConfigError("At least one date strategy is required.")
    names = [s.name for s in strategies]
    if len(set(names)) != len(names):
        raise ConfigError(f"Date strategy names must be unique, got {names}.")
    return strategies


def _parse_first(
    text: str,
    strategies: Sequence[DateStrategy],
) -> tuple[Optional[datetime], Optional[str]]:
    """Return the first (datetime, strategy name) that parses ``text``."""
    for strategy in strategies:
        try:
            return datetime.strptime(text, strategy.format), strategy.name
        except ValueError:
            continue
    return None, None


def normalize_dates(
    values: pd.Series | Iterable[Any],
    strategies: Optional[Sequence[DateStrategy]] = None,
) -> NormalizationResult:
    """Convert raw date strings into dates using ordered strategies.

    Parsing follows ``datetime.strptime``, so day and month may omit their
    leading zero ("5-1-2024") while the year needs four digits. Dates are held
    at second resolution, which covers every year from 1 to 9999.

    Args:
        values: Raw date values. A Series keeps its index in the result.
        strategies: Ordered strategies to try. Defaults to ISO then dd-mm-yyyy.

    Returns:
        NormalizationResult with the parsed dates, the strategy used per row
        and the conversion summary.

    Raises:
        ConfigError: If ``strategies`` is empty or has duplicate names.

    Examples:
        >>> result = normalize_dates(["15-01-2024", ""])
        >>> result.dates.dt.date.tolist()
        [datetime.date(2024, 1, 15), NaT]
    """
    strategies = _validate_strategies(strategies)
    raw = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype="object")

    parsed: list[Optional[datetime]] = []
    used: list[Optional[str]] = []
    cache: dict[str, tuple[Optional[datetime], Optional[str]]] = {}
    for value in raw.tolist():
        text = strip_invisibles(value)
        if not text:
            parsed.append(None)
            used.append(None)
            continue
        if text not in cache:
            cache[text] = _parse_first(text, strategies)
        dt, name = cache[text]
        parsed.append(dt)
        used.append(name)

    dates = pd.Series(np.array(parsed, dtype="datetime64[s]"), index=raw.index)
    strategy = pd.Series(used, index=raw.index, dtype="object")

    for s in strategies:
        logger.debug("Strategy %s parsed %d rows", s.name, used.count(s.name))

    converted = len(used) - used.count(None)
    summary = ConversionSummary(
        total_rows=len(raw),
        converted_rows=converted,
        failed_rows=len(raw) - converted,
    )

    logger.info(
        "Date conversion: %d of %d rows converted, %d failed",
        summary.converted_rows,
        summary.total_rows,
        summary.failed_rows,
    )
    if summary.failed_rows:
        logger.warning("%d order dates could not be parsed and were left empty", summary.failed_rows)

    return NormalizationResult(dates=dates, strategy=strategy, summary=summary)


def parse_date_value(
    value: Any,
    strategies: Optional[Sequence[DateStrategy]] = None,
) -> Optional[date]:
    """Parse a single raw date value.

    Examples:
        >>> parse_date_value("2024-02-20")
        datetime.date(2024, 2, 20)
        >>> parse_date_value("32-13-2024") is None
        True
    """
    strategies = _validate_strategies(strategies)
    text = strip_invisibles(value)
    if not text:
        return None
    dt, _ = _parse_first(text, strategies)
    return dt.date() if dt is not None else None
