"""Parser errors and shared value coercion."""

from __future__ import annotations

import math


class ParseError(Exception):
    """Raised when a payload or a single record cannot be interpreted."""

    def __init__(self, message: str, country: str | None = None):
        self.country = country
        super().__init__(message)

    @property
    def label(self) -> str:
        """Name to report the failed record under."""
        return self.country or "<unknown>"


def safe_float(val, default: float = 0.0) -> tuple[float, bool]:
    """Best-effort float conversion.

    Returns (value, ok). Missing, unparsable and non-finite values give
    (default, False).
    """
    if val is None or isinstance(val, bool):
        return default, False
    try:
        result = float(val)
    except (TypeError, ValueError):
        return default, False
    if not math.isfinite(result):
        return default, False
    return result, True
