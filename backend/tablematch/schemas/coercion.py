"""Coercion of loosely typed preference input.

Clients send whatever their forms produce. Rather than rejecting odd
values, preference fields fall back to their defaults.
"""
import math
from typing import Any

DEFAULT_MIN_RATING = 3.0


def coerce_text(value: Any) -> str:
    """Text as stored, with None as the empty string and other values stringified."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_tags(value: Any) -> list[str]:
    """A list of tags, or an empty list for anything that is not a list."""
    if not isinstance(value, (list, tuple)):
        return []
    return [coerce_text(item) for item in value]


def coerce_price_range(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""
    return value


def coerce_min_rating(value: Any, default: float = DEFAULT_MIN_RATING) -> float:
    """Finite numeric rating, or ``default`` when absent, zero, or not a number."""
    if isinstance(value, bool) or not value:
        return default
    try:
        rating = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    # NaN and infinity have no JSON representation
    if not math.isfinite(rating):
        return default
    return rating


def coerce_user_id(value: Any) -> int | None:
    """Integer id from an int, a whole float, or a numeric string, otherwise None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return coerce_user_id(float(text))
        except (ValueError, OverflowError):
            return None
    return None
