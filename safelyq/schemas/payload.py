"""Lenient readers for loosely typed GraphQL response values."""

from __future__ import annotations

from typing import Any, Optional


def text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def identifier_or_none(value: Any) -> Optional[int]:
    """Decode a numeric identifier that may arrive as an int or digit string."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
