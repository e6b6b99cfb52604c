"""Loose matching of user-supplied identifiers."""

from __future__ import annotations

import re


def normalize_key(value: str) -> str:
    """Lowercase and drop spaces, '-' and '_': '45-Degree' -> '45degree'."""
    return re.sub(r"[\s_\-]+", "", value.strip().lower())
