"""Canonical identity for entry names."""

from __future__ import annotations

import re


def slug(name: str) -> str:
    """Convert a display name to its slug (lowercase, hyphens, word characters only).

    The slug is the only key used for uniqueness and link resolution, so two
    names that differ only in case or spacing map to the same entry.

    Examples:
        "Apple Pie" -> "apple-pie"
        "  New_York City " -> "new-york-city"
    """
    value = name.strip().lower()
    value = re.sub(r"[\s_]+", "-", value)
    value = re.sub(r"[^\w-]", "", value)
    value = re.sub(r"-+", "-", value)
    return value.strip("-")
