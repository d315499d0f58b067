"""Keyword classifier mapping free-text incident natures to a Category."""

from __future__ import annotations

from typing import Tuple

from .records import Category

# Checked in order; the first category with a matching keyword wins.
NATURE_KEYWORDS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (
        Category.VIOLENT,
        (
            "assault",
            "robbery",
            "homicide",
            "murder",
            "rape",
            "sexual",
            "fondling",
            "kidnap",
            "stalking",
            "dating violence",
            "domestic violence",
            "harassment",
            "terroristic",
            "weapon",
        ),
    ),
    (
        Category.PROPERTY,
        (
            "theft",
            "burglary",
            "larceny",
            "shoplifting",
            "stolen",
            "fraud",
            "motor vehicle",
            "arson",
            "receiving",
        ),
    ),
    (
        Category.MISCHIEF,
        (
            "mischief",
            "vandalism",
            "criminal damage",
            "graffiti",
            "disorderly",
        ),
    ),
    (
        Category.TRESPASS,
        (
            "trespass",
            "unlawful entry",
            "defiant",
        ),
    ),
)


def category_from_nature(text: str) -> Category:
    """Return the category for an incident nature description."""

    lowered = text.lower()
    for category, keywords in NATURE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return Category.OTHER


__all__ = ["NATURE_KEYWORDS", "category_from_nature"]
