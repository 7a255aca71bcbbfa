"""Canonical vocabularies for the wardrobe.

This module centralises the fixed clothing categories together with the two
cosmetic preference vocabularies (theme and accent color). Helper functions
keep validation consistent across the catalog, composer and persistence.
"""

from typing import Dict, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a vocabulary key."""

    return value.strip().lower().replace(" ", "_")


HAT = "hat"
TOP = "top"
BOTTOM = "bottom"
SHOES = "shoes"

# Ordered: iteration and display follow this order.
CATEGORIES: Tuple[str, ...] = (HAT, TOP, BOTTOM, SHOES)
REQUIRED_CATEGORIES: Tuple[str, ...] = (TOP, BOTTOM)

THEMES: Tuple[str, ...] = ("light", "dark")
DEFAULT_THEME = "light"

ACCENT_COLORS: Dict[str, str] = {
    "blue": "hsl(221.2 83.2% 53.3%)",
    "pink": "hsl(346.8 77.2% 49.8%)",
    "green": "hsl(142.1 76.2% 36.3%)",
    "purple": "hsl(262.1 83.3% 57.8%)",
    "orange": "hsl(24.6 95% 53.1%)",
}
DEFAULT_ACCENT_COLOR = "blue"


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not one of the four
    clothing slots.
    """

    if not isinstance(value, str):
        raise ValueError(f"Unsupported category {value!r}. Allowed: {list(CATEGORIES)}")
    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {list(CATEGORIES)}")
    return key


def validate_theme(value: str) -> str:
    key = _normalize_key(str(value))
    if key not in THEMES:
        raise ValueError(f"Unsupported theme '{value}'. Allowed: {list(THEMES)}")
    return key


def validate_accent_color(value: str) -> str:
    key = _normalize_key(str(value))
    if key not in ACCENT_COLORS:
        raise ValueError(f"Unsupported accent color '{value}'. Allowed: {sorted(ACCENT_COLORS)}")
    return key


__all__ = [
    "HAT",
    "TOP",
    "BOTTOM",
    "SHOES",
    "CATEGORIES",
    "REQUIRED_CATEGORIES",
    "THEMES",
    "DEFAULT_THEME",
    "ACCENT_COLORS",
    "DEFAULT_ACCENT_COLOR",
    "validate_category",
    "validate_theme",
    "validate_accent_color",
]
