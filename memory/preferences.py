"""Theme and accent color preferences."""

import logging
from dataclasses import asdict, dataclass
from typing import Dict

from models.taxonomy import (
    ACCENT_COLORS,
    DEFAULT_ACCENT_COLOR,
    DEFAULT_THEME,
    validate_accent_color,
    validate_theme,
)
from tools.kv_store import KeyValueStore
from tools.persistence import ACCENT_COLOR_KEY, THEME_KEY
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


@dataclass
class Preferences:
    theme: str = DEFAULT_THEME
    accent_color: str = DEFAULT_ACCENT_COLOR

    @property
    def accent_hsl(self) -> str:
        return ACCENT_COLORS[self.accent_color]


class PreferenceService:
    """Cosmetic preferences stored as two independent keys."""

    def __init__(self, kv_store: KeyValueStore) -> None:
        self.kv_store = kv_store
        self.preferences = Preferences(
            theme=self._load(THEME_KEY, validate_theme, DEFAULT_THEME),
            accent_color=self._load(ACCENT_COLOR_KEY, validate_accent_color, DEFAULT_ACCENT_COLOR),
        )

    def _load(self, key: str, validator, default: str) -> str:
        raw = self.kv_store.get(key)
        if not raw:
            return default
        try:
            return validator(raw)
        except ValueError:
            log_event(LOGGER, logging.WARNING, "preference_invalid", key=key, value=raw, fallback=default)
            return default

    def set_theme(self, theme: str) -> Preferences:
        self.preferences.theme = validate_theme(theme)
        self.kv_store.set(THEME_KEY, self.preferences.theme)
        return self.preferences

    def toggle_theme(self) -> Preferences:
        return self.set_theme("dark" if self.preferences.theme == "light" else "light")

    def set_accent_color(self, color: str) -> Preferences:
        self.preferences.accent_color = validate_accent_color(color)
        self.kv_store.set(ACCENT_COLOR_KEY, self.preferences.accent_color)
        return self.preferences

    def as_dict(self) -> Dict[str, str]:
        return {**asdict(self.preferences), "accent_hsl": self.preferences.accent_hsl}


__all__ = ["Preferences", "PreferenceService"]
