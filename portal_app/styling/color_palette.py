"""Color palette for the admin console supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Console theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """A color with one value per theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the console."""

    TEXT_PRIMARY = ThemeColors(light="#1F2933", dark="#F5F7FA")
    TEXT_MUTED = ThemeColors(light="#616E7C", dark="#9AA5B1")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_CARD = ThemeColors(light="#F5F7FA", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#CBD2D9", dark="#52606D")

    BUTTON_PRIMARY_BG = ThemeColors(light="#0B7285", dark="#3BC9DB")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#0B1120")
    BUTTON_SECONDARY_BG = ThemeColors(light="#E4E7EB", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#D2D6DC", dark="#505050")

    # Test control and grading status
    STATUS_ACTIVE = ThemeColors(light="#2F9E44", dark="#69DB7C")
    STATUS_INACTIVE = ThemeColors(light="#C92A2A", dark="#FF8787")
    STATUS_PENDING = ThemeColors(light="#E67700", dark="#FFC078")
