"""Color palette for Geocraft with light and dark variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """A color pair, one value per theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Colors used by the panels and the stylesheet."""

    TEXT_PRIMARY = ThemeColors(light="#1B2A1F", dark="#F2F5EE")
    TEXT_MUTED = ThemeColors(light="#5E6B5F", dark="#A9B4A6")

    # Parchment and ocean tones
    BACKGROUND_PRIMARY = ThemeColors(light="#F4EBD0", dark="#1F2421")
    BACKGROUND_PANEL = ThemeColors(light="#E6D8B0", dark="#2C332E")
    HINT_BOX_BG = ThemeColors(light="#FFF8E1", dark="#38402F")

    ACCENT = ThemeColors(light="#2E6F95", dark="#5FA8D3")

    CORRECT = ThemeColors(light="#2E7D32", dark="#81C784")
    INCORRECT = ThemeColors(light="#C62828", dark="#EF9A9A")
    HEART = ThemeColors(light="#D32F2F", dark="#FF6B6B")

    BORDER = ThemeColors(light="#8D7B4F", dark="#5A5F55")

    BUTTON_BG = ThemeColors(light="#8B5E34", dark="#6D4C2F")
    BUTTON_TEXT = ThemeColors(light="#FFFFFF", dark="#F2F5EE")
    BUTTON_HOVER_BG = ThemeColors(light="#A47148", dark="#8B5E34")
    BUTTON_DISABLED_BG = ThemeColors(light="#C9B99A", dark="#3A3A3A")
