"""Color palette for Epsilora Quiz supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F3F4F6")
    TEXT_SECONDARY = ThemeColors(light="#4B5563", dark="#9CA3AF")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#111827")
    BACKGROUND_SECONDARY = ThemeColors(light="#F9FAFB", dark="#1F2937")

    BORDER_PRIMARY = ThemeColors(light="#D1D5DB", dark="#4B5563")

    BUTTON_PRIMARY_BG = ThemeColors(light="#4F46E5", dark="#6366F1")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#FFFFFF")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F3F4F6", dark="#374151")
    BUTTON_HOVER_BG = ThemeColors(light="#E5E7EB", dark="#4B5563")
    BUTTON_DISABLED_BG = ThemeColors(light="#D1D5DB", dark="#4B5563")

    # Answer options
    OPTION_CORRECT_BG = ThemeColors(light="#DCFCE7", dark="#14532D")
    OPTION_CORRECT_TEXT = ThemeColors(light="#166534", dark="#BBF7D0")
    OPTION_INCORRECT_BG = ThemeColors(light="#FEE2E2", dark="#7F1D1D")
    OPTION_INCORRECT_TEXT = ThemeColors(light="#991B1B", dark="#FECACA")
    OPTION_SELECTED_BG = ThemeColors(light="#E0E7FF", dark="#312E81")
    OPTION_SELECTED_TEXT = ThemeColors(light="#3730A3", dark="#C7D2FE")

    # Countdown
    TIMER_WARNING_BG = ThemeColors(light="#FFEDD5", dark="#7C2D12")
    TIMER_WARNING_TEXT = ThemeColors(light="#EA580C", dark="#FDBA74")
    TIMER_CRITICAL_BG = ThemeColors(light="#FEE2E2", dark="#7F1D1D")
    TIMER_CRITICAL_TEXT = ThemeColors(light="#DC2626", dark="#FCA5A5")
