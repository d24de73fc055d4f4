"""Centralized Qt stylesheets for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                padding: 8px 14px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.OPTION_SELECTED_BG.get(theme)};
                color: {ColorPalette.OPTION_SELECTED_TEXT.get(theme)};
                border: 2px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)};
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QStatusBar, QListWidget {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
            }}
            QLineEdit, QSpinBox, QComboBox, QListWidget, QTableWidget {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
        """

    @staticmethod
    def get_primary_button_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};"
            f" color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};"
            " font-weight: bold;"
        )

    @staticmethod
    def get_timer_style(seconds_left: int, warning: int, critical: int, theme: Theme = Theme.LIGHT) -> str:
        base = "padding: 4px 10px; border-radius: 6px; font-size: 16pt; font-weight: bold;"
        if seconds_left <= 0:
            return base
        if seconds_left <= critical:
            return (
                base
                + f" color: {ColorPalette.TIMER_CRITICAL_TEXT.get(theme)};"
                + f" background-color: {ColorPalette.TIMER_CRITICAL_BG.get(theme)};"
            )
        if seconds_left <= warning:
            return (
                base
                + f" color: {ColorPalette.TIMER_WARNING_TEXT.get(theme)};"
                + f" background-color: {ColorPalette.TIMER_WARNING_BG.get(theme)};"
            )
        return base

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
