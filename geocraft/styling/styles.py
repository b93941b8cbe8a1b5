"""Qt stylesheets built from the color palette."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets for the current theme."""

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
                background-color: {ColorPalette.BUTTON_BG.get(theme)};
                color: {ColorPalette.BUTTON_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                padding: 8px 16px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)};
            }}
            QLineEdit {{
                background-color: {ColorPalette.HINT_BOX_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_title_label_style() -> str:
        return "font-size: 28pt; font-weight: bold;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_hint_box_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.HINT_BOX_BG.get(theme)};"
            f"border: 1px solid {ColorPalette.BORDER.get(theme)};"
            "border-radius: 6px; padding: 8px;"
        )

    @staticmethod
    def get_feedback_style(correct: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.CORRECT if correct else ColorPalette.INCORRECT
        return f"color: {color.get(theme)}; font-weight: bold;"

    @staticmethod
    def get_hearts_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.HEART.get(theme)}; font-size: 20pt;"
