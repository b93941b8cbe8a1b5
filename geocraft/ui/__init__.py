"""Qt UI components for the Geocraft desktop game."""

from .dialog_helpers import (
    confirm_log_out,
    confirm_quit_session,
    show_info,
    show_warning,
)
from .main_window import GeocraftMainWindow

__all__ = [
    "GeocraftMainWindow",
    "confirm_log_out",
    "confirm_quit_session",
    "show_info",
    "show_warning",
]
