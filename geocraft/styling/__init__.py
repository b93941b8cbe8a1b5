"""Styling module for the Geocraft window."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
