"""Exceptions raised by the Geocraft core."""

from __future__ import annotations


class GeocraftError(Exception):
    """Base class for recoverable game errors."""


class SessionDecodeError(GeocraftError):
    """Raised when a saved session string cannot be turned back into a session."""


class EmptyCandidatePoolError(GeocraftError, ValueError):
    """Raised when a mode/continent selection yields too few countries to play."""


class NoActiveSessionError(GeocraftError, RuntimeError):
    """Raised when a round operation is requested without a running session."""


class NotLoggedInError(GeocraftError, RuntimeError):
    """Raised when an account operation is requested before login."""


class ModeLockedError(GeocraftError):
    """Raised when a player starts a mode their high score has not unlocked."""
