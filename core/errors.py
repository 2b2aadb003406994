"""Exception types raised at the Cognita storage and auth boundary."""

from __future__ import annotations

__all__ = [
    "CognitaError",
    "SnapshotError",
    "NotAuthenticatedError",
    "RecordNotFoundError",
]


class CognitaError(Exception):
    """Base class for Cognita errors."""


class SnapshotError(CognitaError, ValueError):
    """Raised when a stored export cannot be turned into a snapshot."""


class NotAuthenticatedError(CognitaError):
    """Raised when data is requested without a signed-in user."""


class RecordNotFoundError(CognitaError, KeyError):
    """Raised when an update or delete targets an unknown record id."""
