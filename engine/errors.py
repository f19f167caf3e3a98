"""Exception hierarchy for the fight engine.

    ArenaError
    ├── ConfigurationError   unknown archetype or move at match setup
    ├── NotFound             roster lookup miss
    └── InvalidInput         unmapped input code (never surfaced to callers)
"""

from __future__ import annotations


class ArenaError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ArenaError):
    """A match could not be set up from the given roster data."""


class NotFound(ArenaError, KeyError):
    """Requested archetype id is not in the roster."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class InvalidInput(ArenaError, ValueError):
    """A raw input code does not map to any button."""
