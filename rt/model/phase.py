from __future__ import annotations

from enum import Enum

from .errors import ConfigurationError

__all__ = ["Phase"]


class Phase(Enum):
    """Release lifecycle stage a version update is computed for."""

    PREPARE = "prepare"
    CLEANUP = "cleanup"
    MAINTENANCE = "maintenance"

    @classmethod
    def parse(cls, value: str) -> Phase:
        """Parse a phase name (case-insensitive).

        Raises:
            ConfigurationError: For anything but prepare, cleanup or maintenance.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ConfigurationError(f"Unsupported phase {value!r} (expected one of: {allowed})") from None

    def __str__(self) -> str:
        return self.value
