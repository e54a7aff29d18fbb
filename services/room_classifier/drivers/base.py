"""Base classes for room classifier providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RoomClassifierProvider(ABC):
    """Abstract provider that labels a listing photo with a room type."""

    name = "base"

    @abstractmethod
    async def classify(self, image_url: str) -> dict[str, Any]:
        """Return the raw payload with roomType, features, description and confidence.

        Implementations raise RuntimeError on transport or service errors.
        """


class ClassificationParseError(ValueError):
    """Raised when a provider answers but the payload cannot be interpreted."""
