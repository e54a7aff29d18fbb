"""
Enums and constants used across the application.
"""

from enum import Enum


class RoomCategory(str, Enum):
    """Closed set of room categories a listing photo can be classified into."""

    EXTERIOR_FRONT = "exterior_front"
    EXTERIOR_BACK = "exterior_back"
    KITCHEN = "kitchen"
    LIVING_ROOM = "living_room"
    DINING_ROOM = "dining_room"
    MASTER_BEDROOM = "master_bedroom"
    BEDROOM = "bedroom"
    BATHROOM = "bathroom"
    GARAGE = "garage"
    POOL = "pool"
    YARD = "yard"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "RoomCategory | None":
        """Return the matching category, or None for unknown labels."""
        if not value:
            return None
        normalized = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            return None


class ScriptTone(str, Enum):
    """Voice of the generated listing script."""

    LUXURY = "luxury"
    FAMILY = "family"
    AFFORDABLE = "affordable"
    PROFESSIONAL = "professional"


class CaptionFormat(str, Enum):
    """Available caption export formats."""

    SRT = "srt"
    VTT = "vtt"


class ClassificationMode(str, Enum):
    """Scheduling policy for outbound classification calls."""

    SERIAL = "serial"
    CONCURRENT = "concurrent"
