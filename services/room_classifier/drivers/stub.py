"""Stub room classifier with heuristic results."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import unquote, urlparse

from .base import RoomClassifierProvider

# Checked in order; the first matching hint wins.
URL_HINTS: list[tuple[str, tuple[str, ...]]] = [
    ("master_bedroom", ("master", "primary")),
    ("bedroom", ("bedroom", "bed")),
    ("bathroom", ("bathroom", "bath", "shower")),
    ("kitchen", ("kitchen", "pantry")),
    ("dining_room", ("dining",)),
    ("living_room", ("living", "family", "lounge", "den")),
    ("exterior_front", ("front", "facade", "exterior", "curb")),
    ("exterior_back", ("back", "patio", "deck", "rear")),
    ("pool", ("pool",)),
    ("yard", ("yard", "garden", "lawn")),
    ("garage", ("garage", "driveway")),
]

FEATURE_HINTS: dict[str, str] = {
    "granite": "granite_countertops",
    "hardwood": "hardwood_floors",
    "stainless": "stainless_appliances",
    "fireplace": "fireplace",
    "island": "kitchen_island",
    "view": "view",
}


class StubRoomClassifierProvider(RoomClassifierProvider):
    """Generate deterministic classifications from the photo's file name."""

    name = "stub"

    async def classify(self, image_url: str) -> dict[str, Any]:
        path = unquote(urlparse(image_url).path or image_url).lower()
        tokens = [token for token in re.split(r"[^a-z]+", path) if token]

        room_type = "other"
        for category, hints in URL_HINTS:
            if any(hint in tokens for hint in hints):
                room_type = category
                break

        features = [feature for hint, feature in FEATURE_HINTS.items() if hint in tokens]
        confidence = 0.3 if room_type == "other" else 0.7
        if features:
            confidence = min(0.9, confidence + 0.1)

        description = (
            f"{room_type.replace('_', ' ').capitalize()} photo" if room_type != "other" else "Property image"
        )
        return {
            "roomType": room_type,
            "features": features,
            "description": description,
            "confidence": confidence,
        }
