"""OpenAI Vision room classifier."""

from __future__ import annotations

import json
from typing import Any

from shared.openai_client import create_vision_client

from .base import ClassificationParseError, RoomClassifierProvider

SYSTEM_PROMPT = (
    "You are a real estate photography expert. Analyze property images and classify them "
    "for slideshow organization.\n\n"
    "Return a JSON object with:\n"
    '- roomType: "exterior_front", "exterior_back", "kitchen", "living_room", "dining_room", '
    '"master_bedroom", "bedroom", "bathroom", "garage", "pool", "yard", "other"\n'
    "- features: Array of specific features you see (e.g., "
    '["granite_countertops", "stainless_appliances", "hardwood_floors"])\n'
    "- description: Brief description of what makes this space appealing\n"
    "- confidence: Number 0-1 indicating how confident you are in the classification\n\n"
    "Focus on identifying the room type and key selling features that would be mentioned "
    "in a real estate listing."
)


class OpenAIVisionClassifier(RoomClassifierProvider):
    """GPT-4o vision classification with Azure routing support."""

    name = "openai"

    def __init__(self) -> None:
        self.client, self.model_name = create_vision_client()

    async def classify(self, image_url: str) -> dict[str, Any]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "text",
                                "text": "Analyze this property image and classify it for a real estate slideshow:",
                            },
                            {
                                "type": "image_url",
                                "image_url": {"url": image_url, "detail": "low"},
                            },
                        ],
                    },
                ],
                max_tokens=300,
                temperature=0.3,
            )
        except Exception as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"OpenAI Vision request failed: {exc}") from exc

        content = response.choices[0].message.content
        try:
            payload = json.loads(content) if content else None
        except json.JSONDecodeError as exc:
            raise ClassificationParseError("OpenAI response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise ClassificationParseError("OpenAI response did not contain a JSON object")
        return payload
