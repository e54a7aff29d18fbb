"""Room classifier backed by a remote classification endpoint."""

from __future__ import annotations

from typing import Any

import aiohttp

from shared.config import config as service_config
from shared.http_client import AsyncHTTPClient

from .base import ClassificationParseError, RoomClassifierProvider


class HttpRoomClassifier(RoomClassifierProvider):
    """POST each image URL to a JSON classification service."""

    name = "http"

    def __init__(self) -> None:
        self.endpoint: str | None = service_config.get("room_classifier_endpoint")
        self.api_key: str | None = service_config.get("room_classifier_api_key")
        self.timeout: int = int(service_config.get("room_classifier_timeout", 30))

    async def classify(self, image_url: str) -> dict[str, Any]:
        if not self.endpoint:
            raise RuntimeError("Room classifier endpoint not configured")

        try:
            async with AsyncHTTPClient(timeout=self.timeout, api_key=self.api_key) as client:
                payload = await client.post_json(self.endpoint, {"image_url": image_url})
        except aiohttp.ContentTypeError as exc:
            raise ClassificationParseError(f"Classifier returned non-JSON content: {exc}") from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RuntimeError(f"Room classifier request failed: {exc}") from exc
        except ValueError as exc:
            raise ClassificationParseError(f"Classifier returned malformed JSON: {exc}") from exc

        if isinstance(payload, dict) and isinstance(payload.get("result"), dict):
            payload = payload["result"]
        if not isinstance(payload, dict):
            raise ClassificationParseError("Classifier response was not a JSON object")
        return payload
