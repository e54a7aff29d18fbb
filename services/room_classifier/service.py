"""Room classifier service implementation."""

from __future__ import annotations

import asyncio
from typing import Any

from shared.enums import ClassificationMode, RoomCategory
from shared.models import ImageClassification
from shared.utils import config as service_config, setup_logging

from .drivers import (
    ClassificationParseError,
    HttpRoomClassifier,
    OpenAIVisionClassifier,
    RoomClassifierProvider,
    StubRoomClassifierProvider,
)

FALLBACK_DESCRIPTION = "Property image"


class RoomClassifierService:
    """Classify listing photos, degrading to "other" when the provider fails."""

    def __init__(self, provider: RoomClassifierProvider | None = None) -> None:
        self.logger = setup_logging("room-classifier")
        self.provider = provider or self._load_provider(service_config.get("room_classifier_provider", "stub"))
        self.mode = ClassificationMode(
            service_config.get_pipeline_value("sequencing.classification.mode", ClassificationMode.SERIAL.value)
        )
        self.request_delay = float(service_config.get_pipeline_value("sequencing.classification.delay_seconds", 0.5))
        self.max_concurrency = int(service_config.get_pipeline_value("sequencing.classification.max_concurrency", 4))
        self.transport_failure_confidence = float(
            service_config.get_pipeline_value("sequencing.classification.transport_failure_confidence", 0.1)
        )
        self.parse_failure_confidence = float(
            service_config.get_pipeline_value("sequencing.classification.parse_failure_confidence", 0.3)
        )
        self.default_confidence = float(
            service_config.get_pipeline_value("sequencing.classification.default_confidence", 0.5)
        )

    def _load_provider(self, provider_name: str) -> RoomClassifierProvider:
        providers: dict[str, type[RoomClassifierProvider]] = {
            "stub": StubRoomClassifierProvider,
            "openai": OpenAIVisionClassifier,
            "http": HttpRoomClassifier,
        }

        provider_cls = providers.get(provider_name.lower())
        if provider_cls is None:
            self.logger.warning("Unknown room classifier provider '%s', falling back to stub", provider_name)
            provider_cls = StubRoomClassifierProvider
        try:
            return provider_cls()
        except ValueError as exc:
            self.logger.error("Room classifier provider '%s' unavailable (%s); using stub", provider_name, exc)
            return StubRoomClassifierProvider()

    async def classify_image(self, image_url: str) -> ImageClassification:
        """Classify one photo. Never raises for provider failures."""
        try:
            payload = await self.provider.classify(image_url)
        except ClassificationParseError as exc:
            self.logger.warning("Unreadable classification for %s (%s); using fallback", image_url, exc)
            return self.fallback_classification(image_url, self.parse_failure_confidence)
        except Exception as exc:
            self.logger.warning("Room classifier failed for %s (%s); using fallback", image_url, exc)
            return self.fallback_classification(image_url, self.transport_failure_confidence)

        return self._build_classification(image_url, payload)

    async def classify_images(self, image_urls: list[str]) -> list[ImageClassification]:
        """Classify every photo, returning results in input order."""
        if not image_urls:
            return []

        self.logger.info("Classifying %d images (%s)", len(image_urls), self.mode.value)
        if self.mode is ClassificationMode.CONCURRENT:
            semaphore = asyncio.Semaphore(max(1, self.max_concurrency))

            async def _bounded(url: str) -> ImageClassification:
                async with semaphore:
                    return await self.classify_image(url)

            results = list(await asyncio.gather(*(_bounded(url) for url in image_urls)))
        else:
            results = []
            for position, url in enumerate(image_urls):
                self.logger.debug("Classifying image %d/%d", position + 1, len(image_urls))
                results.append(await self.classify_image(url))
                # Respect external rate limits between sequential calls
                if self.request_delay > 0 and position < len(image_urls) - 1:
                    await asyncio.sleep(self.request_delay)

        fallbacks = sum(1 for result in results if result.fallback)
        self.logger.info("Classified %d images (%d fallbacks)", len(results), fallbacks)
        return results

    def fallback_classification(self, image_url: str, confidence: float | None = None) -> ImageClassification:
        """Degraded classification used when the provider cannot label a photo."""
        return ImageClassification(
            source_url=image_url,
            room_category=RoomCategory.OTHER,
            features=[],
            description=FALLBACK_DESCRIPTION,
            confidence=self.transport_failure_confidence if confidence is None else confidence,
            fallback=True,
        )

    def _build_classification(self, image_url: str, payload: dict[str, Any]) -> ImageClassification:
        raw_room = payload.get("roomType") or payload.get("room_type")
        category = RoomCategory.parse(raw_room) if raw_room else RoomCategory.OTHER
        if category is None:
            self.logger.warning("Classifier returned unknown room type '%s' for %s", raw_room, image_url)
            return self.fallback_classification(image_url, self.parse_failure_confidence)

        features = payload.get("features") or []
        if not isinstance(features, (list, tuple)):
            features = [features]

        return ImageClassification(
            source_url=image_url,
            room_category=category,
            features=[str(feature) for feature in features if feature],
            description=str(payload.get("description") or FALLBACK_DESCRIPTION),
            confidence=self._coerce_confidence(payload.get("confidence")),
        )

    def _coerce_confidence(self, value: Any) -> float:
        try:
            confidence = float(value)
        except (TypeError, ValueError):
            return self.default_confidence
        if confidence != confidence:  # NaN
            return self.default_confidence
        return min(1.0, max(0.0, confidence))
