"""Sequencing service: joins photo classification with narration analysis."""

from __future__ import annotations

import asyncio
from collections import Counter

from services.room_classifier.service import RoomClassifierService
from shared.enums import RoomCategory
from shared.models import (
    Arrangement,
    ArrangedImage,
    ImageClassification,
    SequencePlan,
    SequenceSummary,
)
from shared.utils import config, dedupe_preserving_order, setup_logging

from .captions import CaptionSegmenter
from .merger import arrange_images
from .scorer import build_category_order
from .timing import (
    DEFAULT_MINIMUM_DURATION,
    DEFAULT_MINIMUM_IMAGE_SECONDS,
    DEFAULT_WORDS_PER_MINUTE,
    allocate_image_timing,
    estimate_duration,
)


class SequencingInputError(ValueError):
    """Raised when a request cannot produce a sequence (no narration or no photos)."""


class SequencingService:
    """Build narration-aligned slideshow plans for listing videos."""

    def __init__(
        self,
        classifier: RoomClassifierService | None = None,
        segmenter: CaptionSegmenter | None = None,
    ) -> None:
        self.logger = setup_logging("sequencing-service")
        self.classifier = classifier or RoomClassifierService()
        self.segmenter = segmenter or CaptionSegmenter()
        self.words_per_minute = float(
            config.get_pipeline_value("sequencing.narration.words_per_minute", DEFAULT_WORDS_PER_MINUTE)
        )
        self.speed = float(config.get_pipeline_value("sequencing.narration.speed", 1.0))
        self.minimum_duration = float(
            config.get_pipeline_value("sequencing.narration.minimum_duration", DEFAULT_MINIMUM_DURATION)
        )
        self.minimum_image_seconds = float(
            config.get_pipeline_value("sequencing.timing.minimum_image_seconds", DEFAULT_MINIMUM_IMAGE_SECONDS)
        )

    async def arrange(self, narration: str, image_urls: list[str]) -> Arrangement:
        """Classify photos and order them to follow the narration."""
        urls = self._validate(narration, image_urls)

        # Classification I/O and narration scoring are independent until the merge
        classifications, category_order = await asyncio.gather(
            self.classifier.classify_images(urls),
            asyncio.to_thread(build_category_order, narration),
        )
        self.logger.info("Narration order: %s", [category.value for category in category_order])

        arranged = arrange_images(classifications, category_order)
        return Arrangement(
            arranged_images=arranged,
            category_order=category_order,
            summary=self.summarize(arranged),
        )

    async def plan(
        self,
        narration: str,
        image_urls: list[str],
        words_per_minute: float | None = None,
        speed: float | None = None,
    ) -> SequencePlan:
        """Produce the ordered photos, captions and timing for one listing video."""
        arrangement = await self.arrange(narration, image_urls)

        total_duration = self.estimate_duration(narration, words_per_minute, speed)
        captions = self.segmenter.segment(narration, total_duration)
        timing = allocate_image_timing(
            total_duration,
            len(arrangement.arranged_images),
            minimum=self.minimum_image_seconds,
        )

        self.logger.info(
            "Sequence plan: %d images, %d captions, %.1fs total, %.1fs per image",
            timing.image_count,
            len(captions),
            timing.total_duration_seconds,
            timing.per_image_seconds,
        )
        return SequencePlan(
            arranged_images=arrangement.arranged_images,
            category_order=arrangement.category_order,
            summary=arrangement.summary,
            captions=captions,
            timing=timing,
        )

    def estimate_duration(
        self,
        narration: str,
        words_per_minute: float | None = None,
        speed: float | None = None,
    ) -> float:
        return estimate_duration(
            narration,
            words_per_minute=words_per_minute or self.words_per_minute,
            speed=speed or self.speed,
            minimum=self.minimum_duration,
        )

    @staticmethod
    def summarize(images: list[ArrangedImage] | list[ImageClassification]) -> SequenceSummary:
        counts = Counter(image.room_category.value for image in images)
        total = len(images)
        average = sum(image.confidence for image in images) / total if total else 0.0
        return SequenceSummary(
            total_images=total,
            fallback_images=sum(1 for image in images if image.fallback),
            average_confidence=round(average, 3),
            category_counts={
                category.value: counts[category.value]
                for category in RoomCategory
                if counts[category.value]
            },
        )

    def _validate(self, narration: str, image_urls: list[str]) -> list[str]:
        if narration is None or not narration.strip():
            raise SequencingInputError("Narration text is required")
        if not image_urls:
            raise SequencingInputError("At least one image URL is required")

        urls = [url.strip() for url in image_urls if url and url.strip()]
        if not urls:
            raise SequencingInputError("At least one image URL is required")

        unique_urls = dedupe_preserving_order(urls)
        if len(unique_urls) != len(urls):
            self.logger.warning("Dropped %d duplicate image URLs", len(urls) - len(unique_urls))
        return unique_urls
