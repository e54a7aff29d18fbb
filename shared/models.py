from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shared.enums import CaptionFormat, RoomCategory, ScriptTone


class ImageClassification(BaseModel):
    """Room classification for one listing photo."""

    model_config = ConfigDict(frozen=True)

    source_url: str
    room_category: RoomCategory = RoomCategory.OTHER
    features: tuple[str, ...] = ()
    description: str = "Property image"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    fallback: bool = False

    @field_validator("features", mode="before")
    @classmethod
    def _unique_features(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: set[str] = set()
        features: list[str] = []
        for item in value:
            tag = str(item).strip()
            if tag and tag not in seen:
                seen.add(tag)
                features.append(tag)
        return tuple(features)


class ArrangedImage(ImageClassification):
    """Classified photo with its position in the final slideshow."""

    sequence_index: int = Field(..., ge=0)


class CaptionSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Upper-cased caption text")
    start_time: float = Field(..., ge=0.0, description="Start time in seconds")
    end_time: float = Field(..., description="End time in seconds")

    @model_validator(mode="after")
    def _check_timing(self) -> "CaptionSegment":
        if self.end_time <= self.start_time:
            raise ValueError("Caption end_time must be after start_time")
        return self


class TimingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_duration_seconds: float = Field(..., gt=0.0)
    per_image_seconds: float = Field(..., gt=0.0)
    image_count: int = Field(..., ge=1)


class SequenceSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_images: int
    fallback_images: int
    average_confidence: float
    category_counts: dict[str, int] = Field(default_factory=dict)


class Arrangement(BaseModel):
    """Ordered photos together with the narration's category order."""

    model_config = ConfigDict(frozen=True)

    arranged_images: tuple[ArrangedImage, ...]
    category_order: tuple[RoomCategory, ...]
    summary: SequenceSummary


class SequencePlan(Arrangement):
    """Complete slideshow plan handed to the video assembly step."""

    captions: tuple[CaptionSegment, ...]
    timing: TimingPlan


# Request/Response Models
class SequenceRequest(BaseModel):
    narration: str = Field(..., description="Narration script")
    image_urls: list[str] = Field(..., description="Listing photo URLs")
    words_per_minute: float | None = Field(default=None, gt=0, le=400, description="Speaking rate")
    speed: float | None = Field(default=None, ge=0.5, le=2.0, description="Narration speed multiplier")


class SequenceResponse(BaseModel):
    plan: SequencePlan
    processing_time: float


class ArrangementRequest(BaseModel):
    script: str = Field(..., description="Narration script")
    image_urls: list[str] = Field(..., description="Listing photo URLs")


class ArrangementResponse(BaseModel):
    success: bool = True
    original_order: list[str]
    arrangement: Arrangement
    processing_time: float


class CaptionRequest(BaseModel):
    text: str = Field(..., description="Narration text for caption generation")
    duration: float | None = Field(default=None, gt=0, description="Known narration duration in seconds")
    words_per_minute: float | None = Field(default=None, gt=0, le=400)
    speed: float | None = Field(default=None, ge=0.5, le=2.0)
    clamp_to_duration: bool = False


class CaptionResponse(BaseModel):
    captions: list[CaptionSegment]
    total_duration: float
    caption_count: int


class CaptionExportRequest(BaseModel):
    captions: list[CaptionSegment]
    target_format: CaptionFormat = CaptionFormat.SRT


class PropertyDetails(BaseModel):
    address: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    bedrooms: float = Field(..., gt=0)
    bathrooms: float = Field(..., gt=0)
    sqft: float = Field(..., gt=0)
    property_description: str | None = None


class ListingScript(BaseModel):
    script: str
    original_script: str
    tone: ScriptTone
    word_count: int
    estimated_duration: int
    fallback: bool = False


class APIResponse(BaseModel):
    """Generic API response wrapper"""

    success: bool = True
    message: str = "Success"
    data: Any | None = None
    error: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
