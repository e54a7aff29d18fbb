"""Narration duration estimate and per-photo display time."""

import math

from shared.models import TimingPlan
from shared.utils import count_words

DEFAULT_WORDS_PER_MINUTE = 150.0
DEFAULT_MINIMUM_DURATION = 15.0
DEFAULT_MINIMUM_IMAGE_SECONDS = 2.0


def estimate_duration(
    text: str,
    words_per_minute: float = DEFAULT_WORDS_PER_MINUTE,
    speed: float = 1.0,
    minimum: float = DEFAULT_MINIMUM_DURATION,
) -> float:
    """
    Estimate how long the narration takes to speak.

    Args:
        text: Narration text
        words_per_minute: Speaking rate at normal speed
        speed: Narration speed multiplier (0.85 for slowed narration)
        minimum: Floor that keeps very short narrations usable

    Returns:
        Estimated duration in seconds
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    if speed <= 0:
        raise ValueError("speed must be positive")

    words_per_second = words_per_minute * speed / 60.0
    return max(minimum, count_words(text) / words_per_second)


def allocate_image_timing(
    total_duration: float,
    image_count: int,
    minimum: float = DEFAULT_MINIMUM_IMAGE_SECONDS,
) -> TimingPlan:
    """
    Split the narration evenly across photos, in whole seconds.

    The remainder is not redistributed: the renderer holds the last photo
    for whatever time is left.
    """
    if image_count < 1:
        raise ValueError("image_count must be at least 1")
    if total_duration <= 0:
        raise ValueError("total_duration must be positive")
    if minimum <= 0:
        raise ValueError("minimum must be positive")

    per_image = max(float(minimum), float(math.floor(total_duration / image_count)))
    return TimingPlan(
        total_duration_seconds=total_duration,
        per_image_seconds=per_image,
        image_count=image_count,
    )
