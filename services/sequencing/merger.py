"""Merge classified photos with the narration's category order."""

from collections.abc import Iterable

from shared.enums import RoomCategory
from shared.models import ArrangedImage, ImageClassification


def bucket_by_category(
    classifications: Iterable[ImageClassification],
) -> dict[RoomCategory, list[ImageClassification]]:
    """Group photos by room, highest confidence first within each room.

    Buckets keep the order in which their category first appears in the
    input; ties on confidence keep input order.
    """
    buckets: dict[RoomCategory, list[ImageClassification]] = {}
    for classification in classifications:
        buckets.setdefault(classification.room_category, []).append(classification)
    return {
        category: sorted(images, key=lambda image: image.confidence, reverse=True)
        for category, images in buckets.items()
    }


def arrange_images(
    classifications: list[ImageClassification],
    category_order: Iterable[RoomCategory],
) -> list[ArrangedImage]:
    """Order photos to follow the narration, covering every photo exactly once."""
    buckets = bucket_by_category(classifications)
    ordered: list[ImageClassification] = []

    for category in category_order:
        ordered.extend(buckets.pop(category, []))

    # Rooms the narration never mentioned follow in first-appearance order
    for remaining in buckets.values():
        ordered.extend(remaining)

    return [
        ArrangedImage(**image.model_dump(), sequence_index=index)
        for index, image in enumerate(ordered)
    ]
