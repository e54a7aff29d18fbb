"""Static keyword and ordering tables used to align narration with listing photos."""

from shared.enums import RoomCategory

# Preferred walkthrough for a listing presentation.
CANONICAL_ORDER: tuple[RoomCategory, ...] = (
    RoomCategory.EXTERIOR_FRONT,
    RoomCategory.LIVING_ROOM,
    RoomCategory.KITCHEN,
    RoomCategory.DINING_ROOM,
    RoomCategory.MASTER_BEDROOM,
    RoomCategory.BEDROOM,
    RoomCategory.BATHROOM,
    RoomCategory.EXTERIOR_BACK,
    RoomCategory.POOL,
    RoomCategory.YARD,
    RoomCategory.GARAGE,
    RoomCategory.OTHER,
)

# Opening shot and catch-all bucket are always part of the order.
FORCED_CATEGORIES: frozenset[RoomCategory] = frozenset({RoomCategory.EXTERIOR_FRONT, RoomCategory.OTHER})

# Keywords are matched as lowercase substrings of the narration.
CATEGORY_KEYWORDS: dict[RoomCategory, tuple[str, ...]] = {
    RoomCategory.EXTERIOR_FRONT: ("welcome", "stunning", "beautiful home", "property", "house", "curb appeal"),
    RoomCategory.KITCHEN: ("kitchen", "cook", "granite", "appliances", "cabinets", "counter", "dining"),
    RoomCategory.LIVING_ROOM: ("living", "family room", "great room", "entertaining", "spacious"),
    RoomCategory.DINING_ROOM: ("dining", "formal dining", "eat"),
    RoomCategory.MASTER_BEDROOM: ("master", "primary bedroom", "suite"),
    RoomCategory.BEDROOM: ("bedroom", "bed", "sleep"),
    RoomCategory.BATHROOM: ("bathroom", "bath", "spa", "shower"),
    RoomCategory.EXTERIOR_BACK: ("backyard", "pool", "deck", "patio", "outdoor", "garden"),
    RoomCategory.GARAGE: ("garage", "parking", "car"),
    RoomCategory.YARD: ("yard", "landscaping", "garden"),
    RoomCategory.POOL: ("pool", "swim", "spa"),
    RoomCategory.OTHER: (),
}
