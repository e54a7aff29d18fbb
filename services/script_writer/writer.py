"""Listing script writer producing voiceover-ready narration."""

from __future__ import annotations

import re

from shared.enums import ScriptTone
from shared.models import ListingScript, PropertyDetails
from shared.utils import setup_logging

logger = setup_logging("script-writer")

STREET_ABBREVIATIONS: dict[str, str] = {
    "Dr": "Drive",
    "dr": "Drive",
    "ST": "Street",
    "St": "Street",
    "st": "Street",
    "Ave": "Avenue",
    "ave": "Avenue",
    "AVE": "Avenue",
    "Blvd": "Boulevard",
    "blvd": "Boulevard",
    "Rd": "Road",
    "rd": "Road",
    "Ln": "Lane",
    "ln": "Lane",
    "Ct": "Court",
    "ct": "Court",
    "Cir": "Circle",
    "cir": "Circle",
    "Pkwy": "Parkway",
    "pkwy": "Parkway",
}

CALL_TO_ACTION = "Schedule a showing today. Message me to see it in person."
FALLBACK_SCRIPT = f"Beautiful property available for showing. {CALL_TO_ACTION}"

LUXURY_PRICE = 800_000
AFFORDABLE_PRICE = 300_000
WORDS_PER_MINUTE = 150

_ONES = ["", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = [
    "ten", "eleven", "twelve", "thirteen", "fourteen",
    "fifteen", "sixteen", "seventeen", "eighteen", "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]


def number_to_words(num: int) -> str:
    """Spell out a non-negative integer below one billion."""
    if num == 0:
        return "zero"
    if num < 10:
        return _ONES[num]
    if num < 20:
        return _TEENS[num - 10]
    if num < 100:
        return _TENS[num // 10] + (f" {_ONES[num % 10]}" if num % 10 else "")
    if num < 1000:
        return f"{_ONES[num // 100]} hundred" + (f" {number_to_words(num % 100)}" if num % 100 else "")
    if num < 1_000_000:
        return f"{number_to_words(num // 1000)} thousand" + (
            f" {number_to_words(num % 1000)}" if num % 1000 else ""
        )
    if num < 1_000_000_000:
        return f"{number_to_words(num // 1_000_000)} million" + (
            f" {number_to_words(num % 1_000_000)}" if num % 1_000_000 else ""
        )
    return str(num)


def expand_street_abbreviations(address: str) -> str:
    return re.sub(r"\b[A-Za-z]+\b", lambda m: STREET_ABBREVIATIONS.get(m.group(0), m.group(0)), address)


def sanitize_address_for_speech(address: str) -> str:
    """Drop ZIP codes and leftover commas from a spoken address."""
    without_zip = re.sub(r"\b\d{5}(-\d{4})?\b", "", address).strip()
    cleaned = re.sub(r",\s*,", ",", without_zip)
    return re.sub(r",\s*$", "", cleaned).strip()


def _four_digits_to_words(match: re.Match) -> str:
    digits = match.group(1)
    first, second = int(digits[:2]), int(digits[2:])
    if second == 0:
        return f"{number_to_words(first)} hundred"
    if second < 10:
        return f"{number_to_words(first)} oh {number_to_words(second)}"
    return f"{number_to_words(first)} {number_to_words(second)}"


def _small_number_to_words(match: re.Match) -> str:
    value = int(match.group(1))
    if 0 < value <= 100:
        return number_to_words(value)
    return match.group(0)


def format_numbers_for_voiceover(text: str) -> str:
    """Rewrite street numbers, prices, areas and small counts as spoken words."""
    text = re.sub(r"\b(\d{4})\b", _four_digits_to_words, text)
    text = re.sub(
        r"\$(\d{1,3}(?:,\d{3})*)",
        lambda m: f"{number_to_words(int(m.group(1).replace(',', '')))} dollars",
        text,
    )
    text = re.sub(
        r"(\d{1,3}(?:,\d{3})*)\s*(square feet|sq ft|sqft)",
        lambda m: f"{number_to_words(int(m.group(1).replace(',', '')))} square feet",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(
        r"(\d+)\.5\s*(bathroom|bath)s?",
        lambda m: f"{number_to_words(int(m.group(1)))} and a half {m.group(2)}s",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(r"(\d+)\.5", lambda m: f"{number_to_words(int(m.group(1)))} and a half", text)
    return re.sub(r"\b(\d+)\b", _small_number_to_words, text)


def normalize_property_terms(text: str) -> str:
    """Expand listing shorthand such as 3BR, 2BA and SQFT."""
    replacements = [
        (r"\bthreebr\b", "three bedroom"),
        (r"\bone\.\s*fiveba\b", "one and a half bathroom"),
        (r"\bone\.\s*bath\b", "one bathroom"),
        (r"\btwo\.\s*bath\b", "two bathroom"),
        (r"\bthree\.\s*bath\b", "three bathroom"),
        (r"(\d+)\.5\s*BA\b", r"\1 and a half bathroom"),
        (r"(\d+)\s*BR\b", r"\1 bedroom"),
        (r"(\d+)\s*BA\b", r"\1 bathroom"),
        (r"\bSQ\s*FT\b", "square feet"),
        (r"\bSQFT\b", "square feet"),
    ]
    for pattern, replacement in replacements:
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)

    text = re.sub(
        r"(\d+)\s+bedroom(?!s)",
        lambda m: f"{m.group(1)} bedroom" if int(m.group(1)) == 1 else f"{m.group(1)} bedrooms",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(
        r"(\d+)\s+bathroom(?!s)",
        lambda m: f"{m.group(1)} bathroom" if int(m.group(1)) == 1 else f"{m.group(1)} bathrooms",
        text,
        flags=re.IGNORECASE,
    )
    return re.sub(r"\s+", " ", text).strip()


def sanitize_script_for_voiceover(script: str) -> str:
    """Capitalize sentences and remove repeated bed/bath mentions."""
    script = re.sub(r"(^|\.\s+)([a-z])", lambda m: m.group(1) + m.group(2).upper(), script)
    script = re.sub(r"(\d+\s+bedrooms?)[^.]*(\d+\s+bedrooms?)", r"\1", script, flags=re.IGNORECASE)
    script = re.sub(r"(\d+\s+bathrooms?)[^.]*(\d+\s+bathrooms?)", r"\1", script, flags=re.IGNORECASE)
    script = re.sub(r"\.\s*\.", ".", script)
    script = re.sub(r"\s+", " ", script)
    return re.sub(r",\s*,", ",", script).strip()


def _format_count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


class ListingScriptWriter:
    """Build a short narration script for a property listing."""

    def determine_tone(self, details: PropertyDetails) -> ScriptTone:
        if details.price >= LUXURY_PRICE:
            return ScriptTone.LUXURY
        if details.price <= AFFORDABLE_PRICE:
            return ScriptTone.AFFORDABLE
        description = (details.property_description or "").lower()
        if "family" in description or details.bedrooms >= 3:
            return ScriptTone.FAMILY
        return ScriptTone.PROFESSIONAL

    def generate(self, details: PropertyDetails) -> ListingScript:
        """Compose, clean and number-format the narration for one listing."""
        speech_address = sanitize_address_for_speech(expand_street_abbreviations(details.address))
        tone = self.determine_tone(details)

        description = (details.property_description or "").strip()
        if len(description) > 10:
            script = self._script_from_description(description, details, speech_address, tone)
        else:
            script = self._template_script(details, speech_address, tone)

        script += f" {CALL_TO_ACTION}"
        voiceover = format_numbers_for_voiceover(sanitize_script_for_voiceover(script))
        word_count = len(voiceover.split(" "))

        logger.info("Generated %s script with %d words", tone.value, word_count)
        return ListingScript(
            script=voiceover,
            original_script=script,
            tone=tone,
            word_count=word_count,
            estimated_duration=round(word_count / WORDS_PER_MINUTE * 60),
        )

    def fallback(self) -> ListingScript:
        word_count = len(FALLBACK_SCRIPT.split(" "))
        return ListingScript(
            script=FALLBACK_SCRIPT,
            original_script=FALLBACK_SCRIPT,
            tone=ScriptTone.PROFESSIONAL,
            word_count=word_count,
            estimated_duration=round(word_count / WORDS_PER_MINUTE * 60),
            fallback=True,
        )

    def _script_from_description(
        self,
        description: str,
        details: PropertyDetails,
        speech_address: str,
        tone: ScriptTone,
    ) -> str:
        script = normalize_property_terms(description).rstrip(". ")

        has_bedrooms = re.search(r"\d+\s+(bedroom|bed)", script, re.IGNORECASE) is not None
        has_bathrooms = re.search(r"\d+\s+(bathroom|bath)", script, re.IGNORECASE) is not None
        has_square_footage = re.search(r"(square feet|sq ft|sqft)", script, re.IGNORECASE) is not None
        has_price = re.search(r"\$|dollar|price", script, re.IGNORECASE) is not None

        street = speech_address.lower().split(",")[0]
        if street not in script.lower():
            script = f"Located at {speech_address}, this property features {script.lower()}"

        bedrooms, bathrooms = _format_count(details.bedrooms), _format_count(details.bathrooms)
        bedroom_text = "bedroom" if details.bedrooms == 1 else "bedrooms"
        bathroom_text = "bathroom" if details.bathrooms == 1 else "bathrooms"

        if not has_bedrooms and not has_bathrooms:
            script += f" This {bedrooms} {bedroom_text}, {bathrooms} {bathroom_text} home"
        elif not has_bedrooms:
            script += f" with {bedrooms} {bedroom_text}"
        elif not has_bathrooms:
            script += f" and {bathrooms} {bathroom_text}"

        if not has_square_footage:
            script += f" offers {details.sqft:,.0f} square feet of living space"

        if not has_price:
            if tone is ScriptTone.LUXURY:
                script += f" and is priced at ${details.price:,.0f}"
            else:
                script += f" for ${details.price:,.0f}"

        return script + "."

    def _template_script(self, details: PropertyDetails, speech_address: str, tone: ScriptTone) -> str:
        bedrooms, bathrooms = _format_count(details.bedrooms), _format_count(details.bathrooms)
        bedroom_text = "bedroom" if details.bedrooms == 1 else "bedrooms"
        bathroom_text = "bathroom" if details.bathrooms == 1 else "bathrooms"
        rooms = f"{bedrooms} {bedroom_text}, {bathrooms} {bathroom_text}"
        sqft = f"{details.sqft:,.0f}"
        price = f"${details.price:,.0f}"

        if tone is ScriptTone.LUXURY:
            return (
                f"Discover this exceptional {rooms} residence featuring {sqft} square feet of refined "
                f"living space. Located at {speech_address}, this property is offered at {price}."
            )
        if tone is ScriptTone.FAMILY:
            return (
                f"Welcome to this wonderful {rooms} family home with {sqft} square feet of comfortable "
                f"living space. Perfectly located at {speech_address} and priced at {price}."
            )
        if tone is ScriptTone.AFFORDABLE:
            return (
                f"Great opportunity! This {rooms} home offers {sqft} square feet of living space at an "
                f"excellent value. Located at {speech_address} for just {price}."
            )
        return (
            f"This well-appointed {rooms} home features {sqft} square feet of thoughtfully designed "
            f"living space. Located at {speech_address} and priced at {price}."
        )
