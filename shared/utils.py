import logging
import re

from shared.config import config

_DISPLAY_UNSAFE_CHARS = re.compile(r"[^\w\s.,!?'-]")
_WHITESPACE = re.compile(r"\s+")
_WORD_CHAR = re.compile(r"\w")


def setup_logging(service_name: str, log_level: str | None = None) -> logging.Logger:
    """Setup logging configuration for a service"""
    level = log_level or config.get("log_level", "INFO")
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(f"%(asctime)s - {service_name} - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def prepare_narration_text(text: str) -> str:
    """Strip emoji and markup characters, keeping words and sentence punctuation"""
    cleaned = _DISPLAY_UNSAFE_CHARS.sub(" ", text or "")
    return _WHITESPACE.sub(" ", cleaned).strip()


def extract_words(text: str) -> list[str]:
    """Split text on whitespace, dropping tokens without any word character"""
    return [token for token in (text or "").split() if _WORD_CHAR.search(token)]


def count_words(text: str) -> int:
    """Count spoken words in narration text"""
    return len(extract_words(prepare_narration_text(text)))


def dedupe_preserving_order(values: list[str]) -> list[str]:
    """Drop repeated values, keeping the first occurrence"""
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def format_time_for_subtitle(seconds: float, separator: str = ",") -> str:
    """Format time in seconds to subtitle time format (HH:MM:SS,mmm)"""
    total_millis = int(round(max(seconds, 0.0) * 1000))
    hours, remainder = divmod(total_millis, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, milliseconds = divmod(remainder, 1000)

    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{milliseconds:03d}"
