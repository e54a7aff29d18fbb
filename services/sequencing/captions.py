"""Caption segmentation with timing estimated from narration length."""

import re

from shared.enums import CaptionFormat
from shared.models import CaptionSegment
from shared.utils import config, extract_words, format_time_for_subtitle, prepare_narration_text, setup_logging

logger = setup_logging("caption-segmenter")

# Periods inside numbers such as "2.5" do not end a sentence
SENTENCE_BOUNDARY = re.compile(r"(?<!\d)[.!?]+|[.!?]+(?!\d)")


def _rounded_span(start: float, end: float) -> tuple[float, float]:
    """Round to milliseconds unless rounding would collapse the span."""
    rounded_start, rounded_end = round(start, 3), round(end, 3)
    if rounded_end > rounded_start:
        return rounded_start, rounded_end
    return start, end


class CaptionSegmenter:
    """Split narration into short on-screen phrases timed against the narration."""

    def __init__(
        self,
        words_per_chunk: int | None = None,
        min_chunk_duration: float | None = None,
        start_offset: float | None = None,
        chunk_gap: float | None = None,
        clamp_to_duration: bool | None = None,
    ):
        self.words_per_chunk = int(
            words_per_chunk
            if words_per_chunk is not None
            else config.get_pipeline_value("sequencing.captions.words_per_chunk", 4)
        )
        self.min_chunk_duration = float(
            min_chunk_duration
            if min_chunk_duration is not None
            else config.get_pipeline_value("sequencing.captions.min_chunk_duration", 2.0)
        )
        self.start_offset = float(
            start_offset if start_offset is not None else config.get_pipeline_value("sequencing.captions.start_offset", 0.5)
        )
        self.chunk_gap = float(
            chunk_gap if chunk_gap is not None else config.get_pipeline_value("sequencing.captions.chunk_gap", 0.1)
        )
        self.clamp_to_duration = bool(
            clamp_to_duration
            if clamp_to_duration is not None
            else config.get_pipeline_value("sequencing.captions.clamp_to_duration", False)
        )

        if self.words_per_chunk < 1:
            raise ValueError("words_per_chunk must be at least 1")
        if self.min_chunk_duration <= self.chunk_gap:
            raise ValueError("min_chunk_duration must exceed chunk_gap")
        if self.start_offset < 0:
            raise ValueError("start_offset cannot be negative")

    def split_sentences(self, text: str) -> list[list[str]]:
        """Split narration into sentences of display words."""
        sentences = SENTENCE_BOUNDARY.split(prepare_narration_text(text))
        return [words for words in (extract_words(sentence) for sentence in sentences) if words]

    def chunk_words(self, words: list[str]) -> list[list[str]]:
        """Group a sentence's words into fixed-size phrases."""
        return [words[i:i + self.words_per_chunk] for i in range(0, len(words), self.words_per_chunk)]

    def segment(self, text: str, total_duration: float) -> list[CaptionSegment]:
        """Generate timed caption chunks covering the whole narration."""
        if total_duration <= 0:
            raise ValueError("total_duration must be positive")

        sentences = self.split_sentences(text)
        total_words = sum(len(words) for words in sentences)
        if total_words == 0:
            return self._placeholder_caption(text, total_duration)

        words_per_second = total_words / total_duration
        captions: list[CaptionSegment] = []
        cursor = self.start_offset

        for words in sentences:
            for chunk in self.chunk_words(words):
                chunk_duration = max(self.min_chunk_duration, len(chunk) / words_per_second)
                captions.append(
                    self._timed_caption(" ".join(chunk), cursor, cursor + chunk_duration - self.chunk_gap)
                )
                # Advance by the untrimmed duration so the gap does not accumulate
                cursor += chunk_duration

        if self.clamp_to_duration:
            captions = self.fit_to_duration(captions, total_duration)

        logger.info(
            "Generated %d caption chunks for %d words over %.1fs",
            len(captions),
            total_words,
            total_duration,
        )
        return captions

    def _placeholder_caption(self, text: str, total_duration: float) -> list[CaptionSegment]:
        """Single minimum-length caption for narration without speakable words."""
        display_text = " ".join((text or "").split())
        if not display_text:
            logger.info("Narration is empty; no captions generated")
            return []

        logger.warning("Narration has no words; emitting a single placeholder caption")
        captions = [
            self._timed_caption(
                display_text,
                self.start_offset,
                self.start_offset + self.min_chunk_duration - self.chunk_gap,
            )
        ]
        if self.clamp_to_duration:
            captions = self.fit_to_duration(captions, total_duration)
        return captions

    @staticmethod
    def _timed_caption(text: str, start: float, end: float) -> CaptionSegment:
        start_time, end_time = _rounded_span(start, end)
        return CaptionSegment(text=text.upper(), start_time=start_time, end_time=end_time)

    @staticmethod
    def fit_to_duration(captions: list[CaptionSegment], total_duration: float) -> list[CaptionSegment]:
        """Scale caption timing so the last caption ends within the narration."""
        if not captions or captions[-1].end_time <= total_duration:
            return captions

        scale_factor = total_duration / captions[-1].end_time
        logger.info("Scaling caption timing by factor %.3f", scale_factor)
        return [
            CaptionSegmenter._timed_caption(
                caption.text,
                caption.start_time * scale_factor,
                caption.end_time * scale_factor,
            )
            for caption in captions
        ]

    def render(self, captions: list[CaptionSegment], target_format: CaptionFormat) -> str:
        if target_format is CaptionFormat.VTT:
            return self.convert_to_vtt(captions)
        return self.convert_to_srt(captions)

    def convert_to_srt(self, captions: list[CaptionSegment]) -> str:
        """Convert caption segments to SRT format."""
        srt_content = []

        for index, caption in enumerate(captions, 1):
            srt_content.append(f"{index}")
            srt_content.append(
                f"{format_time_for_subtitle(caption.start_time)} --> {format_time_for_subtitle(caption.end_time)}"
            )
            srt_content.append(caption.text)
            srt_content.append("")

        return "\n".join(srt_content)

    def convert_to_vtt(self, captions: list[CaptionSegment]) -> str:
        """Convert caption segments to WebVTT format."""
        vtt_content = ["WEBVTT", ""]

        for caption in captions:
            start_time = format_time_for_subtitle(caption.start_time, separator=".")
            end_time = format_time_for_subtitle(caption.end_time, separator=".")
            vtt_content.append(f"{start_time} --> {end_time}")
            vtt_content.append(caption.text)
            vtt_content.append("")

        return "\n".join(vtt_content)
