"""Listing slideshow sequencing service.

This service handles:
- Scoring narration text to infer which rooms it covers and in what order
- Merging classified photos into a narration-aligned slideshow order
- Estimating narration duration and per-photo display time
- Splitting narration into timed, upper-cased caption chunks (JSON, SRT, VTT)
"""

__version__ = "1.0.0"
