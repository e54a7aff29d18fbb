"""Room classifier driver registry."""

from .base import ClassificationParseError, RoomClassifierProvider
from .stub import StubRoomClassifierProvider
from .http import HttpRoomClassifier
from .openai import OpenAIVisionClassifier

__all__ = [
    "ClassificationParseError",
    "RoomClassifierProvider",
    "StubRoomClassifierProvider",
    "HttpRoomClassifier",
    "OpenAIVisionClassifier",
]
