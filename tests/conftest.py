import os
import sys
from pathlib import Path
from typing import Generator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from services.room_classifier.drivers import StubRoomClassifierProvider
from services.sequencing.app import service as sequencing_service
from shared.utils import config as service_config

DELAY_FLAG = "PIPELINE_FLAG_SEQUENCING_CLASSIFICATION_DELAY_SECONDS"


@pytest.fixture(autouse=True)
def test_environment() -> Generator[None, None, None]:
    """Use the stub classifier without rate-limit pauses for every test."""
    previous_delay = os.environ.get(DELAY_FLAG)
    previous_provider = service_config.get("room_classifier_provider")
    os.environ[DELAY_FLAG] = "0"
    service_config.set("room_classifier_provider", "stub")

    sequencing_service.classifier.provider = StubRoomClassifierProvider()
    sequencing_service.classifier.request_delay = 0.0

    try:
        yield
    finally:
        if previous_delay is None:
            os.environ.pop(DELAY_FLAG, None)
        else:
            os.environ[DELAY_FLAG] = previous_delay
        service_config.set("room_classifier_provider", previous_provider)


@pytest.fixture
def sample_narration() -> str:
    return "Welcome to this home. The kitchen has granite counters. Schedule a tour today."


@pytest.fixture
def sample_image_urls() -> list[str]:
    return [
        "https://cdn.example.com/listings/42/kitchen-1.jpg",
        "https://cdn.example.com/listings/42/IMG_0042.jpg",
        "https://cdn.example.com/listings/42/front-exterior.jpg",
    ]
