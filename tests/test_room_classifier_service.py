"""Tests for the room classifier service."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from services.room_classifier.drivers import (
    ClassificationParseError,
    HttpRoomClassifier,
    OpenAIVisionClassifier,
    StubRoomClassifierProvider,
)
from services.room_classifier.service import RoomClassifierService
from shared.enums import ClassificationMode, RoomCategory
from shared.utils import config as service_config


@pytest.fixture
def classifier():
    return RoomClassifierService(provider=StubRoomClassifierProvider())


@pytest.mark.asyncio
async def test_stub_provider_labels_from_file_name(classifier):
    result = await classifier.classify_image("https://cdn.example.com/photos/kitchen-granite.jpg")

    assert result.room_category is RoomCategory.KITCHEN
    assert "granite_countertops" in result.features
    assert result.fallback is False
    assert 0.0 <= result.confidence <= 1.0


@pytest.mark.asyncio
async def test_stub_provider_unknown_photo_is_other(classifier):
    result = await classifier.classify_image("https://cdn.example.com/photos/IMG_1234.jpg")

    assert result.room_category is RoomCategory.OTHER
    assert result.description == "Property image"


@pytest.mark.asyncio
async def test_transport_failure_falls_back_to_low_confidence_other():
    provider = AsyncMock()
    provider.classify.side_effect = RuntimeError("connection reset")
    service = RoomClassifierService(provider=provider)

    result = await service.classify_image("https://cdn.example.com/a.jpg")

    assert result.source_url == "https://cdn.example.com/a.jpg"
    assert result.room_category is RoomCategory.OTHER
    assert result.features == ()
    assert result.description == "Property image"
    assert result.confidence == pytest.approx(0.1)
    assert result.fallback is True


@pytest.mark.asyncio
async def test_timeout_falls_back():
    provider = AsyncMock()
    provider.classify.side_effect = asyncio.TimeoutError()
    service = RoomClassifierService(provider=provider)

    result = await service.classify_image("https://cdn.example.com/slow.jpg")

    assert result.fallback is True
    assert result.confidence == pytest.approx(0.1)


@pytest.mark.asyncio
async def test_parse_failure_uses_parse_confidence():
    provider = AsyncMock()
    provider.classify.side_effect = ClassificationParseError("not json")
    service = RoomClassifierService(provider=provider)

    result = await service.classify_image("https://cdn.example.com/b.jpg")

    assert result.room_category is RoomCategory.OTHER
    assert result.confidence == pytest.approx(0.3)
    assert result.fallback is True


@pytest.mark.asyncio
async def test_unknown_room_type_is_treated_as_unreadable():
    provider = AsyncMock()
    provider.classify.return_value = {"roomType": "attic", "confidence": 0.9}
    service = RoomClassifierService(provider=provider)

    result = await service.classify_image("https://cdn.example.com/c.jpg")

    assert result.room_category is RoomCategory.OTHER
    assert result.confidence == pytest.approx(0.3)
    assert result.fallback is True


@pytest.mark.asyncio
async def test_payload_defaults_and_clamping():
    provider = AsyncMock()
    provider.classify.side_effect = [
        {"roomType": "Living Room", "features": ["fireplace", "fireplace", "view"], "confidence": 1.7},
        {"features": "hardwood_floors"},
    ]
    service = RoomClassifierService(provider=provider)

    living = await service.classify_image("https://cdn.example.com/d.jpg")
    missing = await service.classify_image("https://cdn.example.com/e.jpg")

    assert living.room_category is RoomCategory.LIVING_ROOM
    assert living.features == ("fireplace", "view")
    assert living.confidence == 1.0
    assert missing.room_category is RoomCategory.OTHER
    assert missing.confidence == pytest.approx(0.5)
    assert missing.features == ("hardwood_floors",)
    assert missing.fallback is False


@pytest.mark.asyncio
async def test_serial_mode_preserves_order_and_pauses_between_calls():
    service = RoomClassifierService(provider=StubRoomClassifierProvider())
    service.mode = ClassificationMode.SERIAL
    service.request_delay = 0.25
    urls = ["https://x/kitchen.jpg", "https://x/bathroom.jpg", "https://x/pool.jpg"]

    with patch("services.room_classifier.service.asyncio.sleep", AsyncMock()) as sleep_mock:
        results = await service.classify_images(urls)

    assert [result.source_url for result in results] == urls
    assert [result.room_category for result in results] == [
        RoomCategory.KITCHEN,
        RoomCategory.BATHROOM,
        RoomCategory.POOL,
    ]
    assert sleep_mock.await_count == len(urls) - 1
    sleep_mock.assert_awaited_with(0.25)


@pytest.mark.asyncio
async def test_concurrent_mode_runs_in_parallel_and_keeps_order():
    in_flight = 0
    peak = 0

    class SlowProvider(StubRoomClassifierProvider):
        async def classify(self, image_url):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return await super().classify(image_url)

    service = RoomClassifierService(provider=SlowProvider())
    service.mode = ClassificationMode.CONCURRENT
    service.max_concurrency = 2
    urls = [f"https://x/bedroom-{index}.jpg" for index in range(5)]

    results = await service.classify_images(urls)

    assert [result.source_url for result in results] == urls
    assert peak == 2


@pytest.mark.asyncio
async def test_failures_in_batch_do_not_drop_images():
    provider = AsyncMock()
    provider.classify.side_effect = [
        {"roomType": "kitchen", "confidence": 0.9},
        RuntimeError("boom"),
        {"roomType": "bathroom", "confidence": 0.8},
    ]
    service = RoomClassifierService(provider=provider)
    service.request_delay = 0.0

    results = await service.classify_images(["u1", "u2", "u3"])

    assert [result.source_url for result in results] == ["u1", "u2", "u3"]
    assert results[1].fallback is True


def test_unknown_provider_name_falls_back_to_stub():
    service_config.set("room_classifier_provider", "does-not-exist")
    service = RoomClassifierService()
    assert isinstance(service.provider, StubRoomClassifierProvider)


def test_openai_provider_without_credentials_falls_back_to_stub(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    service_config.set("room_classifier_provider", "openai")
    service_config.set("openai_api_key", None)
    service_config.set("use_azure_openai_vision", False)

    service = RoomClassifierService()

    assert isinstance(service.provider, StubRoomClassifierProvider)


@pytest.mark.asyncio
async def test_openai_classifier_parses_json_payload():
    provider = OpenAIVisionClassifier.__new__(OpenAIVisionClassifier)
    provider.model_name = "gpt-4o"
    content = json.dumps({"roomType": "kitchen", "features": ["island"], "description": "Bright", "confidence": 0.8})
    provider.client = SimpleNamespace(
        chat=SimpleNamespace(
            completions=SimpleNamespace(
                create=AsyncMock(
                    return_value=SimpleNamespace(
                        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
                    )
                )
            )
        )
    )

    payload = await provider.classify("https://x/kitchen.jpg")

    assert payload["roomType"] == "kitchen"
    call_kwargs = provider.client.chat.completions.create.await_args.kwargs
    assert call_kwargs["max_tokens"] == 300
    assert call_kwargs["messages"][1]["content"][1]["image_url"]["url"] == "https://x/kitchen.jpg"


@pytest.mark.asyncio
async def test_openai_classifier_rejects_non_json_content():
    provider = OpenAIVisionClassifier.__new__(OpenAIVisionClassifier)
    provider.model_name = "gpt-4o"
    provider.client = SimpleNamespace(
        chat=SimpleNamespace(
            completions=SimpleNamespace(
                create=AsyncMock(
                    return_value=SimpleNamespace(
                        choices=[SimpleNamespace(message=SimpleNamespace(content="It's a kitchen"))]
                    )
                )
            )
        )
    )

    with pytest.raises(ClassificationParseError):
        await provider.classify("https://x/kitchen.jpg")


@pytest.mark.asyncio
async def test_http_classifier_requires_endpoint():
    service_config.set("room_classifier_endpoint", None)
    provider = HttpRoomClassifier()

    with pytest.raises(RuntimeError):
        await provider.classify("https://x/a.jpg")


@pytest.mark.asyncio
async def test_http_classifier_posts_image_url():
    service_config.set("room_classifier_endpoint", "https://classifier.example.com/classify")
    try:
        provider = HttpRoomClassifier()
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.json.return_value = {"result": {"roomType": "garage", "confidence": 0.6}}
            mock_response.raise_for_status.return_value = None
            mock_session.post.return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            payload = await provider.classify("https://x/a.jpg")

        assert payload == {"roomType": "garage", "confidence": 0.6}
        assert mock_session.post.call_args.kwargs["json"] == {"image_url": "https://x/a.jpg"}
    finally:
        service_config.set("room_classifier_endpoint", None)


@pytest.mark.asyncio
async def test_http_classifier_wraps_transport_errors():
    service_config.set("room_classifier_endpoint", "https://classifier.example.com/classify")
    try:
        provider = HttpRoomClassifier()
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_session.post.side_effect = aiohttp.ClientConnectionError("refused")
            mock_session_class.return_value = mock_session

            with pytest.raises(RuntimeError):
                await provider.classify("https://x/a.jpg")
    finally:
        service_config.set("room_classifier_endpoint", None)
