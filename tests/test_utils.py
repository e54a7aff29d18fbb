import pytest

from shared.config import ServiceConfig
from shared.enums import RoomCategory
from shared.utils import (
    config,
    count_words,
    dedupe_preserving_order,
    extract_words,
    prepare_narration_text,
    setup_logging,
)


def test_config_env_loading() -> None:
    # Keys should resolve even when not explicitly configured
    assert config.get("openai_api_key") in (None, "") or isinstance(config.get("openai_api_key"), str)
    assert isinstance(config.get("allowed_origins"), list)
    assert config.get("room_classifier_timeout") == 30 or isinstance(config.get("room_classifier_timeout"), int)


def test_get_returns_default_for_unset_keys() -> None:
    assert config.get("does_not_exist", "fallback") == "fallback"


def test_pipeline_values_and_env_overrides(monkeypatch) -> None:
    local_config = ServiceConfig()
    local_config.set_pipeline_config({"sequencing": {"captions": {"words_per_chunk": 6}}})

    assert local_config.get_pipeline_value("sequencing.captions.words_per_chunk", 4) == 6
    assert local_config.get_pipeline_value("sequencing.captions.missing", "x") == "x"

    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CAPTIONS_WORDS_PER_CHUNK", "3")
    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CAPTIONS_CLAMP_TO_DURATION", "true")
    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CAPTIONS_CHUNK_GAP", "0.2")
    assert local_config.get_pipeline_value("sequencing.captions.words_per_chunk", 4) == 3
    assert local_config.get_pipeline_value("sequencing.captions.clamp_to_duration", False) is True
    assert local_config.get_pipeline_value("sequencing.captions.chunk_gap", 0.1) == pytest.approx(0.2)


def test_pipeline_file_is_loaded() -> None:
    assert config.pipeline_config["sequencing"]["classification"]["mode"] == "serial"


def test_prepare_narration_text() -> None:
    assert prepare_narration_text("Dream  home 🏡 (3BR)!") == "Dream home 3BR !"
    assert prepare_narration_text(None) == ""


def test_extract_and_count_words() -> None:
    assert extract_words("Hello — world !") == ["Hello", "world"]
    assert count_words("Welcome home 🏡, it's lovely.") == 4


def test_dedupe_preserving_order() -> None:
    assert dedupe_preserving_order(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_setup_logging_adds_single_handler() -> None:
    logger = setup_logging("test-service")
    again = setup_logging("test-service")

    assert logger is again
    assert len(logger.handlers) == 1


@pytest.mark.parametrize(
    "label,expected",
    [
        ("kitchen", RoomCategory.KITCHEN),
        ("Living Room", RoomCategory.LIVING_ROOM),
        ("master-bedroom", RoomCategory.MASTER_BEDROOM),
        ("attic", None),
        (None, None),
    ],
)
def test_room_category_parse(label, expected) -> None:
    assert RoomCategory.parse(label) is expected


def test_pipeline_override_follows_default_type(monkeypatch) -> None:
    local_config = ServiceConfig()
    local_config.set_pipeline_config({})

    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CLASSIFICATION_DELAY_SECONDS", "1")
    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CLASSIFICATION_MODE", "concurrent")
    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CLASSIFICATION_MAX_CONCURRENCY", "")
    delay = local_config.get_pipeline_value("sequencing.classification.delay_seconds", 0.5)
    assert isinstance(delay, float) and delay == 1.0
    assert local_config.get_pipeline_value("sequencing.classification.mode", "serial") == "concurrent"
    assert local_config.get_pipeline_value("sequencing.classification.max_concurrency", 4) == 4

    monkeypatch.setenv("PIPELINE_FLAG_SEQUENCING_CAPTIONS_WORDS_PER_CHUNK", "four")
    with pytest.raises(ValueError):
        local_config.get_pipeline_value("sequencing.captions.words_per_chunk", 4)


def test_env_settings_are_parsed(monkeypatch) -> None:
    monkeypatch.setenv("ROOM_CLASSIFIER_TIMEOUT", "12")
    monkeypatch.setenv("USE_AZURE_OPENAI_VISION", "TRUE")
    monkeypatch.setenv("ALLOWED_ORIGINS", '["https://listings.example.com"]')
    monkeypatch.setenv("ROOM_CLASSIFIER_ENDPOINT", "")

    local_config = ServiceConfig()

    assert local_config.get("room_classifier_timeout") == 12
    assert local_config.get("use_azure_openai_vision") is True
    assert local_config.get("allowed_origins") == ["https://listings.example.com"]
    assert local_config.get("room_classifier_endpoint") is None
