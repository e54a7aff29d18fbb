"""
Configuration for the sequencing and script writer services.

Environment settings come from the process environment and an optional ``.env``
file at the project root. Pipeline tunables (classification scheduling, caption
chunking, timing floors) come from ``config/pipeline.yaml`` and can be
overridden per key with ``PIPELINE_FLAG_<DOTTED_PATH>`` variables.
"""

import json
import os
from typing import Any, Callable

import yaml

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_PIPELINE_PATH = os.path.join(PROJECT_ROOT, "config", "pipeline.yaml")


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# key -> (environment variable, default, parser)
ENV_SETTINGS: dict[str, tuple[str, Any, Callable[[str], Any]]] = {
    "room_classifier_provider": ("ROOM_CLASSIFIER_PROVIDER", "stub", str),
    "room_classifier_openai_model": ("ROOM_CLASSIFIER_OPENAI_MODEL", "gpt-4o", str),
    "room_classifier_endpoint": ("ROOM_CLASSIFIER_ENDPOINT", None, str),
    "room_classifier_api_key": ("ROOM_CLASSIFIER_API_KEY", None, str),
    "room_classifier_timeout": ("ROOM_CLASSIFIER_TIMEOUT", 30, int),
    "openai_api_key": ("OPENAI_API_KEY", None, str),
    "use_azure_openai_vision": ("USE_AZURE_OPENAI_VISION", False, _as_bool),
    "azure_openai_key": ("AZURE_OPENAI_KEY", None, str),
    "azure_openai_endpoint": ("AZURE_OPENAI_ENDPOINT", None, str),
    "azure_openai_deployment": ("AZURE_OPENAI_DEPLOYMENT", None, str),
    "log_level": ("LOG_LEVEL", "INFO", str),
    "debug": ("DEBUG", False, _as_bool),
    "allowed_origins": ("ALLOWED_ORIGINS", ["*"], json.loads),
}


class ServiceConfig:
    """Environment settings plus the YAML pipeline file."""

    def __init__(self) -> None:
        load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"), override=False)
        self.config: dict[str, Any] = {}
        self.pipeline_config: dict[str, Any] = {}
        self.pipeline_config_path = os.getenv("PIPELINE_CONFIG_PATH", DEFAULT_PIPELINE_PATH)
        self.reload()

    def load_from_env(self) -> None:
        """Read every known setting, treating empty variables as unset."""
        settings: dict[str, Any] = {}
        for key, (env_name, default, parse) in ENV_SETTINGS.items():
            raw = os.getenv(env_name)
            settings[key] = parse(raw) if raw not in (None, "") else default
        self.config = settings

    def get(self, key: str, default: Any = None) -> Any:
        """Return a setting, or ``default`` when it is missing or unset."""
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        self.config[key] = value

    def reload(self) -> None:
        self.load_from_env()
        self.load_pipeline_config()

    def load_pipeline_config(self) -> None:
        """Load pipeline tunables; a missing file means built-in defaults apply."""
        try:
            with open(os.path.abspath(self.pipeline_config_path), "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        self.pipeline_config = data

    def get_pipeline_value(self, path: str, default: Any = None) -> Any:
        """
        Look up a tunable such as ``sequencing.captions.words_per_chunk``.

        A ``PIPELINE_FLAG_SEQUENCING_CAPTIONS_WORDS_PER_CHUNK`` environment
        variable takes precedence over the file and is parsed to the type of
        ``default``.
        """
        env_value = os.getenv(f"PIPELINE_FLAG_{path.replace('.', '_').upper()}")
        if env_value is not None:
            return self._coerce_env_value(env_value, default)

        node: Any = self.pipeline_config
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def set_pipeline_config(self, pipeline_config: dict[str, Any]) -> None:
        """Replace the loaded pipeline tunables."""
        self.pipeline_config = pipeline_config

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        """Parse an override using the default's type (bool, int, float or str)."""
        if raw == "":
            return default
        if isinstance(default, bool):
            return _as_bool(raw)
        try:
            if isinstance(default, int):
                return int(raw)
            if isinstance(default, float):
                return float(raw)
        except ValueError as exc:
            raise ValueError(f"Invalid pipeline override {raw!r}: expected {type(default).__name__}") from exc
        return raw


# Global configuration instance
config = ServiceConfig()
