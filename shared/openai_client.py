"""Factories for the OpenAI clients used by the vision classifier.

Both direct OpenAI and Azure OpenAI (v1 API) deployments are supported.
"""

from __future__ import annotations

import os

from openai import AsyncOpenAI

from shared.config import config


def create_vision_client(use_azure: bool | None = None) -> tuple[AsyncOpenAI, str]:
    """
    Create an async client for the room classifier together with the model name to call.

    Args:
        use_azure: Route through Azure OpenAI (defaults to USE_AZURE_OPENAI_VISION)

    Returns:
        Tuple of configured AsyncOpenAI client and model (or Azure deployment) name

    Raises:
        ValueError: If credentials are not configured
    """
    model = config.get("room_classifier_openai_model", "gpt-4o")
    if use_azure is None:
        use_azure = bool(config.get("use_azure_openai_vision", False))

    if use_azure:
        api_key = config.get("azure_openai_key") or os.getenv("AZURE_OPENAI_KEY")
        endpoint = config.get("azure_openai_endpoint") or os.getenv("AZURE_OPENAI_ENDPOINT")
        if not api_key or not endpoint:
            raise ValueError(
                "Azure OpenAI credentials not configured. "
                "Set AZURE_OPENAI_KEY and AZURE_OPENAI_ENDPOINT environment variables."
            )
        deployment = config.get("azure_openai_deployment") or model
        return AsyncOpenAI(api_key=api_key, base_url=f"{endpoint.rstrip('/')}/openai/v1/"), deployment

    api_key = config.get("openai_api_key") or os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")
    return AsyncOpenAI(api_key=api_key), model
