"""
OpenAI API client with error handling.

Provides a wrapper around the OpenAI API for equipment detection in photos
and workout routine generation.
"""

import logging
from typing import Any, Dict, List, Optional

from backend.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class OpenAIClientError(Exception):
    """Base exception for OpenAI client errors."""

    pass


class OpenAIClient:
    """
    Client for interacting with OpenAI API.

    Provides methods for:
    - Text completions for routine generation
    - Vision requests for equipment detection

    Each instance builds its own SDK client from the settings it was given,
    so callers inject the client rather than sharing a module-level one.

    Example:
        >>> client = OpenAIClient()
        >>> response = client.complete(
        ...     system_prompt="You are an expert personal trainer...",
        ...     user_prompt="Create a 3-day workout routine...",
        ... )
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the OpenAI client.

        Args:
            settings: Settings to read the API key and model options from.
                Defaults to the application settings.
        """
        self._settings = settings or default_settings
        self._client: Optional[Any] = None
        self._initialized = False

    def _ensure_initialized(self) -> None:
        """Lazily initialize the OpenAI client."""
        if self._initialized:
            return

        if not self._settings.openai_api_key:
            raise OpenAIClientError(
                "OpenAI API key not configured. "
                "Set OPENAI_API_KEY environment variable."
            )

        from openai import OpenAI

        self._client = OpenAI(
            api_key=self._settings.openai_api_key,
            timeout=self._settings.openai_timeout_seconds,
            max_retries=self._settings.openai_max_retries,
        )
        self._initialized = True

    def _create(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        self._ensure_initialized()

        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise OpenAIClientError(f"OpenAI API call failed: {e}") from e

        content = response.choices[0].message.content
        return content or ""

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a completion request to OpenAI.

        Args:
            system_prompt: Instructions for the model behavior.
            user_prompt: The user's input to process.

        Returns:
            The model's response content as a string.

        Raises:
            OpenAIClientError: If the API call fails.
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return self._create(
            model=self._settings.openai_routine_model,
            messages=messages,
            temperature=self._settings.routine_temperature,
            max_tokens=self._settings.routine_max_tokens,
        )

    def describe_image(self, prompt: str, image_url: str) -> str:
        """
        Send a vision request with one image to OpenAI.

        Args:
            prompt: Instruction for the model.
            image_url: URL or data URI of the image.

        Returns:
            The model's response content as a string.

        Raises:
            OpenAIClientError: If the API call fails.
        """
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_url}},
                ],
            }
        ]
        return self._create(
            model=self._settings.openai_vision_model,
            messages=messages,
            temperature=self._settings.equipment_detection_temperature,
            max_tokens=self._settings.equipment_detection_max_tokens,
        )
