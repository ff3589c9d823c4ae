"""
Protocol definitions for external collaborators.

Services depend on these interfaces so that the OpenAI client and the image
downloader can be swapped for fakes in tests.
"""

from typing import Protocol


class LanguageModel(Protocol):
    """
    Protocol for LLM clients used by the services.

    OpenAIClient implements this protocol.
    """

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Generate text from a system and a user instruction.

        Args:
            system_prompt: Instructions for the model behavior.
            user_prompt: The request to answer.

        Returns:
            The model's response content.
        """
        ...

    def describe_image(self, prompt: str, image_url: str) -> str:
        """
        Answer a question about an image.

        Args:
            prompt: Instruction for the model.
            image_url: HTTP(S) URL or ``data:`` URI of the image.

        Returns:
            The model's response content.
        """
        ...


class ImageSource(Protocol):
    """Protocol for downloading images as data URIs."""

    def fetch_data_uri(self, url: str) -> str:
        """Download the image at ``url`` and return it as a base64 data URI."""
        ...
