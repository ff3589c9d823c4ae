"""
External API client modules.

This module contains clients for interacting with external services
such as OpenAI for LLM-powered features and HTTP image hosts.
"""

from backend.clients.image_client import ImageDownloadError, ImageFetcher
from backend.clients.openai_client import OpenAIClient, OpenAIClientError
from backend.clients.protocol import ImageSource, LanguageModel

__all__ = [
    "ImageDownloadError",
    "ImageFetcher",
    "ImageSource",
    "LanguageModel",
    "OpenAIClient",
    "OpenAIClientError",
]
