"""
Image download client.

Fetches location photos and encodes them as base64 data URIs so they can be
sent inline to the vision model.
"""

import base64
import logging
from typing import Optional

import httpx

from backend.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class ImageDownloadError(Exception):
    """Raised when an image cannot be downloaded."""

    pass


def encode_data_uri(content: bytes, mime_type: str = DEFAULT_IMAGE_MIME_TYPE) -> str:
    """Encode raw bytes as a base64 ``data:`` URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class ImageFetcher:
    """
    Downloads images over HTTP and returns them as data URIs.

    The MIME type comes from the response Content-Type when it names an
    image type, otherwise JPEG is assumed.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            settings: Settings providing the download timeout.
            transport: Optional httpx transport (used by tests).
        """
        self._settings = settings or default_settings
        self._transport = transport

    def fetch_data_uri(self, url: str) -> str:
        """
        Download an image and encode it as a data URI.

        Args:
            url: Image URL.

        Returns:
            ``data:<mime>;base64,<payload>`` string.

        Raises:
            ImageDownloadError: On transport errors or non-2xx responses.
        """
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self._settings.image_download_timeout_seconds),
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Image download failed: {e.response.status_code} for {url}")
            raise ImageDownloadError(
                f"Image download failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error downloading image {url}: {e}")
            raise ImageDownloadError(f"Error downloading image: {e}") from e

        content_type = response.headers.get("content-type", "")
        mime_type = content_type.split(";")[0].strip().lower()
        if not mime_type.startswith("image/"):
            mime_type = DEFAULT_IMAGE_MIME_TYPE

        return encode_data_uri(response.content, mime_type)
