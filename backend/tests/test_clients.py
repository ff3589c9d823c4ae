"""
Tests for the OpenAI and image download clients.

The OpenAI SDK is mocked; image downloads go through an httpx MockTransport.
"""
import base64
import pytest
from unittest.mock import MagicMock, patch

import httpx

from backend.clients.image_client import ImageDownloadError, ImageFetcher, encode_data_uri
from backend.clients.openai_client import OpenAIClient, OpenAIClientError
from backend.config import get_settings


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def openai_settings():
    return get_settings(
        debug=True,
        openai_api_key="sk-test",
        openai_vision_model="vision-model",
        openai_routine_model="routine-model",
    )


class TestOpenAIClient:
    """Tests for OpenAIClient."""

    def test_missing_api_key(self):
        client = OpenAIClient(get_settings(debug=True, openai_api_key=None))

        with pytest.raises(OpenAIClientError, match="OPENAI_API_KEY"):
            client.complete("system", "user")

    def test_sdk_built_from_settings(self, openai_settings):
        with patch("openai.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = _completion("ok")
            OpenAIClient(openai_settings).complete("system", "user")

        mock_openai.assert_called_once_with(
            api_key="sk-test",
            timeout=openai_settings.openai_timeout_seconds,
            max_retries=0,
        )

    def test_complete(self, openai_settings):
        with patch("openai.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.return_value = _completion("TITLE: Plan")

            result = OpenAIClient(openai_settings).complete("be a trainer", "3 days")

        assert result == "TITLE: Plan"
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "routine-model"
        assert kwargs["temperature"] == openai_settings.routine_temperature
        assert kwargs["max_tokens"] == openai_settings.routine_max_tokens
        assert kwargs["messages"] == [
            {"role": "system", "content": "be a trainer"},
            {"role": "user", "content": "3 days"},
        ]

    def test_describe_image(self, openai_settings):
        with patch("openai.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.return_value = _completion("Treadmill")

            result = OpenAIClient(openai_settings).describe_image(
                "List equipment", "data:image/jpeg;base64,AAAA"
            )

        assert result == "Treadmill"
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "vision-model"
        assert kwargs["temperature"] == openai_settings.equipment_detection_temperature
        assert kwargs["max_tokens"] == openai_settings.equipment_detection_max_tokens
        content = kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "List equipment"}
        assert content[1] == {
            "type": "image_url",
            "image_url": {"url": "data:image/jpeg;base64,AAAA"},
        }

    def test_null_content_becomes_empty_string(self, openai_settings):
        with patch("openai.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = _completion(None)

            assert OpenAIClient(openai_settings).describe_image("p", "u") == ""

    def test_api_error_is_wrapped(self, openai_settings):
        with patch("openai.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("429")

            with pytest.raises(OpenAIClientError, match="429"):
                OpenAIClient(openai_settings).complete("system", "user")


class TestImageFetcher:
    """Tests for ImageFetcher."""

    def _fetcher(self, handler):
        return ImageFetcher(get_settings(debug=True), transport=httpx.MockTransport(handler))

    def test_encodes_png(self):
        def handler(request):
            return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

        uri = self._fetcher(handler).fetch_data_uri("https://cdn.example.com/a.png")

        assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")

    def test_defaults_to_jpeg(self):
        def handler(request):
            return httpx.Response(
                200, content=b"bytes", headers={"content-type": "application/octet-stream"}
            )

        uri = self._fetcher(handler).fetch_data_uri("https://cdn.example.com/a")

        assert uri.startswith("data:image/jpeg;base64,")

    def test_strips_content_type_parameters(self):
        def handler(request):
            return httpx.Response(
                200, content=b"x", headers={"content-type": "Image/WebP; charset=binary"}
            )

        uri = self._fetcher(handler).fetch_data_uri("https://cdn.example.com/a.webp")

        assert uri.startswith("data:image/webp;base64,")

    def test_http_error_status(self):
        def handler(request):
            return httpx.Response(404)

        with pytest.raises(ImageDownloadError, match="404"):
            self._fetcher(handler).fetch_data_uri("https://cdn.example.com/missing.jpg")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ImageDownloadError, match="connection refused"):
            self._fetcher(handler).fetch_data_uri("https://cdn.example.com/a.jpg")


def test_encode_data_uri():
    assert encode_data_uri(b"abc", "image/gif") == "data:image/gif;base64,YWJj"
