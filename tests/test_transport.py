"""
Tests for the HTTP transport.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from spotzee.errors import ApiError
from spotzee.transport import Transport


def _response(status_code=200, text="", json_body=None):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_body
    return response


class TestTransport:
    """Test Transport."""

    def setup_method(self):
        """Setup test fixtures."""
        self.transport = Transport(api_key="test-key", endpoint="https://test-api.com/api/")

    def test_session_headers(self):
        """Test auth and content type are set on the session."""
        headers = self.transport.session.headers
        assert headers['Authorization'] == "Bearer test-key"
        assert headers['Content-Type'] == "application/json"

    def test_url(self):
        assert self.transport.url("events") == "https://test-api.com/api/client/events"

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.post')
    async def test_post_normalizes_body(self, mock_post):
        """Test the body is sent with snake_case keys."""
        mock_post.return_value = _response(text="accepted")

        result = await self.transport.post("identify", {"externalId": "u1", "data": {"firstName": "Ada"}})

        assert result == "accepted"
        mock_post.assert_called_once_with(
            "https://test-api.com/api/client/identify",
            timeout=None,
            json={"external_id": "u1", "data": {"first_name": "Ada"}},
        )

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.put')
    async def test_put(self, mock_put):
        mock_put.return_value = _response(text="")

        result = await self.transport.put("notifications/5", {"anonymousId": "a1"})

        assert result == ""
        args, kwargs = mock_put.call_args
        assert args == ("https://test-api.com/api/client/notifications/5",)
        assert kwargs['json'] == {"anonymous_id": "a1"}

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.get')
    async def test_get_with_cursor(self, mock_get):
        """Test cursor and identity headers are attached."""
        mock_get.return_value = _response(json_body={"results": [], "cursor": None})

        result = await self.transport.get(
            "notifications", {"x-anonymous-id": "a1"}, cursor="abc=="
        )

        assert result == {"results": [], "cursor": None}
        mock_get.assert_called_once_with(
            "https://test-api.com/api/client/notifications",
            timeout=None,
            params={"cursor": "abc=="},
            headers={"x-anonymous-id": "a1"},
        )

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.get')
    async def test_get_without_cursor(self, mock_get):
        mock_get.return_value = _response(json_body={"results": []})

        await self.transport.get("notifications", {"x-anonymous-id": "a1"})

        assert mock_get.call_args.kwargs['params'] is None

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.post')
    async def test_error_status_raises(self, mock_post):
        """Test non-success responses carry status and body."""
        mock_post.return_value = _response(status_code=400, text="bad request")

        with pytest.raises(ApiError) as exc_info:
            await self.transport.post("events", [])

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "bad request"
        assert str(exc_info.value) == "API Error 400: bad request"

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.get')
    async def test_get_error_status_raises(self, mock_get):
        mock_get.return_value = _response(status_code=503, text="unavailable")

        with pytest.raises(ApiError) as exc_info:
            await self.transport.get("notifications", {"x-anonymous-id": "a1"})

        assert exc_info.value.status_code == 503
        mock_get.return_value.json.assert_not_called()

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.post')
    async def test_connection_error_propagates(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(requests.ConnectionError):
            await self.transport.post("events", [])
        assert mock_post.call_count == 1

    @pytest.mark.asyncio
    @patch('spotzee.transport.requests.Session.post')
    async def test_timeout_passed_through(self, mock_post):
        mock_post.return_value = _response()
        transport = Transport(api_key="test-key", timeout=5)

        await transport.post("alias", {})

        assert mock_post.call_args.kwargs['timeout'] == 5
