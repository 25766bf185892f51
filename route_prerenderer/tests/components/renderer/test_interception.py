import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from route_prerenderer.components.renderer.interception import RequestFilter, is_request_allowed

BASE_URL = "http://localhost:3000"


def make_route(url):
    route = MagicMock()
    route.request.url = url
    route.abort = AsyncMock()
    route.continue_ = AsyncMock()
    return route


def test_everything_allowed_without_filtering():
    assert is_request_allowed("http://other.com/x", BASE_URL, [], skip_third_party=False)


def test_third_party_blocked_with_filtering():
    allowed = ["http://example.com"]
    assert not is_request_allowed("http://other.com/x", BASE_URL, allowed, skip_third_party=True)
    assert is_request_allowed(BASE_URL + "/", BASE_URL, allowed, skip_third_party=True)
    assert is_request_allowed("http://example.com/font.woff", BASE_URL, allowed, skip_third_party=True)


def test_prefix_match_is_literal():
    # Only the given prefix counts; a different port is a different origin.
    assert not is_request_allowed("http://localhost:3001/", BASE_URL, [], skip_third_party=True)


@pytest.mark.asyncio
async def test_filter_aborts_and_logs_blocked_request():
    request_filter = RequestFilter(BASE_URL, ["http://example.com"], skip_third_party=True)
    route = make_route("http://other.com/x")

    with patch("route_prerenderer.components.renderer.interception.logger") as mock_logger:
        await request_filter(route)

    route.abort.assert_awaited_once()
    route.continue_.assert_not_awaited()
    mock_logger.info.assert_called_once()
    assert "http://other.com/x" in mock_logger.info.call_args[0][0]


@pytest.mark.asyncio
async def test_filter_continues_allowed_request():
    request_filter = RequestFilter(BASE_URL, ["http://example.com"], skip_third_party=True)
    route = make_route(BASE_URL + "/main.js")

    await request_filter(route)

    route.continue_.assert_awaited_once()
    route.abort.assert_not_awaited()


@pytest.mark.asyncio
async def test_filter_disabled_continues_everything():
    request_filter = RequestFilter(BASE_URL)
    route = make_route("http://tracker.example.net/pixel.gif")

    await request_filter(route)

    route.continue_.assert_awaited_once()
