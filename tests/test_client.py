"""Tests for festival.client.ai (HTTP wrapper around the gateway)."""

import asyncio
import json

import httpx
import pytest

from conftest import COUPLET, FORTUNE
from festival.client.ai import COUPLET_FAILED, FORTUNE_FAILED, GenerationClient
from festival.utils.errors import ClientGenerationError


def _client(handler) -> GenerationClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GenerationClient("http://festival.test/", http=http)


class TestGenerateCouplet:
    def test_posts_theme_and_returns_result(self):
        seen = []

        def handler(request: httpx.Request):
            seen.append(request)
            return httpx.Response(200, json=COUPLET)

        result = asyncio.run(_client(handler).generate_couplet("程序员"))
        assert result.model_dump() == COUPLET
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "http://festival.test/api/couplet"
        assert json.loads(seen[0].content) == {"theme": "程序员"}

    def test_style_sent_when_given(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=COUPLET)

        asyncio.run(_client(handler).generate_couplet("猫咪", style="humorous"))
        assert seen == [{"theme": "猫咪", "style": "humorous"}]

    def test_server_error_becomes_fixed_message(self):
        client = _client(lambda r: httpx.Response(500, json={"error": "Failed to generate couplet"}))
        with pytest.raises(ClientGenerationError) as exc:
            asyncio.run(client.generate_couplet("春"))
        assert exc.value.message == COUPLET_FAILED == "生成失败，请重试"

    def test_transport_failure_becomes_fixed_message(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ClientGenerationError) as exc:
            asyncio.run(_client(handler).generate_couplet("春"))
        assert exc.value.message == COUPLET_FAILED


class TestGenerateFortune:
    def test_returns_card(self):
        def handler(request):
            assert request.url.path == "/api/fortune"
            return httpx.Response(200, json=FORTUNE)

        card = asyncio.run(_client(handler).generate_fortune())
        assert card.title == "上上签"
        assert card.type == "career"

    def test_failure_becomes_fixed_message(self):
        client = _client(lambda r: httpx.Response(502, text="bad gateway"))
        with pytest.raises(ClientGenerationError) as exc:
            asyncio.run(client.generate_fortune())
        assert exc.value.message == FORTUNE_FAILED == "求签失败，请心诚则灵(重试)"

    def test_non_json_body_becomes_fixed_message(self):
        client = _client(lambda r: httpx.Response(200, text="<html></html>"))
        with pytest.raises(ClientGenerationError):
            asyncio.run(client.generate_fortune())


class TestLifecycle:
    def test_context_manager_closes_owned_client(self):
        async def scenario():
            async with GenerationClient("http://festival.test") as client:
                http = client.http
            return http

        assert asyncio.run(scenario()).is_closed

    def test_injected_client_left_open(self):
        async def scenario():
            http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
            async with GenerationClient("http://festival.test", http=http):
                pass
            return http

        assert not asyncio.run(scenario()).is_closed
