"""Tests for the completion proxy reshaping and error mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from ieltsplan.completion import build_upstream_body, first_candidate_text, messages_to_contents
from ieltsplan.config import SyncConfig
from ieltsplan.exceptions import InvalidRequestError
from ieltsplan.server import create_app
from ieltsplan.storage.memory import MemoryBackend

_OK_RESPONSE = {
    "candidates": [{"content": {"role": "model", "parts": [{"text": "Hello, "}, {"text": "learner."}]}}],
    "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 3, "totalTokenCount": 7},
}


@dataclass
class FakeGemini:
    status: int = 200
    response: Any = field(default_factory=lambda: _OK_RESPONSE)
    requests: list[dict[str, Any]] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)
    api_keys: list[str | None] = field(default_factory=list)

    async def handle(self, request: web.Request) -> web.Response:
        self.paths.append(request.path)
        self.api_keys.append(request.headers.get("x-goog-api-key"))
        self.requests.append(await request.json())
        return web.json_response(self.response, status=self.status)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/{tail:.*}", self.handle)
        return app


# ------------------------------------------------------------------
# Request reshaping
# ------------------------------------------------------------------


def test_contents_body_moves_system_instruction_into_upstream_body() -> None:
    body = {
        "contents": [{"role": "user", "parts": [{"text": "define 'ubiquitous'"}]}],
        "config": {"systemInstruction": "You are an IELTS tutor.", "temperature": 0.2},
    }
    upstream = build_upstream_body(body)

    assert upstream == {
        "contents": body["contents"],
        "systemInstruction": {"parts": [{"text": "You are an IELTS tutor."}]},
        "generationConfig": {"temperature": 0.2},
    }
    assert "systemInstruction" in body["config"]


def test_messages_body_is_converted_to_contents() -> None:
    upstream = build_upstream_body(
        {
            "messages": [{"role": "user", "text": "hi"}, {"role": "model", "text": "hello"}],
            "systemInstruction": "Be brief.",
        }
    )
    assert upstream["contents"] == [
        {"role": "user", "parts": [{"text": "hi"}]},
        {"role": "model", "parts": [{"text": "hello"}]},
    ]
    assert upstream["systemInstruction"] == {"parts": [{"text": "Be brief."}]}
    assert "generationConfig" not in upstream


def test_assistant_role_maps_to_model() -> None:
    assert messages_to_contents([{"role": "assistant", "text": "ok"}])[0]["role"] == "model"


@pytest.mark.parametrize(
    "body",
    [[], "text", {"config": {}}, {"messages": [{"role": "system", "text": "x"}]}, {"messages": [{"text": 1}]}],
)
def test_unusable_bodies_are_rejected(body: Any) -> None:
    with pytest.raises(InvalidRequestError):
        build_upstream_body(body)


def test_first_candidate_text_handles_missing_parts() -> None:
    assert first_candidate_text(_OK_RESPONSE) == "Hello, learner."
    assert first_candidate_text({"candidates": []}) == ""
    assert first_candidate_text({"candidates": [{"content": {}}]}) == ""


# ------------------------------------------------------------------
# Endpoint
# ------------------------------------------------------------------


async def _post(config: SyncConfig, body: Any) -> tuple[int, Any]:
    async with TestClient(TestServer(create_app(config, backend=MemoryBackend()))) as client:
        resp = await client.post("/api/gemini", json=body)
        return resp.status, await resp.json()


@pytest.mark.asyncio
async def test_proxy_forwards_and_shapes_response() -> None:
    fake = FakeGemini()
    async with TestServer(fake.app()) as upstream:
        config = SyncConfig(gemini_api_key="secret", gemini_base_url=str(upstream.make_url("/v1beta")))
        status, body = await _post(config, {"contents": [{"role": "user", "parts": [{"text": "hi"}]}]})

    assert status == 200
    assert body == {
        "response": {"text": "Hello, learner."},
        "candidates": _OK_RESPONSE["candidates"],
        "usageMetadata": _OK_RESPONSE["usageMetadata"],
    }
    assert fake.paths == ["/v1beta/models/gemini-2.5-flash:generateContent"]
    assert fake.api_keys == ["secret"]
    assert fake.requests == [{"contents": [{"role": "user", "parts": [{"text": "hi"}]}]}]


@pytest.mark.asyncio
async def test_upstream_error_status_and_message_are_relayed() -> None:
    fake = FakeGemini(status=429, response={"error": {"code": 429, "message": "Quota exceeded"}})
    async with TestServer(fake.app()) as upstream:
        config = SyncConfig(gemini_api_key="secret", gemini_base_url=str(upstream.make_url("/v1beta")))
        status, body = await _post(config, {"messages": [{"role": "user", "text": "hi"}]})

    assert status == 429
    assert body == {"error": "Gemini API error: Quota exceeded"}


@pytest.mark.asyncio
async def test_missing_api_key_returns_500() -> None:
    status, body = await _post(SyncConfig(), {"messages": [{"role": "user", "text": "hi"}]})
    assert status == 500
    assert body == {"error": "Server configuration error: API key missing"}


@pytest.mark.asyncio
async def test_unreachable_upstream_returns_502() -> None:
    config = SyncConfig(gemini_api_key="secret", gemini_base_url="http://127.0.0.1:9/v1beta", upstream_timeout=2.0)
    status, body = await _post(config, {"messages": [{"role": "user", "text": "hi"}]})
    assert status == 502
    assert body == {"error": "Upstream request failed"}


@pytest.mark.asyncio
async def test_bad_request_body_returns_400() -> None:
    status, body = await _post(SyncConfig(gemini_api_key="secret"), {"prompt": "hi"})
    assert status == 400
    assert "error" in body


@pytest.mark.asyncio
async def test_get_is_not_allowed() -> None:
    async with TestClient(TestServer(create_app(SyncConfig(), backend=MemoryBackend()))) as client:
        resp = await client.get("/api/gemini")
        assert resp.status == 405
        assert resp.headers["Allow"] == "POST, OPTIONS"
