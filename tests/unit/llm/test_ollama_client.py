"""Unit tests for OllamaClient (HTTP mocked with httpx.MockTransport)."""

import json
import time

import httpx
import pytest

from fake_news_pipeline.deadline import request_deadline
from fake_news_pipeline.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMMalformedResponseError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from fake_news_pipeline.llm.ollama_client import INVALID_REPLY_PLACEHOLDER
from fake_news_pipeline.models.enums import UpstreamFailure


@pytest.mark.asyncio
async def test_chat_success(ollama_transport, make_ollama_client):
    """Successful chat returns the message content and metadata."""
    transport = ollama_transport(["notícia verdadeira"])
    client = make_ollama_client(transport)

    response = await client.chat("Classifique o texto")

    assert response.content == "notícia verdadeira"
    assert response.model_version == "llama3.2:1b"
    assert response.created_at == "2026-10-19T12:00:00Z"
    assert response.placeholder_used is False
    assert transport.prompts == ["Classifique o texto"]
    await client.close()


@pytest.mark.asyncio
async def test_chat_payload(make_ollama_client):
    """Request is a non-streaming single user message to /api/chat."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"content": "ok"}})

    client = make_ollama_client(httpx.MockTransport(handler))
    await client.chat("prompt", model="outro-modelo")

    assert captured["path"] == "/api/chat"
    assert captured["body"] == {
        "model": "outro-modelo",
        "stream": False,
        "messages": [{"role": "user", "content": "prompt"}],
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"model": "llama3.2:1b"},
        {"message": {}},
        {"message": {"content": ""}},
        {"message": {"content": None}},
        {"message": "texto"},
        [],
        ["a", "list"],
        None,
        "texto",
        42,
    ],
)
async def test_chat_placeholder_when_content_missing(make_ollama_client, body):
    """Well-formed JSON without message content yields the placeholder, not an error."""
    # Encoded by hand: httpx treats json=None as "no body"
    reply = httpx.Response(
        200,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )
    client = make_ollama_client(httpx.MockTransport(lambda request: reply))

    response = await client.chat("prompt")

    assert response.content == INVALID_REPLY_PLACEHOLDER
    assert response.placeholder_used is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error_cls, failure",
    [
        (429, LLMRateLimitError, UpstreamFailure.RATE_LIMITED),
        (404, LLMModelNotAvailableError, UpstreamFailure.MODEL_UNAVAILABLE),
        (503, LLMModelNotAvailableError, UpstreamFailure.MODEL_UNAVAILABLE),
        (500, LLMGenerationError, UpstreamFailure.OTHER),
    ],
)
async def test_chat_http_errors(make_ollama_client, status_code, error_cls, failure):
    """HTTP error statuses map to structured failure variants."""
    client = make_ollama_client(
        httpx.MockTransport(lambda request: httpx.Response(status_code, text="erro"))
    )

    with pytest.raises(error_cls) as exc_info:
        await client.chat("prompt")

    assert exc_info.value.failure is failure
    assert exc_info.value.details["status"] == status_code


@pytest.mark.asyncio
async def test_chat_timeout(make_ollama_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_ollama_client(httpx.MockTransport(handler))

    with pytest.raises(LLMTimeoutError) as exc_info:
        await client.chat("prompt")

    assert exc_info.value.failure is UpstreamFailure.TIMEOUT


@pytest.mark.asyncio
async def test_chat_connection_refused(make_ollama_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_ollama_client(httpx.MockTransport(handler))

    with pytest.raises(LLMConnectionError) as exc_info:
        await client.chat("prompt")

    assert exc_info.value.failure is UpstreamFailure.CONNECTION_REFUSED


@pytest.mark.asyncio
async def test_chat_malformed_response(make_ollama_client):
    """Only a body that is not JSON at all is a malformed response."""
    client = make_ollama_client(
        httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
    )

    with pytest.raises(LLMMalformedResponseError) as exc_info:
        await client.chat("prompt")

    assert exc_info.value.failure is UpstreamFailure.MALFORMED_RESPONSE


@pytest.mark.asyncio
async def test_chat_spent_deadline_fails_without_calling(ollama_transport, make_ollama_client):
    """A request deadline in the past fails immediately as a timeout."""
    transport = ollama_transport(["notícia verdadeira"])
    client = make_ollama_client(transport)

    token = request_deadline.set(time.time() - 1)
    try:
        with pytest.raises(LLMTimeoutError):
            await client.chat("prompt")
    finally:
        request_deadline.reset(token)

    assert transport.prompts == []


@pytest.mark.asyncio
async def test_health_check(make_ollama_client):
    def handler(request):
        if request.url.path == "/api/tags":
            return httpx.Response(200, json={"models": []})
        return httpx.Response(404)

    client = make_ollama_client(httpx.MockTransport(handler))
    assert await client.health_check() is True


@pytest.mark.asyncio
async def test_health_check_unreachable(make_ollama_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_ollama_client(httpx.MockTransport(handler)) as client:
        assert await client.health_check() is False
