import asyncio
import json

import httpx
import pytest

from app.core.config import settings
from app.core.llm_connection import LLMService
from app.core.llm_providers import AnthropicProvider, GroqProvider, OpenAIProvider
from app.services.Caption_service import CaptionExtractor


def _anthropic_transport(seen, text):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"content": [{"type": "text", "text": text}]})
    return httpx.MockTransport(handler)


def test_anthropic_request_shape():
    seen = []
    provider = AnthropicProvider("sk-test", "claude-test", transport=_anthropic_transport(seen, "  hi  "))
    messages = [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hello"},
    ]

    assert asyncio.run(provider.generate(messages, max_tokens=256)) == "hi"

    request = seen[0]
    body = json.loads(request.content)
    assert request.url.host == "api.anthropic.com"
    assert request.headers["x-api-key"] == "sk-test"
    assert body["system"] == "be brief"
    assert body["messages"] == [{"role": "user", "content": "hello"}]
    assert body["max_tokens"] == 256
    assert body["model"] == "claude-test"


def test_chat_completions_request_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    provider = GroqProvider("gsk-test", "llama", transport=httpx.MockTransport(handler))
    assert asyncio.run(provider.generate([{"role": "user", "content": "x"}], max_tokens=64)) == "ok"

    request = seen[0]
    assert request.url.host == "api.groq.com"
    assert request.headers["Authorization"] == "Bearer gsk-test"
    assert json.loads(request.content)["max_tokens"] == 64
    assert provider.get_provider_name() == "Groq"


def test_provider_error_propagates():
    provider = OpenAIProvider(
        "sk-test", "gpt", transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    )
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(provider.generate([{"role": "user", "content": "x"}]))


def test_service_sends_single_user_message_with_token_budget():
    seen = []
    service = LLMService(provider=AnthropicProvider("k", "m", transport=_anthropic_transport(seen, "done")))

    assert asyncio.run(service.complete("extract this")) == "done"

    body = json.loads(seen[0].content)
    assert body["messages"] == [{"role": "user", "content": "extract this"}]
    assert body["max_tokens"] == settings.LLM_MAX_TOKENS
    assert "system" not in body


def test_extractor_over_anthropic_wire_format():
    seen = []
    reply = 'Sure!\n```json\n{"name": "도미노피자", "address": "서울 마포구 양화로 160", "category": "western"}\n```'
    service = LLMService(provider=AnthropicProvider("k", "m", transport=_anthropic_transport(seen, reply)))

    candidate = asyncio.run(CaptionExtractor(llm=service).extract("홍대 맛집 🍕 도미노피자 서울 마포구 양화로 160"))

    assert candidate.name == "도미노피자"
    assert candidate.address == "서울 마포구 양화로 160"
    assert candidate.category == "western"
    assert len(seen) == 1
