"""
LLM Provider Implementations
Every provider takes OpenAI-style role-tagged messages plus a token budget
and returns the model's raw text.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from app.core.logger import logs

class BaseLLMProvider(ABC):
    """Base class for all LLM providers"""

    def __init__(self, api_key: str, model: str, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.model = model
        # Tests swap in an httpx.MockTransport here
        self.transport = transport

    @abstractmethod
    async def generate(
        self,
        messages: list,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> str:
        """Generate a response from the LLM"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider"""
        pass

    async def _post(self, url: str, payload: dict, headers: dict, timeout: float) -> dict:
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(url, json=payload, headers=headers, timeout=timeout)
                response.raise_for_status()
                return response.json()
            except Exception as e:
                logs.log(logging.ERROR, f"{self.get_provider_name()} API error: {str(e)}")
                raise


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude Provider (Messages API)"""

    base_url = "https://api.anthropic.com/v1/messages"

    async def generate(
        self,
        messages: list,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> str:
        # The Messages API takes the system prompt as a top-level field
        system_message = None
        converted_messages = []

        for msg in messages:
            if msg["role"] == "system":
                system_message = msg["content"]
            else:
                converted_messages.append({"role": msg["role"], "content": msg["content"]})

        payload = {
            "model": self.model,
            "messages": converted_messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if system_message:
            payload["system"] = system_message

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "Content-Type": "application/json",
        }

        data = await self._post(self.base_url, payload, headers, timeout)
        # Only text blocks carry the answer
        return "".join(
            block.get("text", "") for block in data["content"] if block.get("type") == "text"
        ).strip()

    def get_provider_name(self) -> str:
        return "Anthropic Claude"


class ChatCompletionsProvider(BaseLLMProvider):
    """Any provider speaking the OpenAI chat-completions wire format."""

    base_url = "https://api.openai.com/v1/chat/completions"
    provider_name = "OpenAI"

    async def generate(
        self,
        messages: list,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        data = await self._post(self.base_url, payload, headers, timeout)
        return (data["choices"][0]["message"]["content"] or "").strip()

    def get_provider_name(self) -> str:
        return self.provider_name


class OpenAIProvider(ChatCompletionsProvider):
    pass


class MistralProvider(ChatCompletionsProvider):
    base_url = "https://api.mistral.ai/v1/chat/completions"
    provider_name = "Mistral AI"


class GroqProvider(ChatCompletionsProvider):
    base_url = "https://api.groq.com/openai/v1/chat/completions"
    provider_name = "Groq"
