import logging
from app.core.config import settings
from app.core.logger import logs
from app.core.llm_providers import (
    BaseLLMProvider,
    AnthropicProvider,
    OpenAIProvider,
    MistralProvider,
    GroqProvider
)

PROVIDERS = {
    "anthropic": (AnthropicProvider, "ANTHROPIC"),
    "openai": (OpenAIProvider, "OPENAI"),
    "mistral": (MistralProvider, "MISTRAL"),
    "groq": (GroqProvider, "GROQ"),
}

class LLMService:
    """The completion service: one prompt in, the model's raw text out."""

    def __init__(self, provider: BaseLLMProvider | None = None):
        self.provider = provider or self._initialize_provider()
        logs.log(logging.INFO, f"🤖 LLM Provider initialized: {self.provider.get_provider_name()}")

    def _initialize_provider(self) -> BaseLLMProvider:
        """Initialize the selected LLM provider based on settings"""
        name = settings.LLM_PROVIDER.lower()

        if name not in PROVIDERS:
            logs.log(logging.WARNING, f"Unknown provider '{name}', defaulting to Anthropic")
            name = "anthropic"

        provider_cls, prefix = PROVIDERS[name]
        return provider_cls(
            api_key=getattr(settings, f"{prefix}_API_KEY"),
            model=getattr(settings, f"{prefix}_MODEL")
        )

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """
        Single-shot completion. No retries, no streaming: errors from the
        provider propagate to the caller.
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        return await self.provider.generate(
            messages,
            max_tokens=settings.LLM_MAX_TOKENS,
            temperature=0.0,
            timeout=settings.LLM_TIMEOUT
        )

# Singleton instance
llm_client = LLMService()
