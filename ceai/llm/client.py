"""One async ``generate()`` call over Gemini, Claude, ChatGPT and Ollama."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ceai.config import CeaiSettings
from ceai.errors import ExternalServiceError
from ceai.providers import PROVIDERS

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Running token totals for one client."""

    input_tokens: int = 0
    output_tokens: int = 0
    calls: int = 0

    def add(self, input_tokens: int | None, output_tokens: int | None) -> None:
        self.input_tokens += input_tokens or 0
        self.output_tokens += output_tokens or 0
        self.calls += 1

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMClient:
    """Text generation through the provider named in *settings*.

    Construction fails fast when a cloud provider has no API key.  Every
    provider failure (network, quota, empty reply) surfaces from
    :meth:`generate` as :class:`~ceai.errors.ExternalServiceError`.
    """

    def __init__(self, settings: CeaiSettings) -> None:
        spec = PROVIDERS.get(settings.llm_provider)
        if spec is None:
            raise ExternalServiceError(f"Unsupported LLM provider: {settings.llm_provider}")
        if spec.key_field and not getattr(settings, spec.key_field):
            raise ExternalServiceError(
                f"{spec.display_name} API key not set. Set {spec.api_key_env} in "
                f"your .env file or environment (get one at {spec.key_url})."
            )
        self.settings = settings
        self.spec = spec
        self.provider = spec.name
        self.model = settings.model_name
        self.usage = TokenUsage()
        self._sdk: Any = None  # created on first call

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send one system + user prompt pair and return the reply text."""
        if self.provider == "google":
            call = self._call_gemini
        elif self.provider == "anthropic":
            call = self._call_claude
        else:
            call = self._call_openai_compatible

        logger.debug("Calling %s (%s)", self.spec.display_name, self.model)
        try:
            text = await call(system_prompt, user_prompt)
        except ExternalServiceError:
            raise
        except Exception as exc:
            raise ExternalServiceError(
                f"{self.spec.display_name} request failed: {exc}"
            ) from exc

        if not text.strip():
            raise ExternalServiceError(f"Empty response from {self.spec.display_name}")
        logger.info(
            "%s replied with %d characters (%d tokens used so far)",
            self.spec.display_name, len(text), self.usage.total_tokens,
        )
        return text

    async def _call_gemini(self, system_prompt: str, user_prompt: str) -> str:
        from google import genai
        from google.genai import types

        if self._sdk is None:
            self._sdk = genai.Client(api_key=self.settings.google_api_key)

        response = await self._sdk.aio.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                max_output_tokens=self.settings.llm_max_tokens,
                temperature=self.settings.llm_temperature,
            ),
        )
        meta = response.usage_metadata
        if meta is not None:
            self.usage.add(meta.prompt_token_count, meta.candidates_token_count)
        return response.text or ""

    async def _call_claude(self, system_prompt: str, user_prompt: str) -> str:
        import anthropic

        if self._sdk is None:
            self._sdk = anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key)

        message = await self._sdk.messages.create(
            model=self.model,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        if message.usage is not None:
            self.usage.add(message.usage.input_tokens, message.usage.output_tokens)
        return "".join(block.text for block in message.content if block.type == "text")

    async def _call_openai_compatible(self, system_prompt: str, user_prompt: str) -> str:
        """ChatGPT, or a local Ollama server through its OpenAI-compatible API."""
        import openai

        if self._sdk is None:
            if self.provider == "local":
                # Ollama ignores the key but the SDK insists on one
                self._sdk = openai.AsyncOpenAI(base_url=self.settings.local_url, api_key="ollama")
            else:
                self._sdk = openai.AsyncOpenAI(api_key=self.settings.openai_api_key)

        completion = await self._sdk.chat.completions.create(
            model=self.model,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        if completion.usage is not None:
            self.usage.add(completion.usage.prompt_tokens, completion.usage.completion_tokens)
        return completion.choices[0].message.content or ""
