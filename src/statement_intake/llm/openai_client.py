"""OpenAI LLM client, direct or through an Azure OpenAI deployment."""
from __future__ import annotations

import asyncio
import time

import openai
import structlog

from .base import LLMClient, LLMResponse

logger = structlog.get_logger(__name__)

MAX_RETRIES = 3
RETRY_DELAYS = [1.0, 2.0, 4.0]

RETRYABLE_EXCEPTIONS = (
    openai.RateLimitError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


class OpenAIClient(LLMClient):
    """LLM client for GPT models.

    Talks to api.openai.com unless ``azure_endpoint`` is given, in which case
    ``model`` is the Azure deployment name.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        azure_endpoint: str = "",
        api_version: str = "2024-06-01",
        timeout: int = 120,
    ):
        if not api_key.strip():
            raise ValueError("An OpenAI API key must be set to extract statement data")

        self._model = model
        self._provider = "azure_openai" if azure_endpoint else "openai"

        if azure_endpoint:
            self._client = openai.AsyncAzureOpenAI(
                api_key=api_key,
                azure_endpoint=azure_endpoint,
                api_version=api_version,
                timeout=float(timeout),
            )
        else:
            self._client = openai.AsyncOpenAI(api_key=api_key, timeout=float(timeout))

    async def complete_text(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.0,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return await self._call_with_retry(messages, temperature, max_tokens, json_mode)

    async def complete_vision(
        self,
        system_prompt: str,
        user_prompt: str,
        images: list[str],
        *,
        temperature: float = 0.0,
        max_tokens: int = 8192,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Send the rendered pages as images followed by the text prompt."""
        user_content: list[dict] = [
            {
                "type": "image_url",
                "image_url": {"url": f"data:image/png;base64,{b64}", "detail": "high"},
            }
            for b64 in images
        ]
        user_content.append({"type": "text", "text": user_prompt})

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        return await self._call_with_retry(messages, temperature, max_tokens, json_mode)

    def get_model_name(self) -> str:
        return f"{self._model} ({self._provider})"

    async def _call_with_retry(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        json_mode: bool,
    ) -> LLMResponse:
        """Call the Chat Completions API with exponential backoff retries."""
        kwargs: dict = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        last_exception: Exception | None = None
        for attempt in range(MAX_RETRIES + 1):
            try:
                start = time.monotonic()
                response = await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    **kwargs,
                )
                elapsed_ms = int((time.monotonic() - start) * 1000)

                choice = response.choices[0]
                usage = response.usage
                return LLMResponse(
                    content=choice.message.content or "",
                    model=response.model or self._model,
                    input_tokens=usage.prompt_tokens if usage else 0,
                    output_tokens=usage.completion_tokens if usage else 0,
                    finish_reason=choice.finish_reason or "",
                    latency_ms=elapsed_ms,
                )

            except RETRYABLE_EXCEPTIONS as exc:
                last_exception = exc
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[attempt]
                    logger.warning(
                        "openai_api_retry",
                        attempt=attempt + 1,
                        delay=delay,
                        error=str(exc),
                        model=self._model,
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(
                        "openai_api_exhausted_retries",
                        attempts=MAX_RETRIES + 1,
                        error=str(exc),
                        model=self._model,
                    )

        raise last_exception  # type: ignore[misc]
