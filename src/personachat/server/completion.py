"""Chat-completion provider client.

Talks to an OpenAI-compatible ``/chat/completions`` endpoint (DeepSeek by
default). Failures surface as CompletionError; the chat service turns them
into canned replies.
"""

from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger

from ..config import Settings
from ..core.exceptions import CompletionError


def build_system_prompt(name: str, personality: Optional[str], description: Optional[str]) -> str:
    """System message establishing the persona."""
    return f"{personality or ''} Your name is {name}. {description or ''}".strip()


class CompletionClient:
    """
    Minimal completion client.

    Args:
        api_key: Bearer credential for the provider
        url: Full chat-completions endpoint URL
        model: Model identifier
        max_tokens: Output length bound
        temperature: Sampling temperature
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests)
    """

    def __init__(
        self,
        api_key: str,
        url: str = "https://api.deepseek.com/chat/completions",
        model: str = "deepseek-chat",
        max_tokens: int = 200,
        temperature: float = 0.8,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Optional["CompletionClient"]:
        """Client for the configured provider, or None when no API key is set."""
        if not settings.DEEPSEEK_API_KEY:
            return None
        return cls(
            api_key=settings.DEEPSEEK_API_KEY,
            url=settings.DEEPSEEK_API_URL,
            model=settings.DEEPSEEK_MODEL,
            max_tokens=settings.COMPLETION_MAX_TOKENS,
            temperature=settings.COMPLETION_TEMPERATURE,
            timeout=settings.COMPLETION_TIMEOUT,
            transport=transport,
        )

    def build_payload(self, system_prompt: str, user_text: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def complete(self, system_prompt: str, user_text: str) -> str:
        """Return the provider's reply text.

        Raises:
            CompletionError: transport failure, non-2xx status or malformed body
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(system_prompt, user_text)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise CompletionError(self.url, f"{type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            logger.debug(f"Completion provider body: {response.text[:200]}")
            raise CompletionError(self.url, "non-success status", status_code=response.status_code)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionError(self.url, f"malformed response: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise CompletionError(self.url, "empty completion")
        return content
