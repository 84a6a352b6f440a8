"""OpenRouter-compatible chat-completions client."""
from __future__ import annotations

import os
from typing import Optional

from backend.core.providers.base import HTTPProvider, ProviderError, RequestConfig

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class LLMError(RuntimeError):
    """Raised when the language model cannot produce an answer."""


class ChatCompletionClient(HTTPProvider):
    """Send a system/user prompt pair and return the first choice's text.

    Credentials default to the ``OPENROUTER_*`` environment variables so the
    client can be built without Django settings (e.g. in scripts).
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        url: Optional[str] = None,
        app_url: Optional[str] = None,
        app_name: Optional[str] = None,
        temperature: float = 0.0,
        **kwargs,
    ) -> None:
        kwargs.setdefault("request_config", RequestConfig(timeout=30.0))
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else os.getenv("OPENROUTER_API_KEY")
        self.model = model if model is not None else os.getenv("OPENROUTER_MODEL")
        self.url = url or os.getenv("OPENROUTER_URL") or OPENROUTER_URL
        self.app_url = app_url if app_url is not None else os.getenv("OPENROUTER_APP_URL")
        self.app_name = app_name if app_name is not None else os.getenv("OPENROUTER_APP_NAME")
        self.temperature = temperature

    def complete(self, system_prompt: str, user_prompt: str, *, max_tokens: Optional[int] = None) -> str:
        if not self.api_key or not self.model:
            raise LLMError("OpenRouter credentials are not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.app_url:
            headers["HTTP-Referer"] = self.app_url
        if self.app_name:
            headers["X-Title"] = self.app_name

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        try:
            response = self._request("POST", self.url, headers=headers, json=payload)
            data = self._json(response)
        except ProviderError as exc:
            raise LLMError(f"chat completion failed: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMError("Unexpected OpenRouter response structure") from exc
        if not isinstance(content, str):
            raise LLMError("OpenRouter returned non-text content")
        return content.strip()


__all__ = ["ChatCompletionClient", "LLMError", "OPENROUTER_URL"]
