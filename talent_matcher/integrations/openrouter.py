"""
OpenRouter integration.

OpenRouter exposes an OpenAI-compatible chat completions endpoint and routes
the request to a model of its choosing when the model is ``openrouter/auto``.
"""

from typing import Optional

import requests

from .base import LanguageModelClient, LanguageModelError


class OpenRouterClient(LanguageModelClient):
    """Language-model client for the OpenRouter chat completions API."""

    API_URL = "https://openrouter.ai/api/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        request_timeout: float = 30.0,
        referer: str = "http://localhost",
        app_title: str = "Talent Matcher",
    ):
        super().__init__(api_key=api_key, model=model)
        self.base_url = (base_url or self.API_URL).rstrip("/")
        self.request_timeout = request_timeout
        self.referer = referer
        self.app_title = app_title

    @property
    def name(self) -> str:
        return "OpenRouter"

    @property
    def default_model(self) -> str:
        return "openrouter/auto"

    def complete(
        self,
        system: str,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,  # Required by OpenRouter
            "X-Title": self.app_title,
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers=headers,
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as e:
            raise LanguageModelError(f"OpenRouter request failed: {e}") from e

        if response.status_code != 200:
            self.logger.error(f"OpenRouter API error: {response.status_code}")
            raise LanguageModelError(
                f"OpenRouter API error: {response.status_code}",
                response.status_code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LanguageModelError(f"Unexpected OpenRouter response shape: {e}") from e

        if not content:
            raise LanguageModelError("OpenRouter reply contained no text")

        self.logger.debug(f"OpenRouter reply: {content}")
        return content
