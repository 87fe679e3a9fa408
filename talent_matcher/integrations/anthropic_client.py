"""
Anthropic Messages API client.
"""

from typing import Optional

import anthropic

from .base import LanguageModelClient, LanguageModelError


class AnthropicClient(LanguageModelClient):
    """Language-model client backed by the Anthropic SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        request_timeout: float = 30.0,
    ):
        super().__init__(api_key=api_key, model=model)
        self.request_timeout = request_timeout
        self._client = None

    @property
    def name(self) -> str:
        return "Anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            self._client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=self.request_timeout,
            )
        return self._client

    def complete(
        self,
        system: str,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            raise LanguageModelError(f"Anthropic API error: {e.status_code}", e.status_code) from e
        except anthropic.APIError as e:
            raise LanguageModelError(f"Anthropic request failed: {e}") from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        if not text:
            raise LanguageModelError("Anthropic reply contained no text")

        self.logger.debug(f"Anthropic reply: {text}")
        return text
