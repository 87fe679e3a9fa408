"""
Base class for language-model providers.

Rule-based paths never touch this boundary; only the AI-assisted
classifier and scorer need a client.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging


class LanguageModelClient(ABC):
    """Abstract base class for chat-completion style providers."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model or self.default_model
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when none is configured."""
        pass

    @abstractmethod
    def complete(
        self,
        system: str,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        """
        Send one system + user exchange and return the reply text.

        Args:
            system: System instructions
            prompt: User message
            max_tokens: Reply length cap
            temperature: Sampling temperature

        Returns:
            Raw reply text

        Raises:
            LanguageModelError: On transport failures, non-2xx responses or
                replies without text
        """
        pass

    def is_available(self) -> bool:
        """Check if the provider is configured with credentials."""
        return bool(self.api_key)


class LanguageModelError(Exception):
    """Transport or protocol failure talking to a language model."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_credit_limit(self) -> bool:
        """Payment or quota responses, which retrying will not fix."""
        return self.status_code in (402, 429)
