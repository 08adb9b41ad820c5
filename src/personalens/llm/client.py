"""Async text-generation clients."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic_settings import BaseSettings, SettingsConfigDict

from personalens.errors import UpstreamError


class GeminiConfig(BaseSettings):
    """Gemini connection configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.0
    llm_timeout_seconds: float = 60.0


class TextGenerator(ABC):
    """Abstract interface for "generate text from a prompt".

    Generators are used as async context managers. The default entry and exit
    hold no resources.
    """

    async def __aenter__(self) -> "TextGenerator":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a completion for a prompt.

        Args:
            prompt: Prompt text

        Returns:
            Raw response text

        Raises:
            UpstreamError: If the call fails or times out
        """
        pass


class GeminiClient(TextGenerator):
    """Async Gemini client with a per-call timeout."""

    def __init__(self, config: GeminiConfig | None = None) -> None:
        """Initialize Gemini client.

        Args:
            config: Gemini configuration (uses defaults if None)
        """
        self.config = config or GeminiConfig()
        self.client: genai.Client | None = None

    async def __aenter__(self) -> "GeminiClient":
        """Async context manager entry."""
        if not self.config.google_api_key:
            raise UpstreamError("GOOGLE_API_KEY is not configured.")
        self.client = genai.Client(api_key=self.config.google_api_key)
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        if self.client:
            await self.client.aio.aclose()
            self.client = None

    async def generate(self, prompt: str) -> str:
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.config.gemini_model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=self.config.gemini_temperature,
                    ),
                ),
                timeout=self.config.llm_timeout_seconds,
            )
        except TimeoutError as e:
            raise UpstreamError(
                f"LLM call timed out after {self.config.llm_timeout_seconds:g}s."
            ) from e
        except genai_errors.APIError as e:
            raise UpstreamError(f"LLM call failed: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"LLM transport error: {e}") from e

        return response.text or ""
