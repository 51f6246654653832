"""
Client for the external text-completion service (OpenAI chat completions).

One round trip per call, no retry and no caching.
"""

import time
from typing import Optional

import openai
from openai import OpenAI
from loguru import logger

from EventHub.config import settings
from EventHub.errors import UpstreamUnavailableError


class CompletionClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT
        self._api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self._client = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self._api_key:
                raise UpstreamUnavailableError("OpenAI API key not set in environment.")
            self._client = OpenAI(api_key=self._api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def complete(self, system_prompt: str, prompt: str, json_format: bool = False, operation: str = "completion") -> str:
        """Send one chat completion and return the reply text (may be empty)."""
        kwargs = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
        }
        if json_format:
            kwargs["response_format"] = {"type": "json_object"}

        started = time.perf_counter()
        try:
            response = self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.error(f"{operation}: completion call failed after {time.perf_counter() - started:.2f}s: {e}")
            raise UpstreamUnavailableError(str(e)) from e
        logger.info(f"{operation}: model={self.model} took {time.perf_counter() - started:.2f}s")

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


_default_client: Optional[CompletionClient] = None


def get_completion_client() -> CompletionClient:
    """FastAPI dependency; tests override it with a fake client."""
    global _default_client
    if _default_client is None:
        _default_client = CompletionClient()
    return _default_client
