# Area: Oracle
"""
poker_bot._oracle.client - Decision oracle clients
==================================================

Provides the oracle abstraction used by both decision clients.

Three implementations:
  - ChatCompletionOracle: OpenAI-compatible /v1/chat/completions over httpx
  - MockOracleClient: keyword -> canned content, for tests
  - DemoOracle: always checks and never chats, for --demo runs

Every implementation returns None instead of raising when no content
is available.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .models import ChatCompletionResponse
from .prompts import ACTION_FORMAT_MARKER, NULL_SENTINEL

logger = logging.getLogger("poker_bot.oracle.client")

# Sampling parameters sent with every request
DEFAULT_MAX_TOKENS = 2048
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.95
DEFAULT_TIMEOUT_SECONDS = 120.0

COMPLETIONS_PATH = "/v1/chat/completions"


class BaseOracleClient(ABC):
    """Abstract base for oracle clients."""

    @abstractmethod
    async def complete(self, system: str, user: str) -> Optional[str]:
        """Return the first choice's content, or None on any failure."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if client is properly configured."""
        ...

    async def aclose(self) -> None:
        """Release network resources, if any."""
        return None


class ChatCompletionOracle(BaseOracleClient):
    """OpenAI-compatible chat-completion endpoint (e.g. a local Jan server)."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        top_p: float = DEFAULT_TOP_P,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{COMPLETIONS_PATH}"

    def is_available(self) -> bool:
        return bool(self.base_url and self.model)

    def build_payload(self, system: str, user: str) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        return {
            "messages": messages,
            "model": self.model,
            "stream": False,
            "max_tokens": self.max_tokens,
            "stop": None,
            "frequency_penalty": 0,
            "presence_penalty": 0,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }

    async def complete(self, system: str, user: str) -> Optional[str]:
        try:
            response = await self._client.post(self.url, json=self.build_payload(system, user))
            response.raise_for_status()
            parsed = ChatCompletionResponse.model_validate(response.json())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Oracle request failed: {e.__class__.__name__}: {e}")
            return None
        except (ValueError, ValidationError) as e:
            logger.error(f"Oracle returned an unreadable body: {e}")
            return None

        if parsed.usage:
            logger.debug(
                f"Oracle usage: prompt={parsed.usage.prompt_tokens} "
                f"completion={parsed.usage.completion_tokens} total={parsed.usage.total_tokens}"
            )
        content = parsed.first_content()
        if content is None:
            logger.warning("Oracle returned no choices")
        return content

    async def aclose(self) -> None:
        await self._client.aclose()


class MockOracleClient(BaseOracleClient):
    """Mock client for testing."""

    def __init__(self, responses: Optional[Dict[str, Optional[str]]] = None):
        self._responses = responses or {}
        self.calls: List[Dict[str, str]] = []

    def is_available(self) -> bool:
        return True

    async def complete(self, system: str, user: str) -> Optional[str]:
        self.calls.append({"system": system, "user": user})
        prompt = f"{system}\n{user}"
        for key, response in self._responses.items():
            if key in prompt:
                return response
        return None


class DemoOracle(BaseOracleClient):
    """Oracle stand-in for demo runs: always CHECK, never chat."""

    ACTION_REPLY = '{"action": "CHECK", "reason": "demo mode"}'

    def is_available(self) -> bool:
        return True

    async def complete(self, system: str, user: str) -> Optional[str]:
        if ACTION_FORMAT_MARKER in system:
            return self.ACTION_REPLY
        return NULL_SENTINEL
