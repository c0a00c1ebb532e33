"""Word validation against an external dictionary service."""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"


class Verdict(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class WordValidator(ABC):
    """Abstract base class for word validators."""

    @abstractmethod
    async def validate(self, word: str) -> Verdict:
        """Accept or reject a normalized word."""
        pass

    async def validate_many(self, words: list[str]) -> dict[str, Verdict]:
        """Validate a batch of words concurrently."""
        verdicts = await asyncio.gather(*(self.validate(word) for word in words))
        return dict(zip(words, verdicts))


class DictionaryValidator(WordValidator):
    """Validator backed by a free dictionary HTTP API.

    A 200 response accepts the word, any other status rejects it. Transport failures
    (connection errors, timeouts) accept the word: availability beats strictness here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (
            base_url or os.environ.get("DICTIONARY_API_URL") or DEFAULT_DICTIONARY_URL
        ).rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, timeout=self.timeout)
        async with httpx.AsyncClient() as client:
            return await client.get(url, timeout=self.timeout)

    async def validate(self, word: str) -> Verdict:
        try:
            response = await self._get(f"{self.base_url}/{word}")
        except httpx.HTTPError as e:
            logger.warning(f"Dictionary API error for {word!r} ({type(e).__name__}): {e}; accepting")
            return Verdict.ACCEPTED

        if response.status_code == 200:
            return Verdict.ACCEPTED
        logger.info("Dictionary rejected %r (status %s)", word, response.status_code)
        return Verdict.REJECTED


class StaticValidator(WordValidator):
    """Offline validator for tests and local play.

    Accepts everything except `rejected`. With `fail=True` every lookup behaves like a
    transport failure, which still resolves to accepted.
    """

    def __init__(self, rejected: set[str] | None = None, fail: bool = False):
        self.rejected = {w.lower() for w in (rejected or set())}
        self.fail = fail
        self.calls: list[str] = []

    async def validate(self, word: str) -> Verdict:
        self.calls.append(word)
        if self.fail:
            logger.warning(f"Simulated dictionary failure for {word!r}; accepting")
            return Verdict.ACCEPTED
        return Verdict.REJECTED if word in self.rejected else Verdict.ACCEPTED


def create_validator(kind: str = "dictionary", **kwargs: Any) -> WordValidator:
    """Factory function to create word validators."""
    validators = {
        "dictionary": DictionaryValidator,
        "static": StaticValidator,
    }

    if kind not in validators:
        raise ValueError(f"Unknown validator: {kind}. Options: {list(validators.keys())}")

    return validators[kind](**kwargs)
