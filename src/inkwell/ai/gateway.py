"""Single-call gateway turning a topic into a generated markdown document."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

import httpx
from openai import APITimeoutError, AuthenticationError, PermissionDeniedError

from .ai_types import FailureKind, GenerationFailure, GenerationOutcome, GenerationSuccess
from .client import AIClient, ClientSettings
from .errors import TopicRequiredError
from .prompts import document_messages

LOGGER = logging.getLogger(__name__)

_AUTH_MARKERS: tuple[str, ...] = ("api key", "api_key", "authentication", "unauthorized", "invalid key")
_TIMEOUT_MARKERS: tuple[str, ...] = ("timeout", "timed out")


class CompletionBackend(Protocol):
    """Anything able to issue one chat completion and return its text."""

    async def complete(
        self,
        messages: Iterable[Mapping[str, Any]],
        *,
        temperature: float | None = ...,
        top_p: float | None = ...,
        max_tokens: int | None = ...,
    ) -> str | None:
        ...


class GenerationGateway:
    """Issues exactly one provider call per topic and classifies the result.

    Failures are returned as :class:`GenerationFailure` values; the only
    exception raised is :class:`TopicRequiredError` for a blank topic, which is
    the caller's responsibility to rule out. Nothing is retried here.
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        client: CompletionBackend | None = None,
        temperature: float = 0.7,
        top_p: float | None = 0.9,
        max_tokens: int | None = 4096,
    ) -> None:
        self._settings = settings
        self._client = client
        self._temperature = temperature
        self._top_p = top_p
        self._max_tokens = max_tokens

    @property
    def has_credentials(self) -> bool:
        return bool((self._settings.api_key or "").strip())

    async def generate(self, topic: str) -> GenerationOutcome:
        topic = (topic or "").strip()
        if not topic:
            raise TopicRequiredError()
        if not self.has_credentials:
            LOGGER.error("No API key configured; skipping generation request")
            return GenerationFailure(FailureKind.MISSING_CREDENTIALS)

        client = self._ensure_client()
        LOGGER.info("Sending generation request (model=%s)", self._settings.model)
        try:
            content = await client.complete(
                document_messages(topic),
                temperature=self._temperature,
                top_p=self._top_p,
                max_tokens=self._max_tokens,
            )
        except Exception as exc:
            failure = classify_exception(exc)
            LOGGER.error("Generation request failed (%s): %s", failure.kind.value, exc)
            return failure

        if content is None or not content.strip():
            LOGGER.error("No content generated by provider")
            return GenerationFailure(FailureKind.EMPTY_RESPONSE)

        LOGGER.info("Content generated successfully (%s chars)", len(content))
        return GenerationSuccess(content)

    async def aclose(self) -> None:
        close = getattr(self._client, "aclose", None)
        if close is not None:
            await close()

    def _ensure_client(self) -> CompletionBackend:
        if self._client is None:
            self._client = AIClient(self._settings)
        return self._client


def classify_exception(exc: BaseException) -> GenerationFailure:
    """Sort a provider exception into one of the failure kinds."""

    message = str(exc) or exc.__class__.__name__
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return GenerationFailure(FailureKind.AUTH_REJECTED, message)
    if isinstance(exc, (APITimeoutError, httpx.TimeoutException)):
        return GenerationFailure(FailureKind.UPSTREAM_TIMEOUT, message)
    lowered = message.lower()
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return GenerationFailure(FailureKind.AUTH_REJECTED, message)
    if any(marker in lowered for marker in _TIMEOUT_MARKERS):
        return GenerationFailure(FailureKind.UPSTREAM_TIMEOUT, message)
    return GenerationFailure(FailureKind.UNKNOWN, message)


__all__ = ["CompletionBackend", "GenerationGateway", "classify_exception"]
