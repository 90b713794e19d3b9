"""Server-side generation flow: admission, validation, then one provider call."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Protocol

from ..ai.ai_types import GenerationFailure, GenerationOutcome, GenerationSuccess
from ..ai.errors import AdmissionRejectedError, GenerationError, TopicRequiredError, error_for_failure
from .rate_limiter import RateLimiter, normalize_identity

LOGGER = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Content generated successfully"


class Generator(Protocol):
    async def generate(self, topic: str) -> GenerationOutcome:  # pragma: no cover - protocol stub
        ...


@dataclass(slots=True)
class GenerationResponse:
    """HTTP-shaped result of one generation request."""

    status_code: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @classmethod
    def success(cls, content: str) -> "GenerationResponse":
        return cls(200, {"content": content, "message": SUCCESS_MESSAGE})

    @classmethod
    def from_error(cls, error: GenerationError) -> "GenerationResponse":
        headers: Dict[str, str] = {}
        if isinstance(error, AdmissionRejectedError) and error.retry_after is not None:
            headers["Retry-After"] = str(max(1, int(round(error.retry_after))))
        return cls(error.status_code, error.response_body(), headers)


class GenerationService:
    """Combines the rate limiter and the gateway behind a single entry point.

    Admission is checked before the topic is validated, so malformed requests
    still count toward the caller's quota. Every failure comes back as a
    :class:`GenerationResponse`; nothing raises out of :meth:`handle`.
    """

    def __init__(
        self,
        limiter: RateLimiter,
        gateway: Generator,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limiter = limiter
        self._gateway = gateway
        self._clock = clock

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    async def handle(self, topic: Any, identity: str | None) -> GenerationResponse:
        key = normalize_identity(identity)
        now = self._clock()
        if not self._limiter.admit(key, now):
            error = AdmissionRejectedError(retry_after=self._limiter.retry_after(key, now))
            return GenerationResponse.from_error(error)

        if not isinstance(topic, str) or not topic.strip():
            return GenerationResponse.from_error(TopicRequiredError())

        outcome = await self._gateway.generate(topic)
        if isinstance(outcome, GenerationSuccess):
            return GenerationResponse.success(outcome.content)
        return self._failure_response(outcome, key)

    def _failure_response(self, failure: GenerationFailure, identity: str) -> GenerationResponse:
        error = error_for_failure(failure)
        LOGGER.warning("Generation for %s failed: %s", identity, error.to_dict())
        return GenerationResponse.from_error(error)


__all__ = ["GenerationResponse", "GenerationService", "Generator", "SUCCESS_MESSAGE"]
