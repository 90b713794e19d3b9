"""Shared result types for the generation gateway."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FailureKind(str, Enum):
    """Classification of a failed generation call."""

    MISSING_CREDENTIALS = "missing_credentials"
    AUTH_REJECTED = "auth_rejected"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class GenerationSuccess:
    """Generated markdown returned by the provider."""

    content: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class GenerationFailure:
    """Classified failure; ``message`` carries the upstream detail when known."""

    kind: FailureKind
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


GenerationOutcome = Union[GenerationSuccess, GenerationFailure]

__all__ = ["FailureKind", "GenerationSuccess", "GenerationFailure", "GenerationOutcome"]
