"""AI client, prompt template, and generation gateway."""

from .ai_types import FailureKind, GenerationFailure, GenerationOutcome, GenerationSuccess
from .client import AIClient, ClientSettings
from .gateway import GenerationGateway

__all__ = [
    "AIClient",
    "ClientSettings",
    "FailureKind",
    "GenerationFailure",
    "GenerationGateway",
    "GenerationOutcome",
    "GenerationSuccess",
]
