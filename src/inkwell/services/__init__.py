"""Service layer helpers (rate limiting, generation flow, settings)."""

from .generation import GenerationResponse, GenerationService
from .rate_limiter import InMemoryRateWindowStore, RateLimiter, RateWindowStore

__all__ = [
    "GenerationResponse",
    "GenerationService",
    "InMemoryRateWindowStore",
    "RateLimiter",
    "RateWindowStore",
]
