"""Shared test helpers and stub classes.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from inkwell.ai.ai_types import GenerationOutcome


class FakeClock:
    """Manually advanced clock standing in for ``time.monotonic``."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCompletionClient:
    """Records completion calls and replays a canned reply or error."""

    def __init__(self, reply: str | None = "# Topic\n\nBody", *, error: BaseException | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete(self, messages: Iterable[Mapping[str, Any]], **kwargs: Any) -> str | None:
        self.calls.append({"messages": list(messages), **kwargs})
        if self.error is not None:
            raise self.error
        return self.reply


class StubGateway:
    """Gateway stub returning a fixed outcome and counting topics."""

    def __init__(self, outcome: GenerationOutcome) -> None:
        self.outcome = outcome
        self.topics: list[str] = []

    async def generate(self, topic: str) -> GenerationOutcome:
        self.topics.append(topic)
        return self.outcome
