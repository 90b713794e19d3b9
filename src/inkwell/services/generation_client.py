"""HTTP client the editor uses to call the ``/generate`` endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

import httpx

from .generation import GenerationResponse

LOGGER = logging.getLogger(__name__)

_GENERATE_PATH = "/generate"
_UNREACHABLE_STATUS = 502


class GenerationClient:
    """Posts a topic to the generation endpoint and decodes the JSON reply.

    Transport failures are folded into a :class:`GenerationResponse` so the
    editor can report them like any other failed generation.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            headers=dict(headers) if headers else None,
            timeout=timeout,
        )

    async def request(self, topic: str) -> GenerationResponse:
        try:
            response = await self._client.post(_GENERATE_PATH, json={"topic": topic})
        except httpx.HTTPError as exc:
            LOGGER.error("Generation request could not be delivered: %s", exc)
            return GenerationResponse(
                _UNREACHABLE_STATUS, {"error": "Unable to reach the generation service"}
            )
        return GenerationResponse(response.status_code, self._decode(response), dict(response.headers))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            LOGGER.warning("Generation endpoint returned non-JSON body (status=%s)", response.status_code)
            return {"error": "Invalid response from generation service"}
        if not isinstance(payload, dict):
            return {"error": "Invalid response from generation service"}
        return payload


__all__ = ["GenerationClient"]
