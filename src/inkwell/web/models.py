"""Pydantic models for the generation API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request body for ``POST /generate``."""

    topic: Optional[str] = Field(None, description="Subject of the document to generate")


class GenerateResponse(BaseModel):
    content: str
    message: str = "Content generated successfully"


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
