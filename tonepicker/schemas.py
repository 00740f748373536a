"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from tonepicker.types import Axes, DiffKind, Label, ToneSpec, Unspecified


class HealthResponse(BaseModel):
    """Response model for /health."""

    ok: Literal[True] = True


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    ok: Literal[False] = False
    error: str


class AxesPayload(BaseModel):
    """Grid position; a missing coordinate disables the axes."""

    formal: float | None = Field(default=None, description="Formality, 0 (casual) to 1 (formal).")
    friendly: float | None = Field(default=None, description="Friendliness, 0 (direct) to 1 (warm).")

    @field_validator("formal", "friendly", mode="before")
    @classmethod
    def drop_non_numbers(cls, value: Any) -> float | None:
        """Treat anything other than a JSON number as a missing coordinate."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value


class ToneRequest(BaseModel):
    """Request payload for /api/tone."""

    text: str = Field(..., description="Original text to rewrite.")
    axes: AxesPayload | None = Field(default=None, description="Position on the tone grid.")
    tone: str | None = Field(
        default=None,
        description="Tone label used when no complete axes are given.",
    )

    @field_validator("text")
    @classmethod
    def require_text(cls, value: str) -> str:
        """Ensure text contains non-whitespace characters."""
        if not value.strip():
            raise ValueError("Missing or empty `text`")
        return value

    def to_tone_spec(self) -> ToneSpec:
        """Axes win over the label; neither yields :class:`Unspecified`."""
        if self.axes is not None and self.axes.formal is not None and self.axes.friendly is not None:
            return Axes(formal=self.axes.formal, friendly=self.axes.friendly)
        if self.tone:
            return Label(self.tone)
        return Unspecified()


class ToneResponse(BaseModel):
    """Response payload for a successful rewrite."""

    ok: Literal[True] = True
    text: str = Field(..., description="Rewritten text produced by the LLM.")
    cached: bool


class DiffRequest(BaseModel):
    """Request payload for /api/diff."""

    old_text: str = ""
    new_text: str = ""


class DiffRunModel(BaseModel):
    """One run of an edit script."""

    kind: DiffKind
    text: str


class DiffResponse(BaseModel):
    """Sentence-level edit script between two texts."""

    ok: Literal[True] = True
    runs: list[DiffRunModel]
