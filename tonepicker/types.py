"""Shared typing helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

DiffKind = Literal["equal", "added", "removed"]


def clamp01(value: float) -> float:
    """Clamp a value into the closed unit interval."""
    return max(0.0, min(1.0, value))


def snap(value: float) -> float:
    """Round an axis coordinate to two decimal places."""
    return round(value, 2)


@dataclass(frozen=True, slots=True)
class Axes:
    """Point on the formality x friendliness grid."""

    formal: float
    friendly: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "formal", snap(clamp01(float(self.formal))))
        object.__setattr__(self, "friendly", snap(clamp01(float(self.friendly))))

    def to_dict(self) -> dict[str, float]:
        return {"formal": self.formal, "friendly": self.friendly}


@dataclass(frozen=True, slots=True)
class Label:
    """Free-form tone name such as "professional"."""

    name: str


@dataclass(frozen=True, slots=True)
class Unspecified:
    """No tone information was supplied."""


ToneSpec = Union[Axes, Label, Unspecified]

DEFAULT_AXES = Axes(formal=0.6, friendly=0.5)


def tone_spec_key(tone: ToneSpec) -> dict[str, object]:
    """Return a JSON-serializable view of a tone spec for cache keys."""
    if isinstance(tone, Axes):
        return {"axes": tone.to_dict()}
    if isinstance(tone, Label):
        return {"tone": tone.name}
    return {}
