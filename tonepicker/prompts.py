"""Prompt templates and builders for tone rewriting."""

from __future__ import annotations

from tonepicker.logging_utils import get_logger
from tonepicker.types import Axes, Label, ToneSpec

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a precise tone rewriter for short to medium messages. "
    "Return only the rewritten text."
)

AXES_TEMPLATE = """Rewrite the user text with the following tone:
- Formality: {formality}
- Warmth: {warmth}

Rules:
- Preserve meaning and key details.
- Keep similar length.
- Return ONLY the rewritten text.

User text:
{text}"""

LABEL_TEMPLATE = "Rewrite the user text in a {label} tone. Return only the rewritten text.\n\nUser text:\n{text}"

FALLBACK_TEMPLATE = "Rewrite the text preserving meaning:\n\n{text}"

# Display presets offered next to the grid.
PRESETS: dict[str, Axes] = {
    "Formal · Warm": Axes(formal=0.9, friendly=0.6),
    "Casual · Friendly": Axes(formal=0.1, friendly=0.8),
    "Formal · Direct": Axes(formal=0.9, friendly=0.1),
    "Casual · Direct": Axes(formal=0.1, friendly=0.1),
}


def formality_qualifier(formal: float) -> str:
    """Map the formality axis to the wording used in prompts."""
    if formal < 0.33:
        return "casual"
    if formal > 0.66:
        return "very formal"
    return "neutral-professional"


def warmth_qualifier(friendly: float) -> str:
    """Map the friendliness axis to the wording used in prompts."""
    if friendly < 0.33:
        return "direct and concise"
    if friendly > 0.66:
        return "warm and friendly"
    return "balanced"


def describe_axes(axes: Axes) -> str:
    """Short label shown next to the picker, e.g. ``Formal · Friendly``.

    Uses wider bands than the prompt qualifiers so that the label only
    changes once the knob is clearly inside a region.
    """
    if axes.formal < 0.35:
        formality = "Casual"
    elif axes.formal > 0.65:
        formality = "Formal"
    else:
        formality = "Neutral"

    if axes.friendly < 0.35:
        warmth = "Direct"
    elif axes.friendly > 0.65:
        warmth = "Friendly"
    else:
        warmth = "Balanced"

    return f"{formality} · {warmth}"


def build_prompt(text: str, tone: ToneSpec) -> str:
    """Build the user instruction for the given tone selection."""
    if isinstance(tone, Axes):
        return AXES_TEMPLATE.format(
            formality=formality_qualifier(tone.formal),
            warmth=warmth_qualifier(tone.friendly),
            text=text,
        )
    if isinstance(tone, Label):
        return LABEL_TEMPLATE.format(label=tone.name, text=text)

    logger.warning("Rewrite requested without axes or tone label; using generic prompt")
    return FALLBACK_TEMPLATE.format(text=text)


def build_messages(text: str, tone: ToneSpec) -> list[dict[str, str]]:
    """Build chat messages for the downstream LLM."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(text, tone)},
    ]
