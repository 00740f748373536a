"""Editor state: current text, tone position, history and change preview."""

from __future__ import annotations

from typing import Any

from tonepicker.errors import RewriteCancelled
from tonepicker.logging_utils import get_logger
from tonepicker.prompts import PRESETS, describe_axes
from tonepicker.services.diff import DiffRun, sentence_diff
from tonepicker.services.history import EditHistory
from tonepicker.services.rewrite import CancellationToken, RewriteResult, RewriteService
from tonepicker.services.store import StateStore
from tonepicker.types import DEFAULT_AXES, Axes

logger = get_logger(__name__)

DEFAULT_TEXT = "Type your text here..."

TEXT_KEY = "tp:text"
AXES_KEY = "tp:axes"
HISTORY_KEY = "tp:history"
HISTORY_INDEX_KEY = "tp:historyIdx"


def _load_axes(raw: Any) -> Axes:
    if not isinstance(raw, dict):
        return DEFAULT_AXES
    try:
        return Axes(formal=float(raw["formal"]), friendly=float(raw["friendly"]))
    except (KeyError, TypeError, ValueError):
        logger.warning("Ignoring malformed persisted axes: %r", raw)
        return DEFAULT_AXES


def _load_index(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


class ToneSession:
    """One user's editing session.

    Values are read from ``store`` once on construction and written back on
    every change. At most one rewrite is outstanding: starting a new one
    cancels the previous, and a cancelled rewrite never reaches history.
    """

    def __init__(self, relay: RewriteService, store: StateStore) -> None:
        self._relay = relay
        self._store = store

        text = store.load(TEXT_KEY)
        self.text: str = text if isinstance(text, str) and text else DEFAULT_TEXT
        self.axes: Axes = _load_axes(store.load(AXES_KEY))

        snapshots = store.load(HISTORY_KEY)
        self.history = EditHistory.from_snapshots(
            snapshots if isinstance(snapshots, list) else [],
            _load_index(store.load(HISTORY_INDEX_KEY)),
            default=self.text,
        )

        self._previous_text = ""
        self._rewritten_text = ""
        self._inflight: CancellationToken | None = None

    @property
    def label(self) -> str:
        return describe_axes(self.axes)

    @property
    def busy(self) -> bool:
        return self._inflight is not None

    def set_text(self, text: str) -> None:
        self.text = text
        self._store.save(TEXT_KEY, text)

    def set_axes(self, formal: float, friendly: float) -> Axes:
        self.axes = Axes(formal=formal, friendly=friendly)
        self._store.save(AXES_KEY, self.axes.to_dict())
        return self.axes

    def apply_preset(self, name: str) -> Axes:
        """Move the knob to one of :data:`PRESETS`."""
        preset = PRESETS[name]
        return self.set_axes(preset.formal, preset.friendly)

    def undo(self) -> str:
        if self.history.can_undo:
            self.set_text(self.history.undo())
            self._save_history()
        return self.text

    def redo(self) -> str:
        if self.history.can_redo:
            self.set_text(self.history.redo())
            self._save_history()
        return self.text

    def reset(self) -> None:
        """Restore default text and axes and start a fresh history."""
        self.cancel()
        self.set_text(DEFAULT_TEXT)
        self.set_axes(DEFAULT_AXES.formal, DEFAULT_AXES.friendly)
        self.history.reset(DEFAULT_TEXT)
        self._save_history()
        self._previous_text = ""
        self._rewritten_text = ""

    def cancel(self) -> None:
        """Cancel the outstanding rewrite, if any."""
        if self._inflight is not None:
            self._inflight.cancel()
            self._inflight = None

    async def apply_tone(self) -> RewriteResult | None:
        """Rewrite the current text at the current axes.

        Returns None without calling the relay when the text is blank.
        Raises :class:`RewriteCancelled` when a later call superseded this one.
        """
        if not self.text.strip():
            return None

        self.cancel()
        token = CancellationToken()
        self._inflight = token
        previous = self.text
        try:
            result = await self._relay.rewrite(previous, self.axes, cancel_token=token)
        finally:
            if self._inflight is token:
                self._inflight = None

        if token.cancelled:
            raise RewriteCancelled("Rewrite superseded by a newer request")

        self.history.append(result.text)
        self._save_history()
        self.set_text(result.text)
        self._previous_text = previous
        self._rewritten_text = result.text
        return result

    def last_diff(self) -> list[DiffRun]:
        """Sentence diff between the text before and after the last rewrite."""
        if not self._rewritten_text:
            return []
        return sentence_diff(self._previous_text, self._rewritten_text)

    def _save_history(self) -> None:
        self._store.save(HISTORY_KEY, self.history.snapshots)
        self._store.save(HISTORY_INDEX_KEY, self.history.index)
