"""Linear undo/redo history of text snapshots."""

from __future__ import annotations


class EditHistory:
    """Snapshots plus a cursor.

    Appending after an undo drops every snapshot past the cursor; the redo
    branch is lost, not merged.
    """

    def __init__(self, initial: str) -> None:
        self._snapshots: list[str] = [initial]
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def snapshots(self) -> list[str]:
        return list(self._snapshots)

    @property
    def current(self) -> str:
        return self._snapshots[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)

    def append(self, state: str) -> None:
        """Discard the redo branch, then add ``state`` as the current snapshot."""
        del self._snapshots[self._index + 1 :]
        self._snapshots.append(state)
        self._index = len(self._snapshots) - 1

    def undo(self) -> str:
        """Step back one snapshot; a no-op at the first one."""
        if self.can_undo:
            self._index -= 1
        return self.current

    def redo(self) -> str:
        """Step forward one snapshot; a no-op at the last one."""
        if self.can_redo:
            self._index += 1
        return self.current

    def reset(self, initial: str) -> None:
        self._snapshots = [initial]
        self._index = 0

    @classmethod
    def from_snapshots(cls, snapshots: list[str], index: int, *, default: str) -> "EditHistory":
        """Rebuild a history from persisted values.

        An empty list becomes ``[default]`` and an out-of-range index is
        clamped, so a stale store never breaks the cursor invariant.
        """
        history = cls(default)
        clean = [item for item in snapshots if isinstance(item, str)]
        if clean:
            history._snapshots = clean
            history._index = max(0, min(int(index), len(clean) - 1))
        return history
