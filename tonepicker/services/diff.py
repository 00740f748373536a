"""Sentence-level diff used for the change preview."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from tonepicker.types import DiffKind

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.?!])\s+")


@dataclass(frozen=True, slots=True)
class DiffRun:
    """Maximal span of sentences sharing the same diff kind."""

    kind: DiffKind
    text: str


def split_sentences(text: str) -> list[str]:
    """Split text after ``.``, ``?`` or ``!`` followed by whitespace.

    Abbreviations and decimals are not special-cased, so "e.g. this" is
    split after "e.g.".
    """
    return [segment.strip() for segment in _SENTENCE_BOUNDARY.split(text or "") if segment.strip()]


def _lcs_table(old: Sequence[str], new: Sequence[str]) -> list[list[int]]:
    """``dp[i][j]`` is the LCS length of ``old[i:]`` and ``new[j:]``."""
    n, m = len(old), len(new)
    dp = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            if old[i] == new[j]:
                dp[i][j] = dp[i + 1][j + 1] + 1
            else:
                dp[i][j] = max(dp[i + 1][j], dp[i][j + 1])
    return dp


def _merge_runs(runs: list[DiffRun]) -> list[DiffRun]:
    merged: list[DiffRun] = []
    for run in runs:
        if merged and merged[-1].kind == run.kind:
            merged[-1] = DiffRun(run.kind, f"{merged[-1].text} {run.text}")
        else:
            merged.append(run)
    return merged


def align(old: Sequence[str], new: Sequence[str]) -> list[DiffRun]:
    """Align two sentence sequences into a merged edit script.

    The script keeps a longest common subsequence as ``equal`` runs. When
    both directions preserve the same LCS length the old sentence is marked
    ``removed`` first, so the output is deterministic.
    """
    dp = _lcs_table(old, new)
    n, m = len(old), len(new)
    runs: list[DiffRun] = []
    i = j = 0
    while i < n and j < m:
        if old[i] == new[j]:
            runs.append(DiffRun("equal", old[i]))
            i += 1
            j += 1
        elif dp[i + 1][j] >= dp[i][j + 1]:
            runs.append(DiffRun("removed", old[i]))
            i += 1
        else:
            runs.append(DiffRun("added", new[j]))
            j += 1
    runs.extend(DiffRun("removed", sentence) for sentence in old[i:])
    runs.extend(DiffRun("added", sentence) for sentence in new[j:])
    return _merge_runs(runs)


def sentence_diff(old_text: str, new_text: str) -> list[DiffRun]:
    """Diff two texts sentence by sentence."""
    return align(split_sentences(old_text), split_sentences(new_text))
