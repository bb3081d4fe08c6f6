"""Split text into alternating Chinese and non-Chinese runs."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable

from .charclass import is_simplified_chinese


CharPredicate = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Run:
    """A maximal substring tagged as Chinese or not."""

    text: str
    chinese: bool

    def demoted(self) -> "Run":
        return replace(self, chinese=False)


def segment(text: str, *, is_chinese: CharPredicate = is_simplified_chinese) -> list[Run]:
    """Classify ``text`` left to right into maximal, alternating runs.

    Concatenating the run texts reproduces ``text`` exactly; empty input
    yields an empty list.
    """

    runs: list[Run] = []
    buffer: list[str] = []
    current: bool | None = None

    for ch in text:
        flag = is_chinese(ch)
        if flag != current and buffer:
            runs.append(Run("".join(buffer), bool(current)))
            buffer = []
        buffer.append(ch)
        current = flag

    if buffer:
        runs.append(Run("".join(buffer), bool(current)))
    return runs


def coalesce(runs: Iterable[Run]) -> list[Run]:
    """Merge neighbouring runs that share a tag."""

    merged: list[Run] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].chinese == run.chinese:
            merged[-1] = Run(merged[-1].text + run.text, run.chinese)
        else:
            merged.append(run)
    return merged


__all__ = ["CharPredicate", "Run", "coalesce", "segment"]
