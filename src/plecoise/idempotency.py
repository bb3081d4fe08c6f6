"""Recognise Chinese runs that already sit inside generated Pleco markup.

The annotator always emits one of :data:`ANNOTATION_SIGNATURES` directly after
a Chinese character it has rendered, so a Chinese run followed by one of them
has been annotated before and must be left alone.
"""
from __future__ import annotations

from typing import AbstractSet, Sequence

from .segmentation import Run, coalesce


ANNOTATION_SIGNATURES: frozenset[str] = frozenset(
    {
        # end of the link wrapper (untoned rendering)
        "</a>",
        # end of the lookup query inside href
        '" style',
        # end of a tone fragment
        "</span>",
        # untoned character followed by a toned one in the same link
        '<span class="tone',
    }
)


def is_annotated(run: Run, following: Run | None, signatures: AbstractSet[str] = ANNOTATION_SIGNATURES) -> bool:
    if not run.chinese or following is None or following.chinese:
        return False
    return following.text.startswith(tuple(signatures))


def demote_annotated(
    runs: Sequence[Run],
    *,
    signatures: AbstractSet[str] = ANNOTATION_SIGNATURES,
) -> list[Run]:
    """Flip already-annotated Chinese runs to plain runs.

    Decisions are taken against the input sequence; the result is re-merged
    so neighbouring plain runs become one run again.
    """

    demoted: list[Run] = []
    for idx, run in enumerate(runs):
        following = runs[idx + 1] if idx + 1 < len(runs) else None
        demoted.append(run.demoted() if is_annotated(run, following, signatures) else run)
    return coalesce(demoted)


__all__ = ["ANNOTATION_SIGNATURES", "demote_annotated", "is_annotated"]
