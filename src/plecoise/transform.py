"""Field-level transform: segment, skip annotated runs, render links."""
from __future__ import annotations

from typing import AbstractSet

from core.config import FIELD_SEPARATOR

from .annotate import annotate_word
from .charclass import is_simplified_chinese
from .dictionary import PronunciationSource
from .idempotency import demote_annotated
from .segmentation import CharPredicate, segment


def plecoise(
    text: str,
    dictionary: PronunciationSource | None = None,
    *,
    is_chinese: CharPredicate = is_simplified_chinese,
) -> str:
    """Replace the hanzi in ``text`` with Pleco links.

    Applying the transform to its own output returns that output unchanged.
    """

    runs = demote_annotated(segment(text, is_chinese=is_chinese))
    return "".join(annotate_word(run.text, dictionary) if run.chinese else run.text for run in runs)


def plecoise_fields(
    flds: str,
    dictionary: PronunciationSource | None = None,
    *,
    fields: AbstractSet[int] | None = None,
    separator: str = FIELD_SEPARATOR,
    is_chinese: CharPredicate = is_simplified_chinese,
) -> str:
    """Transform each ``separator``-delimited field of a note independently.

    ``fields`` restricts conversion to the given zero-based field indices.
    Field count and order are preserved.
    """

    parts = flds.split(separator)
    return separator.join(
        plecoise(part, dictionary, is_chinese=is_chinese) if fields is None or idx in fields else part
        for idx, part in enumerate(parts)
    )


__all__ = ["plecoise", "plecoise_fields"]
