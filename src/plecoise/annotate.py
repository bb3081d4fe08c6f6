"""Render Chinese runs as tone-coloured Pleco lookup links."""
from __future__ import annotations

from typing import Sequence

from core.config import PLECO_LOOKUP_URL

from .dictionary import PronunciationEntry, PronunciationSource


LINK_TEMPLATE = '<a href="{url}{query}" style="text-decoration:none">{inner}</a>'
TONE_TEMPLATE = '<span class="tone{tone}">{char}</span>'


def tone_fragment(char: str, tone: int | None) -> str:
    if tone is None:
        return char
    return TONE_TEMPLATE.format(tone=tone, char=char)


def render_word(word: str, entries: Sequence[PronunciationEntry] = ()) -> str:
    """Wrap ``word`` in a lookup link, colouring each character by the first entry.

    Characters without tone data (or every character, when there are no
    entries) are emitted bare. The query carries the raw word.
    """

    entry = entries[0] if entries else None
    inner = "".join(
        tone_fragment(char, entry.tone_at(idx) if entry else None) for idx, char in enumerate(word)
    )
    return LINK_TEMPLATE.format(url=PLECO_LOOKUP_URL, query=word, inner=inner)


def annotate_word(word: str, dictionary: PronunciationSource | None = None) -> str:
    entries = dictionary.lookup(word) if dictionary is not None else ()
    return render_word(word, entries)


__all__ = ["LINK_TEMPLATE", "TONE_TEMPLATE", "annotate_word", "render_word", "tone_fragment"]
