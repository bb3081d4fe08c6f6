"""Pronunciation dictionaries mapping Chinese words to tone data.

Two sources are supported: a CC-CEDICT export loaded into an immutable
:class:`Dictionary`, and :class:`PypinyinDictionary`, a read-only view over the
phrase and character data bundled with pypinyin.
"""
from __future__ import annotations

import gzip
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Protocol, Sequence

from core.telemetry import NullTelemetry, Telemetry

from .errors import DeckError


CEDICT_LINE_RE = re.compile(
    r"^(?P<trad>\S+)\s+(?P<simp>\S+)\s+\[(?P<pinyin>[^\]]*)\]\s+/(?P<defs>.*)/\s*$"
)
TONE_RE = re.compile(r"[^\d\s]([1-5])$")


def tone_of(syllable: str) -> int | None:
    """Return the tone class of a numbered pinyin syllable (``hao3`` -> 3)."""

    match = TONE_RE.search(syllable.strip())
    return int(match.group(1)) if match else None


@dataclass(frozen=True, slots=True)
class PronunciationEntry:
    """One dictionary sense of a word: a syllable and tone per character."""

    pinyin: tuple[str, ...]
    tones: tuple[int | None, ...]
    definitions: tuple[str, ...] = ()

    @classmethod
    def from_syllables(cls, syllables: Iterable[str], definitions: Iterable[str] = ()) -> "PronunciationEntry":
        pinyin = tuple(syllables)
        return cls(pinyin=pinyin, tones=tuple(tone_of(s) for s in pinyin), definitions=tuple(definitions))

    def tone_at(self, index: int) -> int | None:
        if 0 <= index < len(self.tones):
            return self.tones[index]
        return None


class PronunciationSource(Protocol):
    """Anything that can look up pronunciation entries for a whole word."""

    def lookup(self, word: str) -> Sequence[PronunciationEntry]:
        """Return the entries for ``word`` in preference order, or an empty sequence."""


class Dictionary(Mapping):
    """Immutable word -> entries mapping.

    Every stored word has at least one entry; lookups of absent words return
    an empty tuple.
    """

    def __init__(self, entries: Mapping[str, Iterable[PronunciationEntry]] | None = None) -> None:
        frozen: dict[str, tuple[PronunciationEntry, ...]] = {}
        for word, senses in (entries or {}).items():
            senses = tuple(senses)
            if word and senses:
                frozen[word] = senses
        self._entries = MappingProxyType(frozen)

    def __getitem__(self, word: str) -> tuple[PronunciationEntry, ...]:
        return self._entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} words)"

    def lookup(self, word: str) -> tuple[PronunciationEntry, ...]:
        return self._entries.get(word, ())


EMPTY_DICTIONARY = Dictionary()


def parse_cedict(lines: Iterable[str]) -> Dictionary:
    """Build a :class:`Dictionary` from CC-CEDICT lines keyed by simplified headword.

    Comment lines and lines that do not follow the CEDICT layout are skipped.
    Entries for a repeated headword keep their file order.
    """

    collected: dict[str, list[PronunciationEntry]] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = CEDICT_LINE_RE.match(line)
        if not match:
            continue
        definitions = [d.strip() for d in match.group("defs").split("/") if d.strip()]
        entry = PronunciationEntry.from_syllables(match.group("pinyin").split(), definitions)
        collected.setdefault(match.group("simp"), []).append(entry)
    return Dictionary(collected)


def load_cedict(path: Path, *, telemetry: Telemetry | None = None, op_id: str | None = None) -> Dictionary:
    """Load a CC-CEDICT export (plain text or ``.gz``); unreadable files raise :class:`DeckError`."""

    telemetry = telemetry or NullTelemetry()
    op_id = op_id or "dictionary"
    path = Path(path)
    opener = gzip.open if path.suffix == ".gz" else open
    try:
        with opener(path, "rt", encoding="utf-8") as handle:
            dictionary = parse_cedict(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise DeckError(f"Cannot read dictionary {path}: {exc}") from exc
    telemetry.event(op_id, "info", "Loaded CC-CEDICT dictionary", {"path": str(path), "words": len(dictionary)})
    return dictionary


def _ensure_pypinyin():
    try:
        from pypinyin import Style, pinyin  # type: ignore

        return Style, pinyin
    except Exception as exc:  # pragma: no cover - exercised in user envs
        raise ImportError("pypinyin is required for the default dictionary; install via pip install pypinyin") from exc


class PypinyinDictionary:
    """Entries derived from pypinyin's bundled data.

    Entry ``k`` takes the ``k``-th reading of every character (or its first
    reading when it has fewer), so entry 0 is pypinyin's preferred reading of
    the word in context.
    """

    def __init__(self) -> None:
        self._style, self._pinyin = _ensure_pypinyin()

    def __repr__(self) -> str:
        return "PypinyinDictionary()"

    def _readings(self, word: str) -> list[list[str]]:
        return self._pinyin(
            word,
            style=self._style.TONE3,
            heteronym=True,
            neutral_tone_with_five=True,
            errors="default",
        )

    def lookup(self, word: str) -> tuple[PronunciationEntry, ...]:
        if not word:
            return ()
        readings = self._readings(word)
        if len(readings) != len(word):
            # unknown characters are grouped by pypinyin; fall back to one call per character
            readings = [self._readings(ch)[0] for ch in word]

        readings = [r or [""] for r in readings]
        if not any(tone_of(s) for r in readings for s in r):
            return ()

        count = max(len(r) for r in readings)
        return tuple(
            PronunciationEntry.from_syllables(r[k] if k < len(r) else r[0] for r in readings) for k in range(count)
        )


def load_dictionary(
    source: str | None,
    *,
    cedict_path: Path | None = None,
    telemetry: Telemetry | None = None,
    op_id: str | None = None,
) -> PronunciationSource:
    """Construct the dictionary a conversion run will share across all fields.

    ``source`` is ``"pypinyin"``, ``"cedict"`` or ``None``/``"none"`` for the
    untoned rendering. A ``cedict_path`` always selects CC-CEDICT.
    """

    telemetry = telemetry or NullTelemetry()
    op_id = op_id or "dictionary"

    if cedict_path is not None:
        return load_cedict(cedict_path, telemetry=telemetry, op_id=op_id)

    name = (source or "none").lower()
    if name == "none":
        telemetry.event(op_id, "info", "No dictionary; links are rendered without tones")
        return EMPTY_DICTIONARY
    if name == "pypinyin":
        telemetry.event(op_id, "info", "Using pypinyin pronunciation data")
        return PypinyinDictionary()
    if name == "cedict":
        raise ValueError("The cedict dictionary source requires a cedict_path")
    raise ValueError(f"Unknown dictionary source {source!r}")


__all__ = [
    "CEDICT_LINE_RE",
    "Dictionary",
    "EMPTY_DICTIONARY",
    "PronunciationEntry",
    "PronunciationSource",
    "PypinyinDictionary",
    "load_cedict",
    "load_dictionary",
    "parse_cedict",
    "tone_of",
]
