"""Configuration defaults for deck conversion."""
from __future__ import annotations

import os

from dataclasses import dataclass, field
from pathlib import Path


FIELD_SEPARATOR = "\x1f"
COLLECTION_PREFIX = "collection"
PLECO_LOOKUP_URL = "plecoapi://x-callback-url/s?q="
DEFAULT_OUT_FILE = "out.apkg"
DEFAULT_DICTIONARY_SOURCE = "pypinyin"


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class PlecoiseConfig:
    """Runtime configuration for a deck conversion run."""

    # ``None`` falls back to ``dictionary_source``; a path always means CC-CEDICT.
    cedict_path: Path | None = field(default_factory=lambda: _env_path("PLECOISE_CEDICT_PATH"))
    out_file: Path = field(default_factory=lambda: Path(os.getenv("PLECOISE_OUT_FILE") or DEFAULT_OUT_FILE))
    dictionary_source: str = DEFAULT_DICTIONARY_SOURCE
    # Sub-field indices to convert; ``None`` converts every field of every note.
    fields: frozenset[int] | None = None
    field_separator: str = FIELD_SEPARATOR
    collection_prefix: str = COLLECTION_PREFIX
