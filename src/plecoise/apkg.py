"""Convert every note of an Anki ``.apkg`` deck.

The deck is a zip archive; members whose name starts with ``collection`` are
SQLite databases holding a ``notes`` table whose ``flds`` column joins the
note's fields with ``\\x1f``. Conversion is all-or-nothing: any failure aborts
before the output path is touched.
"""
from __future__ import annotations

import os
import sqlite3
import tempfile
import time
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Any

from core.config import COLLECTION_PREFIX, FIELD_SEPARATOR
from core.telemetry import NullTelemetry, Telemetry

from .dictionary import PronunciationSource
from .errors import DeckError
from .transform import plecoise_fields


SQLITE_HEADER = b"SQLite format 3\x00"
SELECT_NOTES = "SELECT id, flds FROM notes ORDER BY id"
UPDATE_NOTE = "UPDATE notes SET flds = ? WHERE id = ?"


@dataclass(slots=True)
class DeckSpec:
    """Specification for converting one deck."""

    deck_path: Path
    out_path: Path
    dictionary: PronunciationSource | None = None
    fields: AbstractSet[int] | None = None
    field_separator: str = FIELD_SEPARATOR
    collection_prefix: str = COLLECTION_PREFIX
    telemetry: Telemetry | None = None
    op_id: str | None = None


@dataclass(slots=True)
class CollectionResult:
    name: str
    rows: int = 0
    updated: int = 0
    note_ids: list[int] = field(default_factory=list)


def extract_deck(deck_path: Path, dest: Path) -> list[tuple[str, Path]]:
    """Unpack ``deck_path`` into ``dest``; return (member name, path) in archive order."""

    try:
        with zipfile.ZipFile(deck_path) as archive:
            return [(info.filename, Path(archive.extract(info, dest))) for info in archive.infolist()]
    except (OSError, zipfile.BadZipFile) as exc:
        raise DeckError(f"Cannot read deck {deck_path}: {exc}") from exc


def collection_members(members: list[tuple[str, Path]], prefix: str = COLLECTION_PREFIX) -> list[tuple[str, Path]]:
    return [(name, path) for name, path in members if name.startswith(prefix)]


def _check_sqlite(name: str, path: Path) -> None:
    with path.open("rb") as handle:
        header = handle.read(len(SQLITE_HEADER))
    if header != SQLITE_HEADER:
        raise DeckError(
            f"{name} is not a SQLite collection (compressed .anki21b exports are not supported)"
        )


def convert_collection(
    name: str,
    db_path: Path,
    *,
    dictionary: PronunciationSource | None = None,
    fields: AbstractSet[int] | None = None,
    separator: str = FIELD_SEPARATOR,
) -> CollectionResult:
    """Rewrite the ``flds`` column of every note in one transaction."""

    _check_sqlite(name, db_path)
    result = CollectionResult(name=name)
    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as exc:
        raise DeckError(f"Cannot open {name}: {exc}") from exc

    try:
        rows = conn.execute(SELECT_NOTES).fetchall()
        updates: list[tuple[str, int]] = []
        for note_id, flds in rows:
            new_flds = plecoise_fields(flds, dictionary, fields=fields, separator=separator)
            if new_flds != flds:
                updates.append((new_flds, note_id))
        with conn:
            conn.executemany(UPDATE_NOTE, updates)
    except sqlite3.Error as exc:
        raise DeckError(f"Cannot convert notes in {name}: {exc}") from exc
    finally:
        conn.close()

    result.rows = len(rows)
    result.updated = len(updates)
    result.note_ids = [note_id for _, note_id in updates]
    return result


def repack_deck(members: list[tuple[str, Path]], out_path: Path) -> None:
    """Write ``members`` to ``out_path``, replacing it only once the archive is complete."""

    out_path = Path(out_path)
    part_path = out_path.with_name(out_path.name + ".part")
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(part_path, "w", zipfile.ZIP_DEFLATED) as archive:
            for name, path in members:
                archive.write(path, arcname=name)
        os.replace(part_path, out_path)
    except OSError as exc:
        part_path.unlink(missing_ok=True)
        raise DeckError(f"Cannot write deck {out_path}: {exc}") from exc


def convert_deck(spec: DeckSpec) -> dict[str, Any]:
    """Unpack, convert every collection, and repack the deck."""

    telemetry = spec.telemetry or NullTelemetry()
    op_id = spec.op_id or "deck"
    start = time.monotonic()

    with tempfile.TemporaryDirectory(prefix="plecoise-") as tmp:
        members = extract_deck(spec.deck_path, Path(tmp))
        telemetry.event(op_id, "info", "Extracted deck", {"path": str(spec.deck_path), "members": len(members)})

        collections = collection_members(members, spec.collection_prefix)
        if not collections:
            raise DeckError(f"No {spec.collection_prefix}* member found in {spec.deck_path}")

        results: list[CollectionResult] = []
        for name, path in collections:
            result = convert_collection(
                name,
                path,
                dictionary=spec.dictionary,
                fields=spec.fields,
                separator=spec.field_separator,
            )
            telemetry.event(
                op_id, "info", f"Converted {name}", {"rows": result.rows, "updated": result.updated}
            )
            results.append(result)
            telemetry.heartbeat(op_id, time.monotonic() - start, name)

        repack_deck(members, spec.out_path)
        telemetry.event(op_id, "info", "Wrote deck", {"path": str(spec.out_path)})

    return {
        "out_path": str(spec.out_path),
        "collections": [
            {"name": r.name, "rows": r.rows, "updated": r.updated, "note_ids": r.note_ids} for r in results
        ],
    }


__all__ = [
    "CollectionResult",
    "DeckError",
    "DeckSpec",
    "collection_members",
    "convert_collection",
    "convert_deck",
    "extract_deck",
    "repack_deck",
]
