"""Command-line entry point: inflate an Anki deck with Pleco links."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from core.config import PlecoiseConfig
from core.telemetry import NullTelemetry, StdoutTelemetry, Telemetry

from .apkg import DeckSpec, convert_deck
from .dictionary import load_dictionary
from .errors import DeckError


def build_parser(config: PlecoiseConfig | None = None) -> argparse.ArgumentParser:
    config = config or PlecoiseConfig()
    parser = argparse.ArgumentParser(prog="plecoise", description="Inflate an Anki deck with Pleco links")
    parser.add_argument("-f", "--file", type=Path, required=True, help="Path to .apkg file to be inflated with Pleco links")
    parser.add_argument("-o", "--out-file", type=Path, default=config.out_file, help="Path to output .apkg file")

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--cedict",
        type=Path,
        default=config.cedict_path,
        help="CC-CEDICT export (plain or .gz) to take tones from instead of pypinyin",
    )
    source.add_argument(
        "--no-dictionary",
        action="store_true",
        help="Emit links without tone colouring",
    )

    parser.add_argument(
        "--field",
        dest="fields",
        type=int,
        action="append",
        metavar="N",
        help="Zero-based index of a note field to convert (repeatable; default: every field)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    config = PlecoiseConfig()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.fields and any(idx < 0 for idx in args.fields):
        parser.error("--field indices must be zero or greater")

    telemetry: Telemetry = NullTelemetry() if args.quiet else StdoutTelemetry(stream=sys.stderr)

    try:
        dictionary = load_dictionary(
            None if args.no_dictionary else config.dictionary_source,
            cedict_path=None if args.no_dictionary else args.cedict,
            telemetry=telemetry,
        )
        convert_deck(
            DeckSpec(
                deck_path=args.file,
                out_path=args.out_file,
                dictionary=dictionary,
                fields=frozenset(args.fields) if args.fields else config.fields,
                field_separator=config.field_separator,
                collection_prefix=config.collection_prefix,
                telemetry=telemetry,
            )
        )
    except (DeckError, ImportError, OSError) as exc:
        print(f"plecoise: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
