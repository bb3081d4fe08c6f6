"""Character classification for simplified Chinese text."""
from __future__ import annotations

import unicodedata
from functools import lru_cache


def _ensure_opencc():
    try:
        from opencc import OpenCC  # type: ignore

        return OpenCC
    except Exception as exc:  # pragma: no cover - exercised in user envs
        raise ImportError(
            "opencc is required for character classification; install via pip install opencc-python-reimplemented"
        ) from exc


@lru_cache(maxsize=1)
def _t2s():
    OpenCC = _ensure_opencc()
    return OpenCC("t2s")


def is_cjk_ideograph(ch: str) -> bool:
    # Covers the base block, the compatibility block and every extension.
    return len(ch) == 1 and unicodedata.name(ch, "").startswith(("CJK UNIFIED IDEOGRAPH", "CJK COMPATIBILITY IDEOGRAPH"))


@lru_cache(maxsize=65536)
def is_simplified_chinese(ch: str) -> bool:
    """Return True when ``ch`` is a Han character written in simplified script.

    Characters shared by both scripts count as simplified; traditional-only
    forms (those OpenCC rewrites under ``t2s``) do not.
    """

    if not is_cjk_ideograph(ch):
        return False
    return _t2s().convert(ch) == ch


__all__ = ["is_cjk_ideograph", "is_simplified_chinese"]
