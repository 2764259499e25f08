# -*- coding: utf-8 -*-
"""Player parameter parsing (level / perks) and rank labels."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from core.alchemy.models import DEFAULT_LEVEL, DEFAULT_PERKS, PlayerParams

RANKS: List[Tuple[int, str]] = [
    (100, "Master"),
    (75, "Expert"),
    (50, "Adept"),
    (25, "Apprentice"),
    (0, "Novice"),
]


def _parse_int(raw: Any) -> Optional[int]:
    """Leading-integer parse: '42', ' 42 ', '42.9', '42abc' => 42; junk => None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and abs(raw) != float("inf") else None
    s = str(raw).strip()
    digits = ""
    for i, ch in enumerate(s):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
            continue
        break
    try:
        return int(digits)
    except ValueError:
        return None


def parse_player_params(
    level_raw: Any = None,
    perks_raw: Any = None,
    *,
    default_level: int = DEFAULT_LEVEL,
    default_perks: int = DEFAULT_PERKS,
) -> PlayerParams:
    """Parse raw user input into clamped PlayerParams.

    Unparseable input falls back to the defaults; parsed numbers are clamped
    into [1,100] / [0,5] (so 0 => 1 and 101 => 100 for level).
    """
    level = _parse_int(level_raw)
    perks = _parse_int(perks_raw)
    return PlayerParams(
        level=default_level if level is None else level,
        perk_count=default_perks if perks is None else perks,
    ).clamped()


def rank_for_level(level: int) -> str:
    for threshold, label in RANKS:
        if level >= threshold:
            return label
    return RANKS[-1][1]
