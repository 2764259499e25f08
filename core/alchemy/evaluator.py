# -*- coding: utf-8 -*-
"""Potion evaluation: effect matching + skill scaling.

Pure functions only. Callers re-run `evaluate()` after every selection or
parameter change; nothing is cached between calls.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Sequence

from core.alchemy.models import Ingredient, PlayerParams, PotionEffect, PotionKind, PotionResult
from core.alchemy.selection import SelectionSet

MIN_INGREDIENTS = 2
MIN_SHARED = 2
BASE_MAGNITUDE = 15
LEVEL_FACTOR = 1.5
PERK_FACTOR = 0.2
POISON_KEYWORDS = ("damage", "ravage", "weakness")

UNKNOWN_POTION = "Unknown Potion"
FAILED_POTION = "Failed Potion"


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; 24.5 must become 25 here.
    return int(math.floor(float(x) + 0.5))


def skill_multiplier(level: int, perk_count: int) -> float:
    return (1 + (level / 100) * LEVEL_FACTOR) * (1 + perk_count * PERK_FACTOR)


def count_effects(active: Sequence[Ingredient]) -> Dict[str, int]:
    """effect -> number of ingredients carrying it (dict order = first seen)."""
    counts: Dict[str, int] = {}
    for ing in active:
        seen = set()
        for effect in ing.effects:
            if effect in seen:
                continue
            seen.add(effect)
            counts[effect] = counts.get(effect, 0) + 1
    return counts


def matched_effects(active: Sequence[Ingredient]) -> List[str]:
    return [name for name, n in count_effects(active).items() if n >= MIN_SHARED]


def is_poison(effects: Iterable[str]) -> bool:
    for e in effects:
        low = str(e).lower()
        if any(k in low for k in POISON_KEYWORDS):
            return True
    return False


def potion_name(effects: Sequence[str]) -> str:
    prefix = "Poison of " if is_poison(effects) else "Potion of "
    return prefix + " & ".join(effects)


def evaluate_ingredients(active: Sequence[Ingredient], params: PlayerParams) -> PotionResult:
    names = tuple(i.name for i in active)
    if len(active) < MIN_INGREDIENTS:
        return PotionResult(kind=PotionKind.NO_POTION, display_name=UNKNOWN_POTION, ingredients=names)

    p = params.clamped()
    mult = skill_multiplier(p.level, p.perk_count)

    matched = matched_effects(active)
    if not matched:
        return PotionResult(kind=PotionKind.FAILED, display_name=FAILED_POTION, multiplier=mult, ingredients=names)

    total = sum(i.value for i in active)
    scaled = round_half_up(total * len(matched) * mult)
    magnitude = round_half_up(BASE_MAGNITUDE * mult)

    return PotionResult(
        kind=PotionKind.SUCCESS,
        display_name=potion_name(matched),
        effects=tuple(PotionEffect(name=e, magnitude=magnitude) for e in matched),
        multiplier=mult,
        total_value=scaled,
        is_poison=is_poison(matched),
        ingredients=names,
    )


def evaluate(selection: SelectionSet, params: PlayerParams) -> PotionResult:
    return evaluate_ingredients(selection.active_ingredients(), params)
