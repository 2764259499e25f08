# -*- coding: utf-8 -*-
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

LEVEL_MIN = 1
LEVEL_MAX = 100
PERKS_MIN = 0
PERKS_MAX = 5

DEFAULT_LEVEL = 15
DEFAULT_PERKS = 0


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def _dedup_preserve_order(items) -> Tuple[str, ...]:
    out = []
    seen = set()
    for x in items:
        if not x or x in seen:
            continue
        out.append(x)
        seen.add(x)
    return tuple(out)


@dataclass(frozen=True)
class Ingredient:
    name: str
    value: float = 0.0
    effects: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Optional["Ingredient"]:
        """Build from a catalog row; returns None for rows without a name.

        Missing, unparseable or non-finite value => 0, missing effects => ().
        Effect names are stripped and de-duplicated (first occurrence wins).
        """
        if not isinstance(raw, dict):
            return None
        name = str(raw.get("name") or "").strip()
        if not name:
            return None
        try:
            value = float(raw.get("value") or 0)
        except (TypeError, ValueError):
            value = 0.0
        if not math.isfinite(value):
            value = 0.0
        effects_raw = raw.get("effects") or []
        if isinstance(effects_raw, str):
            effects_raw = [effects_raw]
        effects = _dedup_preserve_order(str(e).strip() for e in effects_raw if e is not None)
        return cls(name=name, value=value, effects=effects)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "effects": list(self.effects)}


@dataclass(frozen=True)
class PlayerParams:
    level: int = DEFAULT_LEVEL
    perk_count: int = DEFAULT_PERKS

    def clamped(self) -> "PlayerParams":
        return PlayerParams(
            level=_clamp(self.level, LEVEL_MIN, LEVEL_MAX),
            perk_count=_clamp(self.perk_count, PERKS_MIN, PERKS_MAX),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"level": int(self.level), "perks": int(self.perk_count)}


class PotionKind(str, Enum):
    NO_POTION = "no_potion"
    FAILED = "failed"
    SUCCESS = "success"


@dataclass(frozen=True)
class PotionEffect:
    name: str
    magnitude: int


@dataclass(frozen=True)
class PotionResult:
    kind: PotionKind
    display_name: str
    effects: Tuple[PotionEffect, ...] = ()
    multiplier: float = 1.0
    total_value: int = 0
    is_poison: bool = False
    ingredients: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def multiplier_display(self) -> float:
        return float(f"{self.multiplier:.2f}")

    @property
    def effect_names(self) -> Tuple[str, ...]:
        return tuple(e.name for e in self.effects)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "display_name": self.display_name,
            "effects": [{"name": e.name, "magnitude": e.magnitude} for e in self.effects],
            "multiplier": self.multiplier,
            "multiplier_display": self.multiplier_display,
            "total_value": self.total_value,
            "is_poison": self.is_poison,
            "ingredients": list(self.ingredients),
        }
