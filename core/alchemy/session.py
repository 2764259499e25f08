# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.alchemy.evaluator import evaluate
from core.alchemy.models import Ingredient, PlayerParams, PotionResult
from core.alchemy.params import parse_player_params, rank_for_level
from core.alchemy.selection import SelectionSet

logger = logging.getLogger(__name__)

Listener = Callable[[PotionResult], None]


class BrewSession:
    """One user's selection + player params.

    Every mutation is followed by a fresh evaluation under the same lock, and
    the new result is pushed to subscribers.
    """

    def __init__(self, params: Optional[PlayerParams] = None):
        self._lock = threading.RLock()
        self._selection = SelectionSet()
        self._params = (params or PlayerParams()).clamped()
        self._listeners: List[Listener] = []
        self._result = evaluate(self._selection, self._params)

    @property
    def selection(self) -> SelectionSet:
        return self._selection

    @property
    def params(self) -> PlayerParams:
        return self._params

    @property
    def result(self) -> PotionResult:
        return self._result

    @property
    def rank(self) -> str:
        return rank_for_level(self._params.level)

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _refresh(self) -> PotionResult:
        self._result = evaluate(self._selection, self._params)
        logger.debug("evaluated %s -> %s", self._selection, self._result.kind.value)
        for cb in list(self._listeners):
            cb(self._result)
        return self._result

    def place(self, ingredient: Ingredient) -> Tuple[int, PotionResult]:
        """Add and evaluate; returns the slot the ingredient landed in."""
        with self._lock:
            slot = self._selection.add(ingredient)
            return slot, self._refresh()

    def add(self, ingredient: Ingredient) -> PotionResult:
        return self.place(ingredient)[1]

    def remove(self, slot_index: int) -> PotionResult:
        with self._lock:
            self._selection.remove(slot_index)
            return self._refresh()

    def clear(self) -> PotionResult:
        with self._lock:
            self._selection.clear()
            return self._refresh()

    def set_params(self, level: Any = None, perks: Any = None) -> PotionResult:
        """Update level and/or perks; None keeps the current value."""
        with self._lock:
            cur = self._params
            self._params = parse_player_params(
                cur.level if level is None else level,
                cur.perk_count if perks is None else perks,
                default_level=cur.level,
                default_perks=cur.perk_count,
            )
            return self._refresh()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "slots": [s.to_dict() if s else None for s in self._selection.slots()],
                "params": self._params.to_dict(),
                "rank": self.rank,
                "result": self._result.to_dict(),
            }
