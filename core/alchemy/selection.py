# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import List, Optional, Tuple

from core.alchemy.errors import DuplicateIngredient, InvalidSlot, SlotsFull
from core.alchemy.models import Ingredient

SLOT_COUNT = 3


class SelectionSet:
    """Fixed 3-slot container of chosen ingredients.

    Slot assignment is first-fit by ascending index, so a freed slot is reused
    before any later one. Identity is the catalog name (unique per catalog).
    """

    def __init__(self) -> None:
        self._slots: List[Optional[Ingredient]] = [None] * SLOT_COUNT

    def __len__(self) -> int:
        return sum(1 for s in self._slots if s is not None)

    def __repr__(self) -> str:
        names = [s.name if s else None for s in self._slots]
        return f"SelectionSet({names!r})"

    @property
    def capacity(self) -> int:
        return SLOT_COUNT

    @property
    def is_full(self) -> bool:
        return all(s is not None for s in self._slots)

    def slots(self) -> Tuple[Optional[Ingredient], ...]:
        return tuple(self._slots)

    def index_of(self, ingredient: Ingredient) -> Optional[int]:
        for i, s in enumerate(self._slots):
            if s is not None and s.name == ingredient.name:
                return i
        return None

    def contains(self, ingredient: Ingredient) -> bool:
        return self.index_of(ingredient) is not None

    def add(self, ingredient: Ingredient) -> int:
        if self.is_full:
            raise SlotsFull(SLOT_COUNT)
        if self.contains(ingredient):
            raise DuplicateIngredient(ingredient.name)
        idx = self._slots.index(None)
        self._slots[idx] = ingredient
        return idx

    def remove(self, slot_index: int) -> Optional[Ingredient]:
        """Clear one slot; returns what was there (None for an empty slot)."""
        if isinstance(slot_index, bool) or not isinstance(slot_index, int):
            raise InvalidSlot(slot_index, SLOT_COUNT)
        if not 0 <= slot_index < SLOT_COUNT:
            raise InvalidSlot(slot_index, SLOT_COUNT)
        old = self._slots[slot_index]
        self._slots[slot_index] = None
        return old

    def clear(self) -> None:
        self._slots = [None] * SLOT_COUNT

    def active_ingredients(self) -> List[Ingredient]:
        return [s for s in self._slots if s is not None]
