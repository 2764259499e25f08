# -*- coding: utf-8 -*-
"""Caller-facing errors for slot handling.

All of them are recoverable: front-ends show `str(exc)` to the user.
"Not enough ingredients" and "no common effects" are normal results, not errors.
"""

from __future__ import annotations


class AlchemyError(RuntimeError):
    pass


class SlotsFull(AlchemyError):
    def __init__(self, capacity: int = 3):
        super().__init__("All slots are full!")
        self.capacity = capacity


class DuplicateIngredient(AlchemyError):
    def __init__(self, name: str):
        super().__init__("This ingredient is already selected.")
        self.name = name


class InvalidSlot(AlchemyError):
    def __init__(self, slot, capacity: int = 3):
        super().__init__(f"Invalid slot: {slot!r} (expected 0..{capacity - 1})")
        self.slot = slot
        self.capacity = capacity


class UnknownIngredient(AlchemyError):
    def __init__(self, name: str):
        super().__init__(f"Unknown ingredient: {name}")
        self.name = name
