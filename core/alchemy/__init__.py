# -*- coding: utf-8 -*-
"""Alchemy core: ingredient selection + potion evaluation (UI-agnostic)."""

from core.alchemy.catalog import IngredientCatalog, load_ingredients, search_ingredients  # noqa: F401
from core.alchemy.errors import (  # noqa: F401
    AlchemyError,
    DuplicateIngredient,
    InvalidSlot,
    SlotsFull,
    UnknownIngredient,
)
from core.alchemy.evaluator import evaluate, evaluate_ingredients, skill_multiplier  # noqa: F401
from core.alchemy.models import Ingredient, PlayerParams, PotionEffect, PotionKind, PotionResult  # noqa: F401
from core.alchemy.params import parse_player_params, rank_for_level  # noqa: F401
from core.alchemy.selection import SelectionSet  # noqa: F401
from core.alchemy.session import BrewSession  # noqa: F401
