"""
Shared pytest fixtures for the Arcadia-Lab test suite.

- Ingredient factories
- The bundled ingredient catalog
- Temporary catalog files
"""

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.alchemy import Ingredient, IngredientCatalog, PlayerParams  # noqa: E402

CATALOG_PATH = PROJECT_ROOT / "data" / "ingredients.json"


@pytest.fixture
def make_ingredient():
    """Factory: make_ingredient("A", 10, "Restore Health", "Fortify Health")."""
    def _make(name, value=1, *effects):
        return Ingredient(name=name, value=value, effects=tuple(effects))
    return _make


@pytest.fixture
def healers(make_ingredient):
    """Two value-10 ingredients sharing only "Restore Health"."""
    return (
        make_ingredient("Healer A", 10, "Restore Health", "Fortify Sneak"),
        make_ingredient("Healer B", 10, "Restore Health", "Resist Fire"),
    )


@pytest.fixture
def default_params():
    return PlayerParams(level=15, perk_count=0)


@pytest.fixture
def catalog_path():
    return CATALOG_PATH


@pytest.fixture
def catalog():
    return IngredientCatalog(CATALOG_PATH)


@pytest.fixture
def write_catalog(tmp_path):
    """Write a catalog document to a temp file and return its path."""
    def _write(doc, name="ingredients.json"):
        path = tmp_path / name
        if isinstance(doc, str):
            path.write_text(doc, encoding="utf-8")
        else:
            path.write_text(json.dumps(doc), encoding="utf-8")
        return path
    return _write
