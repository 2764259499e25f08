# -*- coding: utf-8 -*-
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from core.alchemy.models import Ingredient

logger = logging.getLogger(__name__)


def parse_ingredients(doc: Any) -> List[Ingredient]:
    """Normalize a catalog document into Ingredients.

    Accepts a bare list or {"ingredients": [...]}. Rows without a name are
    skipped; duplicate names keep the first row.
    """
    rows = doc.get("ingredients") if isinstance(doc, dict) else doc
    if not isinstance(rows, list):
        return []

    out: List[Ingredient] = []
    seen = set()
    for row in rows:
        ing = Ingredient.from_dict(row)
        if ing is None:
            continue
        if ing.name in seen:
            logger.debug("duplicate ingredient skipped: %s", ing.name)
            continue
        seen.add(ing.name)
        out.append(ing)
    return out


def load_ingredients(path: Path) -> List[Ingredient]:
    """Load the ingredient catalog; any failure degrades to an empty list."""
    try:
        doc = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load ingredients from %s: %s", path, exc)
        return []
    items = parse_ingredients(doc)
    if not items:
        logger.warning("Ingredient catalog is empty: %s", path)
    return items


def search_ingredients(items: Sequence[Ingredient], query: Optional[str]) -> List[Ingredient]:
    q = str(query or "").strip().lower()
    if not q:
        return list(items)
    return [i for i in items if q in i.name.lower()]


class IngredientCatalog:
    """Ingredient catalog with mtime-based reload (thread-safe).

    Shared by the CLI and the web app.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.RLock()
        self._mtime: float = -1.0
        self._items: List[Ingredient] = []
        self._by_name: Dict[str, Ingredient] = {}
        self.load(force=True)

    @classmethod
    def from_items(cls, items: Sequence[Ingredient], path: Optional[Path] = None) -> "IngredientCatalog":
        cat = cls.__new__(cls)
        cat._path = Path(path) if path else Path("<memory>")
        cat._lock = threading.RLock()
        cat._mtime = 0.0
        cat._set_items(list(items))
        return cat

    @property
    def path(self) -> Path:
        return self._path

    def load(self, force: bool = False) -> bool:
        """Reload if the file changed. Returns True if a reload occurred."""
        with self._lock:
            try:
                mtime = self._path.stat().st_mtime
            except OSError:
                mtime = 0.0

            if (not force) and self._mtime == mtime:
                return False

            self._set_items(load_ingredients(self._path))
            self._mtime = mtime
            logger.info("Loaded %d ingredients from %s", len(self._items), self._path)
            return True

    def _set_items(self, items: List[Ingredient]) -> None:
        self._items = items
        self._by_name = {i.name.lower(): i for i in items}

    def mtime(self) -> float:
        with self._lock:
            return float(self._mtime or 0)

    def items(self) -> List[Ingredient]:
        with self._lock:
            return list(self._items)

    def names(self) -> List[str]:
        with self._lock:
            return [i.name for i in self._items]

    def get(self, name: str) -> Optional[Ingredient]:
        key = str(name or "").strip().lower()
        if not key:
            return None
        with self._lock:
            return self._by_name.get(key)

    def search(self, query: Optional[str]) -> List[Ingredient]:
        with self._lock:
            return search_ingredients(self._items, query)

    def meta(self) -> Dict[str, Any]:
        with self._lock:
            return {"path": str(self._path), "count": len(self._items), "mtime": self._mtime}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
