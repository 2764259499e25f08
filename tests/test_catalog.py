"""
Ingredient catalog loading: normalization, degrade-to-empty, search and reload.
"""
import os

from core.alchemy import (
    Ingredient,
    IngredientCatalog,
    PlayerParams,
    PotionKind,
    SelectionSet,
    evaluate,
    load_ingredients,
    search_ingredients,
)


class TestLoadIngredients:

    def test_bundled_catalog(self, catalog_path):
        items = load_ingredients(catalog_path)
        assert len(items) == 20
        names = [i.name for i in items]
        assert len(names) == len(set(names))
        assert all(isinstance(i, Ingredient) and i.effects for i in items)

    def test_missing_file_degrades_to_empty(self, tmp_path, caplog):
        items = load_ingredients(tmp_path / "nope.json")
        assert items == []
        assert "Failed to load ingredients" in caplog.text

    def test_malformed_json_degrades_to_empty(self, write_catalog):
        assert load_ingredients(write_catalog("{not json")) == []

    def test_wrapped_document(self, write_catalog):
        path = write_catalog({"ingredients": [{"name": "A", "value": 3, "effects": ["X"]}]})
        assert load_ingredients(path) == [Ingredient("A", 3.0, ("X",))]

    def test_rows_are_normalized(self, write_catalog):
        path = write_catalog([
            {"name": "  A  ", "effects": ["X", "X", " Y "]},
            {"name": "", "value": 1, "effects": ["X"]},
            "junk",
            {"name": "A", "value": 9, "effects": ["Z"]},
            {"name": "B", "value": "bad"},
        ])
        items = load_ingredients(path)
        assert items == [Ingredient("A", 0.0, ("X", "Y")), Ingredient("B", 0.0, ())]

    def test_non_finite_values_become_zero(self, write_catalog):
        path = write_catalog(
            '[{"name": "A", "value": 1e999, "effects": ["X"]},'
            ' {"name": "B", "value": NaN, "effects": ["X"]},'
            ' {"name": "C", "value": -Infinity, "effects": ["X"]},'
            ' {"name": "D", "value": 4, "effects": ["X"]}]'
        )
        items = load_ingredients(path)
        assert [i.value for i in items] == [0.0, 0.0, 0.0, 4.0]

        sel = SelectionSet()
        for ing in items[:3]:
            sel.add(ing)
        r = evaluate(sel, PlayerParams())
        assert r.kind == PotionKind.SUCCESS
        assert r.total_value == 0

        sel.remove(2)
        sel.add(items[3])
        assert evaluate(sel, PlayerParams(100, 5)).total_value == 20

    def test_empty_catalog_still_evaluates(self, tmp_path):
        cat = IngredientCatalog(tmp_path / "missing.json")
        assert len(cat) == 0
        assert evaluate(SelectionSet(), PlayerParams()).kind == PotionKind.NO_POTION


class TestSearch:

    def test_case_insensitive_substring(self, catalog):
        names = [i.name for i in catalog.search("MOUNTAIN")]
        assert names == ["Blue Mountain Flower", "Purple Mountain Flower", "Red Mountain Flower"]

    def test_empty_query_returns_all(self, catalog):
        assert catalog.search("") == catalog.items()
        assert search_ingredients(catalog.items(), None) == catalog.items()

    def test_no_match(self, catalog):
        assert catalog.search("dragon") == []


class TestIngredientCatalog:

    def test_get_is_case_insensitive(self, catalog):
        assert catalog.get("wheat").name == "Wheat"
        assert catalog.get("  WHEAT ").name == "Wheat"
        assert catalog.get("") is None
        assert catalog.get("Dragon Scale") is None

    def test_meta(self, catalog, catalog_path):
        m = catalog.meta()
        assert m["count"] == 20
        assert m["path"] == str(catalog_path)

    def test_reload_only_when_changed(self, write_catalog):
        path = write_catalog([{"name": "A", "value": 1, "effects": ["X"]}])
        cat = IngredientCatalog(path)
        assert cat.load() is False

        path.write_text('[{"name": "A", "effects": ["X"]}, {"name": "B", "effects": ["X"]}]', encoding="utf-8")
        st = path.stat()
        os.utime(path, (st.st_atime, st.st_mtime + 10))
        assert cat.load() is True
        assert cat.names() == ["A", "B"]

    def test_from_items(self):
        cat = IngredientCatalog.from_items([Ingredient("A", 1, ("X",))])
        assert cat.names() == ["A"]
        assert cat.get("a").value == 1
