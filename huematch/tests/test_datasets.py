"""Unit tests for datasets.py and color_sets.py — building, loading, registry."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import json
import math
import re
import pytest

from huematch.services import color_sets, datasets
from huematch.services.color_space import hex_to_lab
from huematch.services.palette import NamedColor

HEX_RE = re.compile(r"^#[A-F0-9]{6}$")


@pytest.fixture
def isolated_registry(tmp_path, monkeypatch):
    """Point the registry at an empty data dir and forget anything loaded."""
    monkeypatch.setattr(color_sets, "DATA_DIR", tmp_path)
    monkeypatch.setattr(color_sets, "COLORNAMES_CSV", None)
    color_sets.reset()
    yield tmp_path
    color_sets.reset()


# ─────────────────────────────────────────────────────────────────────────────
# Tests: entry conversion
# ─────────────────────────────────────────────────────────────────────────────

class TestToNamedColor:
    def test_valid_row(self):
        c = datasets.to_named_color("  Tomato ", "ff6347")
        assert c == NamedColor(name="Tomato", hex="#FF6347", lab=hex_to_lab("#FF6347"))

    def test_hash_prefix_accepted(self):
        assert datasets.to_named_color("Navy", "#000080").hex == "#000080"

    @pytest.mark.parametrize("hex_color", ["#fff", "12345", "gggggg", ""])
    def test_rejects_non_six_digit(self, hex_color):
        assert datasets.to_named_color("X", hex_color) is None

    def test_rejects_blank_name(self):
        assert datasets.to_named_color("   ", "#000000") is None

    def test_normalize_entries_sorts_and_drops(self):
        colors = datasets.normalize_entries([("b", "#222222"), ("bad", "#12"), ("a", "#111111"), ("C", "333333")])
        assert [c.name for c in colors] == ["C", "a", "b"]


# ─────────────────────────────────────────────────────────────────────────────
# Tests: serialization
# ─────────────────────────────────────────────────────────────────────────────

class TestSerialization:
    def test_dump_format(self):
        text = datasets.dump_palette([NamedColor(name="Black", hex="#000000", lab=(0.0, 0.0, 0.0))])
        assert text.endswith("\n")
        assert json.loads(text) == [{"name": "Black", "hex": "#000000", "lab": [0.0, 0.0, 0.0]}]

    def test_write_then_load(self, tmp_path):
        colors = datasets.normalize_entries([("Red", "#FF0000"), ("Café au lait", "#A67B5B")])
        path = tmp_path / "nested" / "set.json"
        assert datasets.write_palette(path, colors) == 2
        assert datasets.load_palette(path) == tuple(colors)

    def test_load_rejects_missing_field(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"name": "X", "hex": "#000000"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="record 0"):
            datasets.load_palette(path)

    def test_load_rejects_non_array(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            datasets.load_palette(path)

    def test_colornames_csv(self, tmp_path):
        path = tmp_path / "colornames.csv"
        path.write_text("name,hex,good name\n100 Mph,#c93f38,x\nBad,#zzzzzz,\n", encoding="utf-8")
        entries = datasets.colornames_csv_entries(path)
        assert entries == [("100 Mph", "#c93f38"), ("Bad", "#zzzzzz")]
        assert [c.name for c in datasets.normalize_entries(entries)] == ["100 Mph"]

    def test_colornames_csv_needs_columns(self, tmp_path):
        path = tmp_path / "colornames.csv"
        path.write_text("label,value\nx,#000000\n", encoding="utf-8")
        with pytest.raises(ValueError):
            datasets.colornames_csv_entries(path)


# ─────────────────────────────────────────────────────────────────────────────
# Tests: bundled color sets
# ─────────────────────────────────────────────────────────────────────────────

class TestBundledColorSets:
    def test_integrity(self):
        for cs in color_sets.available_color_sets():
            assert cs.count == len(cs.colors) > 0
            for color in cs.colors:
                assert isinstance(color.name, str) and len(color.name) > 0
                assert HEX_RE.match(color.hex)
                assert len(color.lab) == 3
                assert all(math.isfinite(v) for v in color.lab)

    def test_sorted_by_name(self):
        for cs in color_sets.available_color_sets():
            names = [c.name for c in cs.colors]
            assert names == sorted(names)

    def test_known_sets(self):
        assert color_sets.get_color_set("small").label == "Small · CSS"
        assert color_sets.get_color_set("medium").count > color_sets.get_color_set("small").count

    def test_css_contains_keywords(self):
        names = {c.name for c in color_sets.get_color_set("small").colors}
        assert {"red", "aliceblue", "navy"} <= names

    def test_same_object_every_call(self):
        assert color_sets.get_color_set("small") is color_sets.get_color_set("small")


class TestRegistry:
    def test_unknown_set(self):
        with pytest.raises(KeyError):
            color_sets.get_color_set("huge")

    def test_large_unavailable_without_csv(self, isolated_registry):
        with pytest.raises(KeyError):
            color_sets.get_color_set("large")
        assert "large" not in {cs.id for cs in color_sets.available_color_sets()}

    def test_prefers_generated_json(self, isolated_registry):
        datasets.write_palette(isolated_registry / "small.json", datasets.normalize_entries([("Only", "#010203")]))
        small = color_sets.get_color_set("small")
        assert [c.name for c in small.colors] == ["Only"]

    def test_large_from_csv(self, isolated_registry, monkeypatch):
        csv_path = isolated_registry / "colornames.csv"
        csv_path.write_text("name,hex\nZ,#000001\nA,#000002\n", encoding="utf-8")
        monkeypatch.setattr(color_sets, "COLORNAMES_CSV", str(csv_path))
        large = color_sets.get_color_set("large")
        assert [c.name for c in large.colors] == ["A", "Z"]

    def test_warm_up_prepares_each_set(self, isolated_registry):
        for set_id in ("small", "medium"):
            datasets.write_palette(
                isolated_registry / f"{set_id}.json",
                datasets.normalize_entries([(f"{set_id} one", "#102030"), (f"{set_id} two", "#405060")]),
            )
        sets = color_sets.warm_up()
        assert [cs.id for cs in sets] == ["medium", "small"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
