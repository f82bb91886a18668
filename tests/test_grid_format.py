import pytest

from takuzu_master import engine
from takuzu_master.grid_format import dump_grid, grid_from_pattern, label_to_rc, parse_pattern, rc_to_label
from takuzu_master.puzzles import available_presets, load_preset
from takuzu_master.types import TileValue


def test_labels():
    assert rc_to_label(0, 0) == "A1"
    assert rc_to_label(5, 2) == "C6"
    assert label_to_rc("c6") == (5, 2)
    for sample in ["", "Z1", "A7", "A0", "AA"]:
        with pytest.raises(ValueError):
            label_to_rc(sample)


def test_parse_pattern_ignores_spacing_and_blank_lines():
    rows = parse_pattern("\n  W . \n\n B  W\n")
    assert rows == [["W", "."], ["B", "W"]]


@pytest.mark.parametrize("text", ["", "W .\n.", "W . B\n. . .\n. . ."])
def test_parse_pattern_rejects_bad_shapes(text):
    with pytest.raises(ValueError):
        parse_pattern(text)


def test_dump_grid_is_space_separated():
    grid = engine.set_cell(engine.create_empty_grid(), 0, 1, TileValue.BLACK)
    text = dump_grid(grid)
    lines = text.splitlines()
    assert len(lines) == 6
    assert lines[0] == ". B . . . ."
    assert all(len(line.split(" ")) == 6 for line in lines)
    assert dump_grid(grid_from_pattern(text)) == text


def test_presets_load_as_fixed_grids():
    assert available_presets() == ["EASY", "MEDIUM", "HARD", "EXPERT"]
    grid = load_preset("easy")
    assert grid[0][0].value is TileValue.WHITE and grid[0][0].is_fixed
    assert grid[0][3].value is TileValue.BLACK
    assert not grid[0][1].is_fixed
    for name in available_presets():
        assert engine.validate_grid(load_preset(name)) == []


def test_unknown_preset():
    with pytest.raises(ValueError):
        load_preset("impossible")
