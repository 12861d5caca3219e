import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest

from envs.fixtures import obstacle_7x7
from envs.grid import CostGrid
from envs.maps import MapFormatError, parse_map, load_map, save_map, format_map
from planners import find_path

DEMO = """\
; obstacle course, S = start, G = goal
S......
..#..#.
..##.#.
..#..#.
..####.
.......
......G
"""


def test_parse_demo_map_matches_fixture():
    parsed = parse_map(DEMO)
    assert parsed.grid == obstacle_7x7().grid
    assert parsed.start == 0 and parsed.goal == 48
    assert find_path(parsed.start, parsed.goal, parsed.grid) == [8, 15, 22, 29, 37, 45, 46, 47, 48]


def test_digits_are_costs():
    parsed = parse_map("19\n#.\n")
    assert parsed.grid.tolist() == [1, 9, 0, 1]
    assert parsed.start is None and parsed.goal is None


@pytest.mark.parametrize("text", [
    "...\n..\n",        # ragged
    "..x\n",            # unknown glyph
    "S.S\n",            # two starts
    "\n; only comments\n",
    "0..\n",            # zero digit is not a cost
])
def test_bad_maps_rejected(text):
    with pytest.raises(MapFormatError):
        parse_map(text)


def test_format_map_overlays_path():
    scn = obstacle_7x7()
    path = find_path(scn.start, scn.goal, scn.grid)
    text = format_map(scn.grid, path=path, start=scn.start, goal=scn.goal)
    rows = text.splitlines()
    assert rows[0][0] == "S" and rows[6][6] == "G"
    assert rows[1][1] == "*" and rows[6][4] == "*"
    assert text.count("*") == len(path) - 1


def test_text_round_trip(tmp_path):
    grid = CostGrid.from_rows([[1, 2, 0], [3, 1, 9]])
    p = tmp_path / "m.txt"
    save_map(str(p), grid, start=0, goal=5)
    parsed = load_map(str(p))
    assert parsed.start == 0 and parsed.goal == 5
    # markers load as cost 1
    assert parsed.grid.tolist() == [1, 2, 0, 3, 1, 1]


def test_npy_round_trip(tmp_path):
    grid = CostGrid.from_rows([[1, 12, 0], [3, 1, 40]])
    p = tmp_path / "m.npy"
    save_map(str(p), grid)
    assert load_map(str(p)).grid == grid
    with pytest.raises(MapFormatError):
        save_map(str(tmp_path / "m.txt"), grid)


def test_bad_npy_rejected(tmp_path):
    p = tmp_path / "flat.npy"
    np.save(str(p), np.ones(4, dtype=int))
    with pytest.raises(MapFormatError):
        load_map(str(p))
