#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maps.py
-------
Build CostGrids from map files and render them back.

ASCII format (one row per line):
    .      cost 1
    #      blocked (cost 0)
    1-9    that cost
    S / G  start / goal marker (cost 1)
Blank lines and lines starting with ';' are ignored. All rows must have the
same width.

Binary format: `.npy` holding a 2-D integer array.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from .grid import CostGrid


class MapFormatError(ValueError):
    """Malformed map file or text."""


WALL = "#"
FREE = "."
PATH_MARK = "*"


@dataclass
class ParsedMap:
    grid: CostGrid
    start: Optional[int] = None
    goal: Optional[int] = None


def _cell_cost(ch: str, line_no: int, col: int) -> int:
    if ch == FREE or ch in "SG":
        return 1
    if ch == WALL:
        return 0
    if ch.isdigit() and ch != "0":
        return int(ch)
    raise MapFormatError(f"line {line_no}, column {col + 1}: unexpected character {ch!r}")


def parse_map(text: str) -> ParsedMap:
    rows: List[List[int]] = []
    start = goal = None
    width = None
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        if not line or line.startswith(";"):
            continue
        if width is None:
            width = len(line)
        elif len(line) != width:
            raise MapFormatError(
                f"line {line_no}: row has {len(line)} cells, expected {width}"
            )
        y = len(rows)
        row = []
        for x, ch in enumerate(line):
            if ch == "S":
                if start is not None:
                    raise MapFormatError(f"line {line_no}: second start marker")
                start = y * width + x
            elif ch == "G":
                if goal is not None:
                    raise MapFormatError(f"line {line_no}: second goal marker")
                goal = y * width + x
            row.append(_cell_cost(ch, line_no, x))
        rows.append(row)

    if not rows:
        raise MapFormatError("map contains no rows")
    return ParsedMap(grid=CostGrid.from_rows(rows), start=start, goal=goal)


def load_map(path: str) -> ParsedMap:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".npy":
        arr = np.load(path, allow_pickle=False)
        try:
            return ParsedMap(grid=CostGrid.from_array(arr))
        except ValueError as e:
            raise MapFormatError(f"{path}: {e}") from e
    with open(path, "r", encoding="utf-8") as f:
        return parse_map(f.read())


def format_map(grid: CostGrid,
               path: Optional[Iterable[int]] = None,
               start: Optional[int] = None,
               goal: Optional[int] = None) -> str:
    """ASCII rendering; costs above 9 are clipped to '9'."""
    chars = []
    for v in grid.tolist():
        if v == 0:
            chars.append(WALL)
        elif v == 1:
            chars.append(FREE)
        else:
            chars.append(str(min(v, 9)))
    for idx in path or ():
        chars[int(idx)] = PATH_MARK
    if start is not None:
        chars[int(start)] = "S"
    if goal is not None:
        chars[int(goal)] = "G"
    w = grid.width
    return "\n".join("".join(chars[i:i + w]) for i in range(0, len(chars), w))


def save_map(path: str, grid: CostGrid,
             start: Optional[int] = None, goal: Optional[int] = None) -> None:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".npy":
        np.save(path, np.asarray(grid.to_array()))
        return
    if int(grid.cells.max()) > 9:
        raise MapFormatError("ASCII maps hold costs up to 9; save as .npy instead")
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_map(grid, start=start, goal=goal) + "\n")
