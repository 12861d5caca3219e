# -*- coding: utf-8 -*-
"""
Fixed scenarios shared by the tests and the benchmark harness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from .grid import CostGrid


@dataclass(frozen=True)
class Scenario:
    name: str
    grid: CostGrid
    start: int
    goal: int


OBSTACLE_TILE = np.array([
    [1, 1, 1, 1, 1, 1, 1],
    [1, 1, 0, 1, 1, 0, 1],
    [1, 1, 0, 0, 1, 0, 1],
    [1, 1, 0, 1, 1, 0, 1],
    [1, 1, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1],
    [1, 1, 1, 1, 1, 1, 1],
], dtype=np.int64)


def straight_line_5x5() -> Scenario:
    return Scenario("straight_5x5", CostGrid(np.ones(25, dtype=np.int64), 5), 0, 24)


def obstacle_7x7() -> Scenario:
    return Scenario("obstacle_7x7", CostGrid.from_array(OBSTACLE_TILE), 0, 48)


def obstacle_28x28() -> Scenario:
    grid = CostGrid.from_array(np.tile(OBSTACLE_TILE, (4, 4)))
    return Scenario("obstacle_28x28", grid, 0, 28 * 28 - 1)


def corner_4x4() -> Scenario:
    # wall down column 1 except the bottom row
    grid = CostGrid.from_rows([
        [1, 0, 1, 1],
        [1, 0, 1, 1],
        [1, 0, 1, 1],
        [1, 1, 1, 1],
    ])
    return Scenario("corner_4x4", grid, 0, 15)


SCENARIOS: Dict[str, Callable[[], Scenario]] = {
    "straight_5x5": straight_line_5x5,
    "obstacle_7x7": obstacle_7x7,
    "obstacle_28x28": obstacle_28x28,
    "corner_4x4": corner_4x4,
}
