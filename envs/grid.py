#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid.py
-------
Immutable weighted cost grid addressed by a flattened row-major index.

Cell convention:
    0   -> impassable
    k>0 -> additive cost of entering the cell

Index <-> coordinates:
    x = idx % width, y = idx // width, idx = y * width + x

The backing array is a private read-only copy, so a grid can be shared by any
number of concurrent searches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np


Cell = Tuple[int, int]  # (x, y)


@dataclass(frozen=True, eq=False)
class CostGrid:
    """Flattened (row-major) grid of non-negative integer traversal costs."""
    cells: np.ndarray
    width: int

    def __post_init__(self):
        if not isinstance(self.width, (int, np.integer)) or isinstance(self.width, bool):
            raise ValueError(f"width must be an integer, got {self.width!r}")
        width = int(self.width)
        if width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")

        arr = np.asarray(self.cells)
        if arr.ndim != 1:
            raise ValueError(f"cells must be one-dimensional, got shape {arr.shape}")
        if arr.size == 0:
            raise ValueError("grid must contain at least one cell")
        if arr.size % width != 0:
            raise ValueError(
                f"grid length {arr.size} is not a multiple of width {width}"
            )
        if arr.dtype.kind not in "iub":
            if arr.dtype.kind == "f" and np.all(np.mod(arr, 1) == 0):
                pass  # integral floats (e.g. loaded from text) are accepted
            else:
                raise ValueError(f"cells must hold integers, got dtype {arr.dtype}")
        # values past int64 would wrap negative in the cast below
        limit = 2.0 ** 63 if arr.dtype.kind == "f" else np.iinfo(np.int64).max
        too_big = arr >= limit if arr.dtype.kind == "f" else arr > limit
        if too_big.any():
            raise ValueError("traversal costs must fit in a signed 64-bit integer")

        frozen = np.array(arr, dtype=np.int64, copy=True)
        if (frozen < 0).any():
            raise ValueError("traversal costs must be non-negative")
        frozen.setflags(write=False)
        object.__setattr__(self, "cells", frozen)
        object.__setattr__(self, "width", width)

    # ------------------------------ constructors ------------------------------ #

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "CostGrid":
        rows = [list(r) for r in rows]
        if not rows:
            raise ValueError("at least one row is required")
        width = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != width:
                raise ValueError(f"row {i} has {len(r)} cells, expected {width}")
        return cls(np.array(rows, dtype=np.int64).ravel(), width)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "CostGrid":
        """Build from a 2-D (height, width) cost array."""
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise ValueError(f"expected a 2-D array, got shape {arr.shape}")
        return cls(arr.ravel(), arr.shape[1])

    @classmethod
    def from_occupancy(cls, grid: np.ndarray, cost: int = 1) -> "CostGrid":
        """Occupancy grid (True = blocked) to uniform-cost grid."""
        if cost <= 0:
            raise ValueError("free-cell cost must be positive")
        occ = np.asarray(grid, dtype=bool)
        return cls.from_array(np.where(occ, 0, int(cost)).astype(np.int64))

    # ------------------------------- geometry -------------------------------- #

    @property
    def height(self) -> int:
        return self.cells.size // self.width

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    def __len__(self) -> int:
        return int(self.cells.size)

    def contains(self, idx) -> bool:
        return isinstance(idx, (int, np.integer)) and not isinstance(idx, bool) \
            and 0 <= int(idx) < self.cells.size

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def xy(self, idx: int) -> Cell:
        if not self.contains(idx):
            raise IndexError(f"cell index {idx} outside [0, {len(self)})")
        idx = int(idx)
        return (idx % self.width, idx // self.width)

    # -------------------------------- values --------------------------------- #

    def cost(self, idx: int) -> int:
        if not self.contains(idx):
            raise IndexError(f"cell index {idx} outside [0, {len(self)})")
        return int(self.cells[int(idx)])

    def is_passable(self, idx: int) -> bool:
        return self.cost(idx) > 0

    def to_array(self) -> np.ndarray:
        """Read-only (height, width) view."""
        return self.cells.reshape(self.shape)

    def tolist(self) -> list:
        return self.cells.tolist()

    def passable_mask(self) -> np.ndarray:
        return self.to_array() > 0

    def path_cost(self, start: int, path: Iterable[int]) -> int:
        """Cost of walking `path` from `start` under the entry + Manhattan step model."""
        total = 0
        cx, cy = self.xy(start)
        for idx in path:
            nx, ny = self.xy(idx)
            total += self.cost(idx) + abs(cx - nx) + abs(cy - ny)
            cx, cy = nx, ny
        return total

    def __eq__(self, other) -> bool:
        if not isinstance(other, CostGrid):
            return NotImplemented
        return self.width == other.width and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.width, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"CostGrid(width={self.width}, height={self.height})"
