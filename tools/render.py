import os
from typing import Iterable, Optional

import numpy as np
import matplotlib.pyplot as plt

from envs.grid import CostGrid


def render_grid(grid: CostGrid, ax=None, start: Optional[int] = None,
                goal: Optional[int] = None, path: Optional[Iterable[int]] = None,
                title: Optional[str] = None):
    """
    Render a CostGrid.

    Layers:
      - terrain cost (light = cheap, darker = expensive)
      - walls (near black)
      - path (lime line through cell centers, drawn from start)
      - start (green star), goal (red star)
    """
    H, W = grid.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(max(2, W / 5), max(2, H / 5)), dpi=120)

    costs = grid.to_array().astype(float)
    walls = costs == 0
    passable = costs[~walls]
    rgb = np.ones((H, W, 3), dtype=float)
    if passable.size:
        lo, hi = passable.min(), passable.max()
        shade = (costs - lo) / (hi - lo) if hi > lo else np.zeros_like(costs)
        rgb[...] = (1.0 - 0.6 * shade)[..., None]
    rgb[walls] = 0.1

    ax.imshow(rgb, interpolation="nearest", origin="upper")
    ax.set_xticks([]); ax.set_yticks([])

    if path:
        cells = ([start] if start is not None else []) + [int(i) for i in path]
        xs = [i % W for i in cells]
        ys = [i // W for i in cells]
        ax.plot(xs, ys, color="lime", lw=2, alpha=0.8)

    if start is not None:
        sx, sy = grid.xy(start)
        ax.plot(sx, sy, marker="*", markersize=10, markeredgecolor="k", markerfacecolor="lime", lw=0)
        ax.text(sx + 0.2, sy - 0.2, "S", color="k", fontsize=8)
    if goal is not None:
        gx, gy = grid.xy(goal)
        ax.plot(gx, gy, marker="*", markersize=10, markeredgecolor="k", markerfacecolor="red", lw=0)
        ax.text(gx + 0.2, gy - 0.2, "G", color="k", fontsize=8)

    if title:
        ax.set_title(title, fontsize=10)
    return ax


def save_render(grid: CostGrid, out_path: str, **kwargs) -> str:
    H, W = grid.shape
    fig, ax = plt.subplots(figsize=(max(2, W / 5), max(2, H / 5)), dpi=120)
    render_grid(grid, ax=ax, **kwargs)
    fig.tight_layout()
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    return out_path
