# -*- coding: utf-8 -*-
"""
Plotting helpers:

- render     : draw a CostGrid with start, goal and path
- plot_bench : summarize a run_bench CSV
"""
__all__ = [
    "render",
    "plot_bench",
]
