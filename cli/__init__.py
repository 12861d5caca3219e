# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- find_path : one GridAStar query on a map file (ASCII or .npy)
- run_bench : timing comparison of the registered planners
"""
__all__ = [
    "find_path",
    "run_bench",
]
