# -*- coding: utf-8 -*-
"""
Cost grids and their construction.
Exposes:
- CostGrid (immutable flattened grid, grid.py)
- parse_map / load_map / save_map / format_map (maps.py)
- GridScenario, generate_scenario (generator.py)
- Scenario, SCENARIOS (fixed scenarios, fixtures.py)
"""

from __future__ import annotations

from .grid import CostGrid
from .maps import MapFormatError, ParsedMap, parse_map, load_map, save_map, format_map
from .generator import GridScenario, generate_scenario, has_path
from .fixtures import Scenario, SCENARIOS

__all__ = [
    "CostGrid",
    "MapFormatError",
    "ParsedMap",
    "parse_map",
    "load_map",
    "save_map",
    "format_map",
    "GridScenario",
    "generate_scenario",
    "has_path",
    "Scenario",
    "SCENARIOS",
]
