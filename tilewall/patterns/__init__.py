"""
Module kinds for the tile wall.

Each module file contains one module class that is registered with the
ModuleRegistry when imported. The set of kinds is fixed by ModuleKind.
"""

# Import base module and registry
from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)

# Import all modules
from tilewall.patterns.dot_grid import DotGrid
from tilewall.patterns.plus import Plus
from tilewall.patterns.stripes import Stripes
from tilewall.patterns.checker import Checker
from tilewall.patterns.solid_block import SolidBlock
from tilewall.patterns.disc import Disc

__all__ = [
    "Module",
    "ModuleDefinition",
    "ModuleKind",
    "ModuleRegistry",
    "Parameter",
    "DotGrid",
    "Plus",
    "Stripes",
    "Checker",
    "SolidBlock",
    "Disc",
]
