"""
Ordering package exports.

Layered topological sorting for parallel build scheduling and the cycle
detector it falls back to for packages that can never be placed.
"""

from engine.ordering.cycles import cycle_members, find_cycles, witness_cycle
from engine.ordering.layering import build_order_for_package, topological_sort

__all__ = [
    "build_order_for_package",
    "cycle_members",
    "find_cycles",
    "topological_sort",
    "witness_cycle",
]
