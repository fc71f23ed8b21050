"""
Reverse-dependency queries: who depends on a package directly, and which packages need re-validation when it changes (impact set and depth-bounded blast radius).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from config import settings
from engine.graph.model import DependencyGraph
from engine.results import BlastRadius

log = logging.getLogger(__name__)


def direct_dependents(graph: DependencyGraph, name: str) -> List[str]:
    return sorted(graph.require(name).dependents)


def _impact_levels(graph: DependencyGraph, name: str, max_depth: Optional[int]) -> List[List[str]]:
    graph.require(name)
    seen: Set[str] = {name}
    levels: List[List[str]] = []
    frontier = [name]

    while frontier and (max_depth is None or len(levels) < max_depth):
        ring = sorted(
            {
                dependent
                for node in frontier
                for dependent in graph.nodes[node].dependents
                if dependent in graph and dependent not in seen
            }
        )
        if not ring:
            break
        seen.update(ring)
        levels.append(ring)
        frontier = ring

    return levels


def impact_set(graph: DependencyGraph, name: str) -> List[str]:
    levels = _impact_levels(graph, name, None)
    affected = sorted(n for ring in levels for n in ring)
    log.debug("impact_set %s affected=%d", name, len(affected))
    return affected


def blast_radius(graph: DependencyGraph, name: str, max_depth: int | None = None) -> BlastRadius:
    if max_depth is None:
        max_depth = settings.blast_radius_max_depth
    if max_depth is not None:
        max_depth = max(0, int(max_depth))

    levels = _impact_levels(graph, name, max_depth)
    return BlastRadius(
        root=name,
        affected=sorted(n for ring in levels for n in ring),
        levels=levels,
        depth=len(levels),
        max_depth=max_depth,
    )
