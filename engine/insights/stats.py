"""
Summary statistics for a workspace graph.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from config import settings
from engine.graph.model import DependencyGraph
from engine.ordering.layering import topological_sort
from engine.results import DependentCount, GraphStats


def most_depended(graph: DependencyGraph, top: Optional[int] = None) -> List[DependentCount]:
    if top is None:
        top = settings.stats_top_dependents
    counts: List[Tuple[str, int]] = [
        (name, len(node.dependents)) for name, node in graph.nodes.items() if node.dependents
    ]
    counts.sort(key=lambda item: (-item[1], item[0]))
    return [DependentCount(name=name, count=count) for name, count in counts[: max(0, top)]]


def graph_stats(graph: DependencyGraph, top: Optional[int] = None) -> GraphStats:
    total = len(graph)
    edges = graph.edge_count()
    ordering = topological_sort(graph)

    return GraphStats(
        total_packages=total,
        total_edges=edges,
        # a package in layer k heads a dependency chain of exactly k + 1 packages
        max_depth=len(ordering.layers),
        avg_dependencies=round(edges / total, settings.stats_round_precision) if total else 0.0,
        most_depended=most_depended(graph, top),
        cycle_count=len(ordering.circular),
    )
