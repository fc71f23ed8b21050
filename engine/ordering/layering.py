"""
Build ordering over the workspace graph using a layered variant of Kahn's algorithm: each layer holds the packages whose dependencies were all placed in earlier layers, so the members of one layer can be processed in parallel. Packages that can never be placed are handed to the cycle detector.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, List

from engine.graph.model import DependencyGraph
from engine.graph.subgraph import extract_closure
from engine.ordering.cycles import cycle_members, find_cycles
from engine.results import TopologicalSortResult

log = logging.getLogger(__name__)


def topological_sort(graph: DependencyGraph) -> TopologicalSortResult:
    nodes = graph.nodes
    remaining: Dict[str, int] = {
        name: sum(1 for dep in node.deps if dep in nodes) for name, node in nodes.items()
    }

    layers: List[List[str]] = []
    current = sorted(name for name, count in remaining.items() if count == 0)
    while current:
        layers.append(current)
        ready: List[str] = []
        for name in current:
            for dependent in nodes[name].dependents:
                if dependent not in remaining:
                    continue
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)
        current = sorted(ready)

    order = [name for layer in layers for name in layer]
    circular: List[List[str]] = []
    blocked: List[str] = []

    if len(order) < len(nodes):
        placed = set(order)
        unresolved = [name for name in nodes if name not in placed]
        circular = find_cycles(graph, subset=unresolved)
        in_cycle = set(cycle_members(circular))
        blocked = [name for name in unresolved if name not in in_cycle]
        log.info(
            "topological_sort: %d of %d package(s) unresolved (cycles=%d blocked=%d)",
            len(unresolved),
            len(nodes),
            len(circular),
            len(blocked),
        )

    log.debug("topological_sort: layers=%d packages=%d", len(layers), len(order))
    return TopologicalSortResult(layers=layers, sorted=order, circular=circular, blocked=blocked)


def build_order_for_package(graph: DependencyGraph, name: str) -> TopologicalSortResult:
    return topological_sort(extract_closure(graph, name))
