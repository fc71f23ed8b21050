"""
Dependency tree views and entry points of the workspace graph (root packages nothing depends on, leaf packages that depend on nothing).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Set

from config import settings
from engine.graph.model import DependencyGraph
from engine.results import DependencyTree


def root_packages(graph: DependencyGraph) -> List[str]:
    return [name for name, node in graph.nodes.items() if not node.dependents]


def leaf_packages(graph: DependencyGraph) -> List[str]:
    return [name for name, node in graph.nodes.items() if not node.deps]


def dependency_tree(
    graph: DependencyGraph,
    name: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> DependencyTree:
    if max_depth is None:
        max_depth = settings.tree_max_depth
    if name is not None:
        graph.require(name)

    path: Set[str] = set()
    # packages whose dependencies were already listed somewhere in this tree
    expanded: Set[str] = set()

    def _walk(node: str, depth: int) -> DependencyTree:
        if node in path:
            return DependencyTree(name=node, circular=True)
        deps = sorted(dep for dep in graph.nodes[node].deps if dep in graph)
        if deps and depth >= max_depth:
            return DependencyTree(name=node, truncated=True)
        if deps and node in expanded:
            return DependencyTree(name=node, deduped=True)

        path.add(node)
        expanded.add(node)
        try:
            children = [_walk(dep, depth + 1) for dep in deps]
        finally:
            path.discard(node)
        return DependencyTree(name=node, children=children)

    if name is not None:
        return _walk(name, 0)

    return DependencyTree(
        name=settings.tree_root_label,
        children=[_walk(root, 1) for root in root_packages(graph)],
    )
