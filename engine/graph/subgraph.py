"""
Scoped views of the workspace graph: the transitive dependency closure of one package as an induced graph.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from typing import List, Set

from engine.graph.model import DependencyGraph

log = logging.getLogger(__name__)


def dependency_closure(graph: DependencyGraph, root: str) -> List[str]:
    graph.require(root)
    members: Set[str] = {root}
    queue: deque[str] = deque([root])

    while queue:
        node = queue.popleft()
        for dep in sorted(graph.nodes[node].deps):
            if dep in graph and dep not in members:
                members.add(dep)
                queue.append(dep)

    return sorted(members)


def extract_closure(graph: DependencyGraph, root: str) -> DependencyGraph:
    members = set(dependency_closure(graph, root))
    # dependents outside the closure are cut so reverse edges still mirror deps
    nodes = {
        name: replace(graph.nodes[name], dependents=graph.nodes[name].dependents & members)
        for name in members
    }
    log.debug("extract_closure root=%s packages=%d of %d", root, len(nodes), len(graph))
    return DependencyGraph(nodes, graph.workspace_packages)
