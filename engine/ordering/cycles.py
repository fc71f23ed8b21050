"""
Cycle detection over the workspace graph. A depth-first search with a single shared path (pushed and popped as it backtracks) reports one closed chain per back edge, and an optional coverage pass adds a shortest witness cycle for any remaining package that still lies on a cycle.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from engine.graph.model import DependencyGraph

log = logging.getLogger(__name__)


def _successors(graph: DependencyGraph, allowed: Set[str]) -> Callable[[str], List[str]]:
    def _next(node: str) -> List[str]:
        return sorted(dep for dep in graph.nodes[node].deps if dep in allowed)

    return _next


def _depth_first_cycles(scope: List[str], successors: Callable[[str], List[str]]) -> List[List[str]]:
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []
    position: Dict[str, int] = {}
    cycles: List[List[str]] = []

    for start in scope:
        if start in visited:
            continue

        visited.add(start)
        on_stack.add(start)
        position[start] = 0
        path.append(start)
        stack: List[Tuple[str, Iterator[str]]] = [(start, iter(successors(start)))]

        while stack:
            node, pending = stack[-1]
            descended = False
            for dep in pending:
                if dep in on_stack:
                    cycles.append(path[position[dep]:] + [dep])
                elif dep not in visited:
                    visited.add(dep)
                    on_stack.add(dep)
                    position[dep] = len(path)
                    path.append(dep)
                    stack.append((dep, iter(successors(dep))))
                    descended = True
                    break
            if not descended:
                stack.pop()
                on_stack.discard(node)
                del position[node]
                path.pop()

    return cycles


def witness_cycle(graph: DependencyGraph, start: str, subset: Optional[Iterable[str]] = None) -> Optional[List[str]]:
    """Shortest closed chain through ``start``, or None when it is on no cycle."""
    allowed = set(graph.nodes) if subset is None else {n for n in subset if n in graph}
    if start not in allowed:
        return None
    successors = _successors(graph, allowed)

    parent: Dict[str, str] = {}
    queue: deque[str] = deque()
    for dep in successors(start):
        if dep == start:
            return [start, start]
        if dep not in parent:
            parent[dep] = start
            queue.append(dep)

    while queue:
        node = queue.popleft()
        for dep in successors(node):
            if dep == start:
                chain = [node]
                while chain[-1] != start:
                    chain.append(parent[chain[-1]])
                chain.reverse()
                return chain + [start]
            if dep not in parent:
                parent[dep] = node
                queue.append(dep)

    return None


def find_cycles(
    graph: DependencyGraph,
    subset: Optional[Iterable[str]] = None,
    cover_all: bool = True,
) -> List[List[str]]:
    """Return closed dependency chains, each ending with its first package.

    With ``subset`` the search only walks edges between the given packages.
    Back edges found by the depth-first pass depend on visitation order, so a
    package on a cycle can be missed when it is only reached through a cross
    edge; ``cover_all`` adds a shortest witness cycle for each such package.
    """
    if subset is None:
        scope = list(graph.nodes)
    else:
        scope = sorted({name for name in subset if name in graph})
    allowed = set(scope)
    successors = _successors(graph, allowed)

    cycles = _depth_first_cycles(scope, successors)

    if cover_all:
        covered = set(cycle_members(cycles))
        for name in scope:
            if name in covered:
                continue
            witness = witness_cycle(graph, name, allowed)
            if witness is not None:
                cycles.append(witness)
                covered.update(witness)

    if cycles:
        log.info("find_cycles: %d cycle(s) across %d package(s)", len(cycles), len(cycle_members(cycles)))
    return cycles


def cycle_members(cycles: Iterable[List[str]]) -> List[str]:
    return sorted({name for cycle in cycles for name in cycle})
