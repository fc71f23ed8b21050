"""
Immutable workspace dependency graph: package nodes with forward (dependency) and reverse (dependent) edges, plus the full set of known workspace package names.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

from engine.exceptions import PackageNotFound
from engine.records import Diagnostic
from engine.results import GraphSnapshot, PackageSnapshot


@dataclass(frozen=True)
class WorkspacePackage:
    name: str
    directory: str = ""
    deps: FrozenSet[str] = field(default_factory=frozenset)
    # declared only under dev dependencies; always a subset of deps
    dev_deps: FrozenSet[str] = field(default_factory=frozenset)
    dependents: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def runtime_deps(self) -> FrozenSet[str]:
        return self.deps - self.dev_deps


class DependencyGraph:
    __slots__ = ("_nodes", "_workspace_packages", "_diagnostics")

    def __init__(
        self,
        nodes: Mapping[str, WorkspacePackage],
        workspace_packages: Optional[Iterable[str]] = None,
        diagnostics: Iterable[Diagnostic] = (),
    ) -> None:
        self._nodes: Mapping[str, WorkspacePackage] = MappingProxyType(dict(sorted(nodes.items())))
        known = set(nodes) if workspace_packages is None else set(workspace_packages) | set(nodes)
        self._workspace_packages: FrozenSet[str] = frozenset(known)
        self._diagnostics: Tuple[Diagnostic, ...] = tuple(diagnostics)

    @property
    def nodes(self) -> Mapping[str, WorkspacePackage]:
        return self._nodes

    @property
    def workspace_packages(self) -> FrozenSet[str]:
        return self._workspace_packages

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return self._diagnostics

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return (
            dict(self._nodes) == dict(other._nodes)
            and self._workspace_packages == other._workspace_packages
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DependencyGraph(packages={len(self._nodes)}, edges={self.edge_count()})"

    def get(self, name: str) -> Optional[WorkspacePackage]:
        return self._nodes.get(name)

    def require(self, name: str) -> WorkspacePackage:
        node = self._nodes.get(name)
        if node is None:
            raise PackageNotFound(name)
        return node

    def is_internal(self, name: str) -> bool:
        return name in self._workspace_packages

    def names(self) -> List[str]:
        return list(self._nodes)

    def edges(self) -> List[Tuple[str, str]]:
        return [(name, dep) for name, node in self._nodes.items() for dep in sorted(node.deps)]

    def edge_count(self) -> int:
        return sum(len(node.deps) for node in self._nodes.values())

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            packages=[
                PackageSnapshot(
                    name=node.name,
                    directory=node.directory,
                    dependencies=sorted(node.deps),
                    dev_dependencies=sorted(node.dev_deps),
                    dependents=sorted(node.dependents),
                )
                for node in self._nodes.values()
            ],
            workspace_packages=sorted(self._workspace_packages),
            diagnostics=list(self._diagnostics),
        )
