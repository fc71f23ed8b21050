"""
Result models returned by graph queries. All collections are plain sorted lists so results serialize cleanly across a cache or process boundary.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from engine.records import Diagnostic, PackageRecord


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class TopologicalSortResult(FrozenModel):

    layers: List[List[str]] = Field(default_factory=list)
    sorted: List[str] = Field(default_factory=list)
    circular: List[List[str]] = Field(default_factory=list)
    # unplaced packages that sit downstream of a cycle without being on one
    blocked: List[str] = Field(default_factory=list)

    @property
    def is_acyclic(self) -> bool:
        return not self.circular and not self.blocked

    @property
    def unresolved(self) -> List[str]:
        members = {name for cycle in self.circular for name in cycle}
        return sorted(members | set(self.blocked))

    def layer_index(self) -> Dict[str, int]:
        return {name: i for i, layer in enumerate(self.layers) for name in layer}


class BlastRadius(FrozenModel):

    root: str
    affected: List[str] = Field(default_factory=list)
    levels: List[List[str]] = Field(default_factory=list)
    depth: int = 0
    max_depth: Optional[int] = None


class DependencyTree(FrozenModel):

    name: str
    children: List[DependencyTree] = Field(default_factory=list)
    circular: bool = False
    truncated: bool = False
    # already expanded elsewhere in the same tree
    deduped: bool = False


class DependentCount(FrozenModel):

    name: str
    count: int


class GraphStats(FrozenModel):

    total_packages: int
    total_edges: int
    max_depth: int
    avg_dependencies: float
    most_depended: List[DependentCount] = Field(default_factory=list)
    cycle_count: int = 0


class PackageSnapshot(FrozenModel):

    name: str
    directory: str = ""
    dependencies: List[str] = Field(default_factory=list)
    dev_dependencies: List[str] = Field(default_factory=list)
    dependents: List[str] = Field(default_factory=list)


class GraphSnapshot(FrozenModel):

    packages: List[PackageSnapshot] = Field(default_factory=list)
    workspace_packages: List[str] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    def to_records(self) -> List[PackageRecord]:
        records = []
        for pkg in self.packages:
            dev = set(pkg.dev_dependencies)
            records.append(
                PackageRecord(
                    name=pkg.name,
                    directory=pkg.directory,
                    dependencies=[d for d in pkg.dependencies if d not in dev],
                    dev_dependencies=sorted(dev),
                )
            )
        return records
