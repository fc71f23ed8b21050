"""
Two-phase construction of the workspace dependency graph from raw package records: collect the known workspace names, then wire forward edges between known packages and derive the reverse edges from them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Set

from config import settings
from engine.enums import DiagnosticKind, DuplicatePolicy
from engine.exceptions import DuplicateIdentity, MalformedRecord
from engine.graph.model import DependencyGraph, WorkspacePackage
from engine.records import Diagnostic, PackageRecord, parse_record, raw_name
from engine.results import GraphSnapshot

log = logging.getLogger(__name__)


class GraphBuilder:
    def __init__(
        self,
        include_dev_dependencies: bool | None = None,
        duplicate_policy: str | DuplicatePolicy | None = None,
    ) -> None:
        if include_dev_dependencies is None:
            include_dev_dependencies = settings.include_dev_dependencies
        self._include_dev = bool(include_dev_dependencies)
        self._policy = DuplicatePolicy.from_setting(duplicate_policy)

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._policy

    @property
    def include_dev_dependencies(self) -> bool:
        return self._include_dev

    def build(self, records: Iterable[Any]) -> DependencyGraph:
        diagnostics: List[Diagnostic] = []
        accepted = self._accept(records, diagnostics)
        known: FrozenSet[str] = frozenset(accepted)

        forward: Dict[str, Set[str]] = {}
        dev_only: Dict[str, Set[str]] = {}
        for name in sorted(accepted):
            record = accepted[name]
            if record.declares(name):
                log.warning("package %s declares itself as a dependency; edge dropped", name)
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.self_dependency,
                        package=name,
                        message=f"{name} lists itself as a dependency",
                    )
                )
            runtime = {d for d in record.dependencies if d in known and d != name}
            dev: Set[str] = set()
            if self._include_dev:
                dev = {d for d in record.dev_dependencies if d in known and d != name}
            forward[name] = runtime | dev
            dev_only[name] = dev - runtime

        # every forward edge is inverted exactly once
        reverse: Dict[str, Set[str]] = {name: set() for name in accepted}
        for name, deps in forward.items():
            for dep in deps:
                reverse[dep].add(name)

        nodes = {
            name: WorkspacePackage(
                name=name,
                directory=accepted[name].directory,
                deps=frozenset(forward[name]),
                dev_deps=frozenset(dev_only[name]),
                dependents=frozenset(reverse[name]),
            )
            for name in accepted
        }
        graph = DependencyGraph(nodes, known, diagnostics)
        log.info(
            "workspace graph built: packages=%d edges=%d diagnostics=%d",
            len(graph),
            graph.edge_count(),
            len(diagnostics),
        )
        return graph

    def _accept(self, records: Iterable[Any], diagnostics: List[Diagnostic]) -> Dict[str, PackageRecord]:
        accepted: Dict[str, PackageRecord] = {}
        for raw in records:
            if isinstance(raw, Exception):
                log.warning("excluding unreadable package record: %s", raw)
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.unreadable_record,
                        message=str(raw) or type(raw).__name__,
                    )
                )
                continue

            try:
                record = parse_record(raw)
            except MalformedRecord as exc:
                log.warning("excluding malformed package record: %s", exc.reason)
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.malformed_record,
                        package=raw_name(raw),
                        message=exc.reason,
                    )
                )
                continue

            existing = accepted.get(record.name)
            if existing is not None:
                if self._policy is DuplicatePolicy.error:
                    raise DuplicateIdentity(record.name, existing.directory, record.directory)
                log.warning(
                    "duplicate package %s: %s replaces %s",
                    record.name,
                    record.directory,
                    existing.directory,
                )
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.duplicate_identity,
                        package=record.name,
                        message=f"{record.directory or '?'} replaces {existing.directory or '?'}",
                    )
                )
            accepted[record.name] = record
        return accepted


def build_graph(records: Iterable[Any], **options: Any) -> DependencyGraph:
    return GraphBuilder(**options).build(records)


def graph_from_snapshot(snapshot: GraphSnapshot | Dict[str, Any]) -> DependencyGraph:
    """Rebuild a graph from its serialized snapshot.

    The snapshot is fed back through the builder rather than trusted as-is, so
    the reverse edges are re-derived. Dev edges are always kept since the
    snapshot already reflects whichever setting produced it.
    """
    if not isinstance(snapshot, GraphSnapshot):
        snapshot = GraphSnapshot.model_validate(snapshot)
    rebuilt = GraphBuilder(include_dev_dependencies=True, duplicate_policy=DuplicatePolicy.error).build(
        snapshot.to_records()
    )
    return DependencyGraph(
        rebuilt.nodes,
        snapshot.workspace_packages,
        list(snapshot.diagnostics) + list(rebuilt.diagnostics),
    )
