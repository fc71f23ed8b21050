"""
Workspace graph package exports.

This package turns package records into the immutable dependency graph every
query runs against, and carves scoped subgraphs out of it.
"""

from engine.graph.builder import GraphBuilder, build_graph, graph_from_snapshot
from engine.graph.collect import build_graph_async, collect_records
from engine.graph.model import DependencyGraph, WorkspacePackage
from engine.graph.subgraph import dependency_closure, extract_closure

__all__ = [
    "DependencyGraph",
    "GraphBuilder",
    "WorkspacePackage",
    "build_graph",
    "build_graph_async",
    "collect_records",
    "dependency_closure",
    "extract_closure",
    "graph_from_snapshot",
]
