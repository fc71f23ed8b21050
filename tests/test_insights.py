"""
Test cases for dependency trees, root and leaf packages, and graph statistics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.exceptions import PackageNotFound
from engine.insights import dependency_tree, graph_stats, leaf_packages, most_depended, root_packages
from engine.results import DependencyTree, DependentCount


def test_roots_and_leaves(diamond_graph):
    assert root_packages(diamond_graph) == ["a"]
    assert leaf_packages(diamond_graph) == ["d"]


def test_tree_for_package(diamond_graph):
    tree = dependency_tree(diamond_graph, "a")
    assert tree.name == "a"
    assert [c.name for c in tree.children] == ["b", "c"]
    assert [g.name for c in tree.children for g in c.children] == ["d", "d"]
    assert not tree.circular and not tree.truncated


def test_tree_marks_circular_edges(mutual_cycle_graph):
    tree = dependency_tree(mutual_cycle_graph, "a")
    assert tree.children == [
        DependencyTree(name="b", children=[DependencyTree(name="a", circular=True)])
    ]


def test_tree_truncates_at_max_depth(chain_graph):
    tree = dependency_tree(chain_graph, "a", max_depth=1)
    assert tree.children == [DependencyTree(name="b", truncated=True)]


def test_tree_without_package_starts_from_roots(make_graph):
    g = make_graph({"app": ["core"], "cli": ["core"], "core": []})
    tree = dependency_tree(g)
    assert tree.name == settings.tree_root_label
    assert [c.name for c in tree.children] == ["app", "cli"]
    assert tree.children[0].children == [DependencyTree(name="core")]


def test_tree_unknown_package(diamond_graph):
    with pytest.raises(PackageNotFound):
        dependency_tree(diamond_graph, "ghost")


def test_stats_for_diamond(diamond_graph):
    stats = graph_stats(diamond_graph)
    assert stats.total_packages == 4
    assert stats.total_edges == 4
    assert stats.max_depth == 3
    assert stats.avg_dependencies == 1.0
    assert stats.most_depended == [
        DependentCount(name="d", count=2),
        DependentCount(name="b", count=1),
        DependentCount(name="c", count=1),
    ]
    assert stats.cycle_count == 0


def test_stats_with_cycle(make_graph):
    stats = graph_stats(make_graph({"a": ["b"], "b": ["a"], "c": []}))
    assert stats.total_packages == 3
    assert stats.total_edges == 2
    assert stats.max_depth == 1
    assert stats.avg_dependencies == 0.67
    assert stats.cycle_count == 1


def test_stats_of_empty_graph(make_graph):
    stats = graph_stats(make_graph({}))
    assert stats.total_packages == 0
    assert stats.avg_dependencies == 0.0
    assert stats.max_depth == 0
    assert stats.most_depended == []


def test_most_depended_limit(diamond_graph, monkeypatch):
    assert most_depended(diamond_graph, top=1) == [DependentCount(name="d", count=2)]
    monkeypatch.setattr(settings, "stats_top_dependents", 2)
    assert [d.name for d in most_depended(diamond_graph)] == ["d", "b"]


def _count_nodes(tree):
    return 1 + sum(_count_nodes(child) for child in tree.children)


def test_tree_expands_shared_dependencies_once(make_graph):
    # each level has two packages depending on both packages of the level below
    levels = 18
    deps = {}
    for i in range(levels):
        below = [f"l{i + 1:02d}a", f"l{i + 1:02d}b"] if i + 1 < levels else []
        deps[f"l{i:02d}a"] = below
        deps[f"l{i:02d}b"] = below
    g = make_graph(deps)

    tree = dependency_tree(g, "l00a", max_depth=64)
    assert _count_nodes(tree) < 10 * len(g)

    first, second = tree.children
    assert [c.name for c in first.children] == ["l02a", "l02b"]
    assert second == DependencyTree(name="l01b", children=second.children)
    assert [c.deduped for c in second.children] == [True, True]


def test_tree_from_roots_dedupes_across_roots(make_graph):
    g = make_graph({"app": ["core"], "cli": ["core"], "core": ["utils"], "utils": []})
    tree = dependency_tree(g)
    app, cli = tree.children
    assert app.children == [DependencyTree(name="core", children=[DependencyTree(name="utils")])]
    assert cli.children == [DependencyTree(name="core", deduped=True)]
