"""
Test cases for reverse dependency lookup, transitive impact sets and depth-bounded blast radius.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.exceptions import PackageNotFound
from engine.results import BlastRadius
from engine.reverse import blast_radius, direct_dependents, impact_set


def test_direct_dependents(diamond_graph):
    assert direct_dependents(diamond_graph, "d") == ["b", "c"]
    assert direct_dependents(diamond_graph, "a") == []


def test_direct_dependents_returns_a_copy(diamond_graph):
    found = direct_dependents(diamond_graph, "d")
    found.append("zzz")
    assert direct_dependents(diamond_graph, "d") == ["b", "c"]


def test_impact_set_of_diamond_leaf(diamond_graph):
    assert impact_set(diamond_graph, "d") == ["a", "b", "c"]
    assert impact_set(diamond_graph, "b") == ["a"]
    assert impact_set(diamond_graph, "a") == []


def test_impact_set_is_closed_under_dependents(make_graph):
    g = make_graph({
        "app": ["api", "web"],
        "api": ["core"],
        "web": ["core", "ui"],
        "ui": [],
        "core": ["utils"],
        "utils": [],
        "cli": ["utils"],
    })
    for name in g.names():
        impacted = set(impact_set(g, name))
        assert set(direct_dependents(g, name)) <= impacted
        for member in impacted:
            assert set(direct_dependents(g, member)) - {name} <= impacted
    assert impact_set(g, "utils") == ["api", "app", "cli", "core", "web"]


def test_impact_set_tolerates_cycles(make_graph):
    g = make_graph({"a": ["b"], "b": ["a"], "c": ["a"]})
    assert impact_set(g, "a") == ["b", "c"]
    assert impact_set(g, "b") == ["a", "c"]


def test_unknown_package_raises(diamond_graph):
    with pytest.raises(PackageNotFound):
        direct_dependents(diamond_graph, "nope")
    with pytest.raises(PackageNotFound):
        impact_set(diamond_graph, "nope")
    with pytest.raises(PackageNotFound):
        blast_radius(diamond_graph, "nope")


def test_blast_radius_levels(diamond_graph):
    br = blast_radius(diamond_graph, "d")
    assert isinstance(br, BlastRadius)
    assert br.root == "d"
    assert br.levels == [["b", "c"], ["a"]]
    assert br.affected == impact_set(diamond_graph, "d")
    assert br.depth == 2
    assert br.max_depth is None


def test_blast_radius_respects_max_depth(diamond_graph):
    br = blast_radius(diamond_graph, "d", max_depth=1)
    assert br.affected == ["b", "c"]
    assert br.levels == [["b", "c"]]
    assert br.depth == 1
    assert br.max_depth == 1


def test_blast_radius_default_depth_from_settings(monkeypatch, chain_graph):
    monkeypatch.setattr(settings, "blast_radius_max_depth", 1)
    assert blast_radius(chain_graph, "c").affected == ["b"]
    monkeypatch.setattr(settings, "blast_radius_max_depth", None)
    assert blast_radius(chain_graph, "c").affected == ["a", "b"]
