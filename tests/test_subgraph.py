import pytest

from engine.exceptions import PackageNotFound
from engine.graph import dependency_closure, extract_closure
from engine.ordering import topological_sort


def test_closure_follows_dependencies_only(diamond_graph):
    assert dependency_closure(diamond_graph, "a") == ["a", "b", "c", "d"]
    assert dependency_closure(diamond_graph, "b") == ["b", "d"]
    assert dependency_closure(diamond_graph, "d") == ["d"]


def test_extracted_subgraph_keeps_reverse_edges_consistent(diamond_graph):
    sub = extract_closure(diamond_graph, "b")
    assert sub.names() == ["b", "d"]
    assert sub.nodes["d"].dependents == frozenset({"b"})
    assert sub.nodes["b"].dependents == frozenset()
    assert sub.nodes["b"].deps == diamond_graph.nodes["b"].deps
    assert sub.workspace_packages == diamond_graph.workspace_packages
    # the parent graph is untouched
    assert diamond_graph.nodes["d"].dependents == frozenset({"b", "c"})


def test_layering_a_subgraph_stays_inside_the_closure(make_graph):
    g = make_graph({
        "app": ["lib", "ui"],
        "lib": ["core"],
        "ui": ["core"],
        "core": [],
        "tool": ["core"],
        "loop1": ["loop2"],
        "loop2": ["loop1", "core"],
    })
    closure = set(dependency_closure(g, "lib"))
    result = topological_sort(extract_closure(g, "lib"))
    assert set(result.sorted) == closure == {"lib", "core"}
    assert result.circular == []


def test_unknown_root_raises(diamond_graph):
    with pytest.raises(PackageNotFound) as info:
        extract_closure(diamond_graph, "unknown")
    assert info.value.name == "unknown"
    assert "unknown" in str(info.value)
