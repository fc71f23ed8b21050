import os
import sys
from typing import Dict, Optional, Sequence

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.graph import build_graph


def workspace_records(
    deps: Dict[str, Sequence[str]],
    dev: Optional[Dict[str, Sequence[str]]] = None,
) -> list:
    dev = dev or {}
    return [
        {
            "name": name,
            "directory": f"packages/{name}",
            "dependencies": list(declared),
            "devDependencies": list(dev.get(name, ())),
        }
        for name, declared in deps.items()
    ]


@pytest.fixture
def make_graph():
    """Build a graph from a {package: [dependencies]} mapping."""

    def _make(deps, dev=None, **options):
        return build_graph(workspace_records(deps, dev), **options)

    return _make


@pytest.fixture
def chain_graph(make_graph):
    return make_graph({"a": ["b"], "b": ["c"], "c": []})


@pytest.fixture
def diamond_graph(make_graph):
    return make_graph({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []})


@pytest.fixture
def mutual_cycle_graph(make_graph):
    return make_graph({"a": ["b"], "b": ["a"]})
