"""
Graph insight exports: dependency trees, root and leaf packages, and summary
statistics used by reporting layers.
"""

from engine.insights.stats import graph_stats, most_depended
from engine.insights.tree import dependency_tree, leaf_packages, root_packages

__all__ = ["dependency_tree", "graph_stats", "leaf_packages", "most_depended", "root_packages"]
