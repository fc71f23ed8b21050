"""
Reverse-dependency query exports.

Direct dependent lookup plus transitive impact and blast-radius traversal over
the dependent edges of a workspace graph.
"""

from engine.reverse.impact import blast_radius, direct_dependents, impact_set

__all__ = ["blast_radius", "direct_dependents", "impact_set"]
