"""
Earclip Triangulation Module

Polygon rings, hole bridging and the ear clipping loop.
"""

from earclip.triangulation.ring import Vertex, ConnectionEdge, Ring, is_convex, reflex_edges
from earclip.triangulation.holes import Candidate, HoleMerger
from earclip.triangulation.ear_clipping import EarClipping, group_triangles, triangulate

__all__ = [
    "Vertex",
    "ConnectionEdge",
    "Ring",
    "is_convex",
    "reflex_edges",
    "Candidate",
    "HoleMerger",
    "EarClipping",
    "group_triangles",
    "triangulate",
]
