"""
Co-occurrence graph construction and emission.
"""

from .builder import CooccurrenceGraph, Edge, Node, build_graph, merge_graphs
from .schema import NodeType, Relation

__all__ = [
    "CooccurrenceGraph",
    "Edge",
    "Node",
    "NodeType",
    "Relation",
    "build_graph",
    "merge_graphs",
]
