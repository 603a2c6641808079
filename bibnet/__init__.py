"""
bibnet - weighted co-occurrence graphs from bibliographic records.

Turns a JSON array of papers (authors, keywords, title, venue, year) into a
co-authorship, keyword co-occurrence, or two-mode author/keyword network and
writes it as a CSV edge list for network-analysis tools.

Usage:
    # Command line
    bibnet 1 papers.json coauthors.csv
    bibnet 3 papers.json authors_keywords.csv --nodes nodes.csv

    # Python API
    from bibnet import Relation, build_graph, load_records, write_edge_csv

    records = load_records("papers.json")
    graph = build_graph(records, Relation.CO_AUTHORSHIP)
    write_edge_csv(graph, "coauthors.csv")
"""

__version__ = "0.1.0"

from bibnet.graph.builder import CooccurrenceGraph, Edge, Node, build_graph, merge_graphs
from bibnet.graph.io import export_graph, write_edge_csv, write_node_csv
from bibnet.graph.schema import NodeType, Relation
from bibnet.ingest.loader import load_records
from bibnet.ingest.normalize import LabelNormalizer
from bibnet.models.record import Record

__all__ = [
    "__version__",
    "CooccurrenceGraph",
    "Edge",
    "LabelNormalizer",
    "Node",
    "NodeType",
    "Record",
    "Relation",
    "build_graph",
    "export_graph",
    "load_records",
    "merge_graphs",
    "write_edge_csv",
    "write_node_csv",
]
