# bibnet/graph/io.py

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator, Tuple, Union

import networkx as nx

from bibnet.errors import OutputError
from bibnet.graph.builder import CooccurrenceGraph

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

EDGE_HEADER = ("source", "target", "weight")
NODE_HEADER = ("id", "type")

EXPORT_FORMATS = {".graphml": "GraphML", ".gexf": "GEXF"}


def _prepare_output(path: PathLike) -> Path:
    """Resolve `path` and make sure its parent directory exists."""
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(output_path, exc) from exc
    return output_path


def edge_rows(graph: CooccurrenceGraph, min_weight: int = 1) -> Iterator[Tuple[str, str, int]]:
    """
    Yield (source, target, weight) label triples, one per undirected edge.

    In the two-mode graph the source is always the author and the target
    the keyword.
    """
    for edge in graph.edges(min_weight=min_weight):
        yield edge.source.label, edge.target.label, edge.weight


def write_edge_csv(
    graph: CooccurrenceGraph,
    path: PathLike,
    delimiter: str = ",",
    min_weight: int = 1,
) -> Path:
    """
    Write the graph as a CSV edge list with a `source,target,weight` header.

    - Creates parent directories if needed.
    - An empty graph produces a header-only file.
    - Raises OutputError if the file cannot be created or written.
    """
    output_path = _prepare_output(path)
    count = 0
    try:
        with output_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(EDGE_HEADER)
            for row in edge_rows(graph, min_weight=min_weight):
                writer.writerow(row)
                count += 1
    except OSError as exc:
        raise OutputError(output_path, exc) from exc

    logger.info("Wrote %d edges to %s", count, output_path)
    return output_path


def write_node_csv(
    graph: CooccurrenceGraph,
    path: PathLike,
    delimiter: str = ",",
) -> Path:
    """
    Write every node, isolated ones included, as `id,type` rows.

    Edge lists cannot carry zero-degree nodes; this file lets the target
    tool declare them up front.
    """
    output_path = _prepare_output(path)
    try:
        with output_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(NODE_HEADER)
            for node in graph.nodes():
                writer.writerow((node.label, node.type.value))
    except OSError as exc:
        raise OutputError(output_path, exc) from exc

    logger.info("Wrote %d nodes to %s", graph.number_of_nodes(), output_path)
    return output_path


def export_graph(graph: CooccurrenceGraph, path: PathLike) -> Path:
    """
    Export through networkx as GraphML (.graphml) or GEXF (.gexf).

    Raises ValueError for any other suffix and OutputError on write failure.
    """
    output_path = Path(path)
    suffix = output_path.suffix.lower()
    if suffix not in EXPORT_FORMATS:
        supported = ", ".join(sorted(EXPORT_FORMATS))
        raise ValueError(f"Unsupported export format {suffix or '(none)'!r}; use one of {supported}")

    output_path = _prepare_output(output_path)
    G = graph.to_networkx()
    try:
        if suffix == ".graphml":
            nx.write_graphml(G, output_path)
        else:
            nx.write_gexf(G, output_path)
    except OSError as exc:
        raise OutputError(output_path, exc) from exc

    logger.info("Exported %s graph to %s", EXPORT_FORMATS[suffix], output_path)
    return output_path
