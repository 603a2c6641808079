# bibnet/graph/builder.py

from __future__ import annotations

import logging
from collections import Counter
from functools import reduce
from itertools import combinations, product
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Set, Tuple, Union

import networkx as nx

from bibnet.graph.schema import NodeType, Relation
from bibnet.models.record import Record

logger = logging.getLogger(__name__)


class Node(NamedTuple):
    type: NodeType
    label: str


class Edge(NamedTuple):
    source: Node
    target: Node
    weight: int


PairKey = Tuple[Node, Node]
NodeLike = Union[Node, str]


def _pair_key(a: Node, b: Node) -> PairKey:
    """
    Canonical key for the unordered pair {a, b}.

    Nodes order by type first, so in the two-mode graph the author node is
    always the first element; within one type they order by label.
    """
    if a == b:
        raise ValueError(f"Refusing to add a self-loop on {a.type.value} {a.label!r}")
    return (a, b) if a < b else (b, a)


class CooccurrenceGraph:
    """
    Weighted undirected co-occurrence graph produced by one engine run.

    Edge weights live in a single Counter keyed by the canonical unordered
    pair, so each pair is stored once and missing pairs weigh zero. Nodes are
    tracked separately so that labels with no co-occurrences (e.g. a sole
    author) are still enumerable.
    """

    def __init__(self, relation: Union[Relation, int]) -> None:
        self.relation = Relation.parse(relation)
        self._nodes: Set[Node] = set()
        self._weights: Counter = Counter()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, node: Node) -> None:
        if node.type not in self.relation.node_types:
            raise ValueError(
                f"{node.type.value} nodes do not belong in a "
                f"{self.relation.name} graph"
            )
        self._nodes.add(node)

    def add_pair(self, a: Node, b: Node, count: int = 1) -> None:
        """Increment the weight of {a, b}; both endpoints become nodes."""
        if count < 1:
            raise ValueError(f"Pair counts must be positive, got {count}")
        key = _pair_key(a, b)
        if self.relation.is_bipartite and key[0].type == key[1].type:
            raise ValueError(
                f"Two-mode graphs only link authors to keywords, got two "
                f"{a.type.value} nodes"
            )
        self.add_node(a)
        self.add_node(b)
        self._weights[key] += count

    def add_record(self, record: Record) -> None:
        """Count every co-occurrence contributed by one record."""
        if self.relation.is_bipartite:
            authors = [Node(NodeType.AUTHOR, label) for label in sorted(record.authors)]
            keywords = [Node(NodeType.KEYWORD, label) for label in sorted(record.keywords)]
            for node in authors + keywords:
                self.add_node(node)
            for author, keyword in product(authors, keywords):
                self.add_pair(author, keyword)
            return

        if self.relation is Relation.CO_AUTHORSHIP:
            node_type, labels = NodeType.AUTHOR, record.authors
        else:
            node_type, labels = NodeType.KEYWORD, record.keywords

        # Labels are a set, so combinations never pair a node with itself.
        nodes = [Node(node_type, label) for label in sorted(labels)]
        for node in nodes:
            self.add_node(node)
        for a, b in combinations(nodes, 2):
            self.add_pair(a, b)

    def merge(self, other: "CooccurrenceGraph") -> "CooccurrenceGraph":
        """
        Return a new graph with the union of both node sets and summed weights.

        Merging is commutative and associative, so partial graphs built over
        disjoint slices of the records combine to the same result as one run.
        """
        if other.relation is not self.relation:
            raise ValueError(
                f"Cannot merge a {other.relation.name} graph into a "
                f"{self.relation.name} graph"
            )
        merged = CooccurrenceGraph(self.relation)
        merged._nodes = self._nodes | other._nodes
        merged._weights = self._weights + other._weights
        return merged

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _as_node(self, value: NodeLike) -> Node:
        if isinstance(value, Node):
            return value
        if self.relation.is_bipartite:
            raise ValueError(
                "Plain labels are ambiguous in a two-mode graph; pass Node(type, label)"
            )
        return Node(self.relation.node_types[0], value)

    def weight(self, a: NodeLike, b: NodeLike) -> int:
        """Weight of {a, b}; symmetric, and 0 for absent pairs or a == b."""
        a, b = self._as_node(a), self._as_node(b)
        if a == b:
            return 0
        return self._weights.get(_pair_key(a, b), 0)

    def has_node(self, node: NodeLike) -> bool:
        return self._as_node(node) in self._nodes

    def nodes(self, node_type: Optional[NodeType] = None) -> List[Node]:
        """All nodes, isolated ones included, sorted by (type, label)."""
        found = (n for n in self._nodes if node_type is None or n.type == node_type)
        return sorted(found)

    def edges(self, min_weight: int = 1) -> List[Edge]:
        """Each undirected edge exactly once, ordered by source then target label."""
        edges = [
            Edge(a, b, w)
            for (a, b), w in self._weights.items()
            if w >= min_weight
        ]
        edges.sort(key=lambda e: (e.source.label, e.target.label, e.source.type, e.target.type))
        return edges

    def degree(self, node: NodeLike) -> int:
        node = self._as_node(node)
        return sum(1 for a, b in self._weights if node == a or node == b)

    def isolated_nodes(self) -> List[Node]:
        connected: Set[Node] = set()
        for a, b in self._weights:
            connected.add(a)
            connected.add(b)
        return sorted(self._nodes - connected)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._weights)

    def node_id(self, node: Node) -> str:
        """
        Stable string id for export.

        Single-mode graphs use the bare label. In the two-mode graph an author
        and a keyword may share a label, so ids carry a type prefix.
        """
        if self.relation.is_bipartite:
            return f"{node.type.value}:{node.label}"
        return node.label

    def as_dict(self) -> Dict[FrozenSet[str], int]:
        """Label-pair view {frozenset({a, b}): weight}; handy for comparisons."""
        return {frozenset((a.label, b.label)): w for (a, b), w in self._weights.items()}

    def to_networkx(self) -> nx.Graph:
        """
        Convert to an undirected networkx Graph.

        Nodes carry `type` and `label` attributes (plus `bipartite` = 0/1 for
        authors/keywords in the two-mode graph); edges carry `weight`.
        """
        G = nx.Graph(relation=self.relation.name)
        for node in self.nodes():
            attrs = {"type": node.type.value, "label": node.label}
            if self.relation.is_bipartite:
                attrs["bipartite"] = 0 if node.type == NodeType.AUTHOR else 1
            G.add_node(self.node_id(node), **attrs)
        for edge in self.edges():
            G.add_edge(self.node_id(edge.source), self.node_id(edge.target), weight=edge.weight)
        return G

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CooccurrenceGraph):
            return NotImplemented
        return (
            self.relation is other.relation
            and self._nodes == other._nodes
            and self._weights == other._weights
        )

    def __repr__(self) -> str:
        return (
            f"CooccurrenceGraph(relation={self.relation.name}, "
            f"nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"
        )


def build_graph(
    records: Iterable[Record],
    relation: Union[Relation, int],
) -> CooccurrenceGraph:
    """
    Build the weighted co-occurrence graph for `relation` from `records`.

    Parameters
    ----------
    records:
        Already-validated Records. May be empty, which yields an empty graph.
    relation:
        A Relation or its integer code:
          1 - CO_AUTHORSHIP: authors linked by co-authored papers.
          2 - KEYWORD_COOCCURRENCE: keywords linked by shared papers.
          3 - AUTHOR_KEYWORD: two-mode authors -> keywords of their papers.

    Returns
    -------
    CooccurrenceGraph
        Every edge weight equals the number of records in which both
        endpoints appear together. The result does not depend on record order.
    """
    graph = CooccurrenceGraph(relation)
    count = 0
    for record in records:
        graph.add_record(record)
        count += 1

    logger.debug(
        "Built %s graph from %d records: %d nodes, %d edges",
        graph.relation.name,
        count,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def merge_graphs(
    graphs: Iterable[CooccurrenceGraph],
    relation: Optional[Union[Relation, int]] = None,
) -> CooccurrenceGraph:
    """
    Fold partial graphs into one by pairwise weight addition.

    `relation` is required only when `graphs` may be empty.
    """
    graphs = list(graphs)
    if not graphs:
        if relation is None:
            raise ValueError("merge_graphs() needs a relation when given no graphs")
        return CooccurrenceGraph(relation)
    start = CooccurrenceGraph(relation if relation is not None else graphs[0].relation)
    return reduce(CooccurrenceGraph.merge, graphs, start)
