# tests/test_graph_builder.py

import random

import networkx as nx
import pytest

from bibnet.graph.builder import CooccurrenceGraph, Node, build_graph, merge_graphs
from bibnet.graph.schema import NodeType, Relation
from bibnet.models.record import Record


def make_record(authors, keywords=("X",)):
    # model_construct skips validation, so keyword-free records work too
    return Record.model_construct(
        authors=frozenset(authors),
        keywords=frozenset(keywords),
        title=None,
        venue=None,
        year=None,
    )


def A(label):
    return Node(NodeType.AUTHOR, label)


def K(label):
    return Node(NodeType.KEYWORD, label)


def sample_records():
    return [
        make_record(["A", "B", "C"], ["graphs", "networks"]),
        make_record(["A", "B"], ["graphs"]),
        make_record(["D"], ["networks", "citations"]),
        make_record(["B", "C"], ["graphs", "citations", "networks"]),
    ]


def test_coauthorship_pair():
    G = build_graph([make_record(["A", "B"], ["x"])], Relation.CO_AUTHORSHIP)

    assert G.nodes() == [A("A"), A("B")]
    assert G.as_dict() == {frozenset({"A", "B"}): 1}


def test_coauthorship_three_authors_without_keywords():
    G = build_graph([make_record(["A", "B", "C"], [])], Relation.CO_AUTHORSHIP)

    assert G.as_dict() == {
        frozenset({"A", "B"}): 1,
        frozenset({"A", "C"}): 1,
        frozenset({"B", "C"}): 1,
    }


def test_repeated_coauthorship_accumulates():
    records = [make_record(["A", "B"]), make_record(["A", "B"])]
    G = build_graph(records, Relation.CO_AUTHORSHIP)

    assert G.as_dict() == {frozenset({"A", "B"}): 2}


def test_keyword_cooccurrence():
    G = build_graph([make_record(["A"], ["x", "y"])], Relation.KEYWORD_COOCCURRENCE)

    assert G.nodes() == [K("x"), K("y")]
    assert G.as_dict() == {frozenset({"x", "y"}): 1}


def test_author_keyword_is_bipartite():
    G = build_graph([make_record(["A", "B"], ["x"])], Relation.AUTHOR_KEYWORD)

    assert G.weight(A("A"), K("x")) == 1
    assert G.weight(A("B"), K("x")) == 1
    assert G.weight(A("A"), A("B")) == 0
    assert G.number_of_edges() == 2
    for edge in G.edges():
        assert edge.source.type == NodeType.AUTHOR
        assert edge.target.type == NodeType.KEYWORD


@pytest.mark.parametrize("relation", list(Relation))
def test_empty_input_gives_empty_graph(relation):
    G = build_graph([], relation)

    assert G.number_of_nodes() == 0
    assert G.number_of_edges() == 0
    assert G.nodes() == []
    assert G.edges() == []


def test_relation_accepts_integer_codes():
    G = build_graph([make_record(["A", "B"])], 1)
    assert G.relation is Relation.CO_AUTHORSHIP

    with pytest.raises(ValueError):
        build_graph([], 4)


def test_single_author_is_isolated_node():
    records = [make_record(["SOLO"]), make_record(["A", "B"])]
    G = build_graph(records, Relation.CO_AUTHORSHIP)

    assert G.has_node("SOLO")
    assert G.degree("SOLO") == 0
    assert G.isolated_nodes() == [A("SOLO")]
    assert G.number_of_nodes() == 3


def test_weights_are_symmetric_and_stored_once():
    G = build_graph(sample_records(), Relation.CO_AUTHORSHIP)

    assert G.weight("A", "B") == G.weight("B", "A") == 2
    assert G.weight("B", "C") == G.weight("C", "B") == 2

    pairs = [frozenset((e.source, e.target)) for e in G.edges()]
    assert len(pairs) == len(set(pairs))
    for edge in G.edges():
        assert edge.source.label < edge.target.label


@pytest.mark.parametrize("relation", list(Relation))
def test_no_self_loops(relation):
    G = build_graph(sample_records(), relation)
    for edge in G.edges():
        assert edge.source != edge.target


@pytest.mark.parametrize("relation", list(Relation))
def test_result_independent_of_record_order(relation):
    records = sample_records()
    shuffled = list(records)
    random.Random(7).shuffle(shuffled)

    first = build_graph(records, relation)
    second = build_graph(shuffled, relation)

    assert first == second
    assert first.edges() == second.edges()
    assert first.nodes() == second.nodes()


def test_edges_sorted_by_source_then_target():
    G = build_graph(sample_records(), Relation.KEYWORD_COOCCURRENCE)
    keys = [(e.source.label, e.target.label) for e in G.edges()]

    assert keys == sorted(keys)
    assert G.weight("graphs", "networks") == 2
    assert G.weight("citations", "networks") == 2
    assert G.weight("citations", "graphs") == 1


def test_author_keyword_counts_papers():
    G = build_graph(sample_records(), Relation.AUTHOR_KEYWORD)

    # B wrote three papers listing 'graphs'
    assert G.weight(A("B"), K("graphs")) == 3
    assert G.weight(A("D"), K("citations")) == 1
    assert G.weight(A("A"), K("citations")) == 0
    assert [n.label for n in G.nodes(NodeType.AUTHOR)] == ["A", "B", "C", "D"]


def test_shared_label_stays_two_nodes_in_two_mode_graph():
    G = build_graph([make_record(["PYTHON"], ["PYTHON"])], Relation.AUTHOR_KEYWORD)

    assert G.number_of_nodes() == 2
    assert G.weight(A("PYTHON"), K("PYTHON")) == 1


def test_plain_labels_rejected_in_two_mode_graph():
    G = build_graph([make_record(["A"], ["x"])], Relation.AUTHOR_KEYWORD)
    with pytest.raises(ValueError):
        G.weight("A", "x")


def test_add_pair_rejects_self_loop_and_wrong_types():
    G = CooccurrenceGraph(Relation.CO_AUTHORSHIP)
    with pytest.raises(ValueError):
        G.add_pair(A("A"), A("A"))
    with pytest.raises(ValueError):
        G.add_node(K("x"))

    two_mode = CooccurrenceGraph(Relation.AUTHOR_KEYWORD)
    with pytest.raises(ValueError):
        two_mode.add_pair(A("A"), A("B"))


def test_min_weight_filters_edges():
    G = build_graph(sample_records(), Relation.CO_AUTHORSHIP)

    heavy = G.edges(min_weight=2)
    assert {(e.source.label, e.target.label) for e in heavy} == {("A", "B"), ("B", "C")}


def test_merge_of_partial_graphs_matches_single_run():
    records = sample_records()
    whole = build_graph(records, Relation.AUTHOR_KEYWORD)

    left = build_graph(records[:2], Relation.AUTHOR_KEYWORD)
    right = build_graph(records[2:], Relation.AUTHOR_KEYWORD)

    assert left.merge(right) == whole
    assert right.merge(left) == whole
    assert merge_graphs([right, left]) == whole


def test_merge_rejects_mixed_relations():
    a = build_graph([], Relation.CO_AUTHORSHIP)
    b = build_graph([], Relation.KEYWORD_COOCCURRENCE)
    with pytest.raises(ValueError):
        a.merge(b)
    with pytest.raises(ValueError):
        merge_graphs([])

    assert merge_graphs([], Relation.CO_AUTHORSHIP).number_of_nodes() == 0


def test_to_networkx_coauthorship():
    G = build_graph(sample_records(), Relation.CO_AUTHORSHIP).to_networkx()

    assert isinstance(G, nx.Graph)
    assert not G.is_directed()
    assert set(G.nodes) == {"A", "B", "C", "D"}
    assert G["A"]["B"]["weight"] == 2
    assert G.degree("D") == 0
    assert G.nodes["A"]["type"] == NodeType.AUTHOR.value


def test_to_networkx_two_mode_has_bipartite_attribute():
    G = build_graph(sample_records(), Relation.AUTHOR_KEYWORD).to_networkx()

    authors = {n for n, d in G.nodes(data=True) if d["bipartite"] == 0}
    keywords = {n for n, d in G.nodes(data=True) if d["bipartite"] == 1}

    assert authors == {"author:A", "author:B", "author:C", "author:D"}
    assert keywords == {"keyword:graphs", "keyword:networks", "keyword:citations"}
    assert nx.is_bipartite(G)
    assert G["author:B"]["keyword:graphs"]["weight"] == 3
