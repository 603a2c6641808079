# bibnet/graph/schema.py

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Tuple


class NodeType(str, Enum):
    AUTHOR = "author"
    KEYWORD = "keyword"


class Relation(IntEnum):
    # Authors linked by the number of papers they wrote together
    CO_AUTHORSHIP = 1

    # Keywords linked by the number of papers listing both
    KEYWORD_COOCCURRENCE = 2

    # Two-mode: authors linked to the keywords of their papers
    AUTHOR_KEYWORD = 3

    @classmethod
    def parse(cls, value: Any) -> "Relation":
        """
        Accept a Relation, its integer code, or the code as a string ("1", " 3 ").

        Raises ValueError for anything else, including bools.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid relation mode: {value!r}")
        if isinstance(value, str):
            text = value.strip()
            if not text.lstrip("+-").isdigit():
                raise ValueError(f"Relation mode must be an integer, got {value!r}")
            value = int(text)
        try:
            return cls(value)
        except (TypeError, ValueError):
            codes = ", ".join(str(r.value) for r in cls)
            raise ValueError(f"Relation mode must be one of {codes}, got {value!r}") from None

    @property
    def is_bipartite(self) -> bool:
        return self is Relation.AUTHOR_KEYWORD

    @property
    def node_types(self) -> Tuple[NodeType, ...]:
        if self is Relation.CO_AUTHORSHIP:
            return (NodeType.AUTHOR,)
        if self is Relation.KEYWORD_COOCCURRENCE:
            return (NodeType.KEYWORD,)
        return (NodeType.AUTHOR, NodeType.KEYWORD)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Relation.CO_AUTHORSHIP: "co-authored papers",
    Relation.KEYWORD_COOCCURRENCE: "keywords co-occurring in the same paper",
    Relation.AUTHOR_KEYWORD: "authors and the keywords they used",
}
