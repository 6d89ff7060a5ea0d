"""Typed parse-tree nodes for EggsML.

All nodes are frozen dataclasses with slots for:
- Immutability: the tree is built once and only read afterwards
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Tag   (root when ``tag`` is None)
└── Text

Nodes hold no reference to their parent; walk down from the root instead.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    Attributes:
        source_index: Index in the original string where this node starts

    """

    source_index: int


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """A tag and its children, or the root of the tree.

    EggsML: ``*text*``, ``[text]``, ``<param>{text}``

    Attributes:
        tag: Character that opened the tag, or None for the root
        children: Child nodes in source order; never two Text in a row

    """

    tag: str | None
    children: tuple[Node, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.tag is None


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text with all escaping already removed."""

    text: str


__all__ = ["Node", "Tag", "Text"]
