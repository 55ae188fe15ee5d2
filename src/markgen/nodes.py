"""Typed AST nodes for markgen.

The generator consumes a closed set of four node types. All nodes are frozen
dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: the walker never mutates its input
- Pattern matching: the walker dispatches with a single ``match``

Node Hierarchy:
Node (base)
├── Tag
├── Text
├── Code
└── Comment

Each class carries a ``type`` class attribute matching the ``"type"``
discriminator used by the dict form parsers produce (see
``markgen.serialization``).

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from markgen.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    ``location`` is keyword-only so subclasses can declare required fields
    positionally.

    """

    type: ClassVar[str] = "node"

    location: SourceLocation | None = field(default=None, kw_only=True, compare=False)


# =============================================================================
# Concrete Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """Markup element.

    Output: ``name#id.class(attr="value") inline text`` followed by indented
    children.

    ``attrs`` maps attribute names to their value nodes, in declaration
    order. Multiple value nodes for one attribute are concatenated. A lone
    value node is accepted and stored as a one-element tuple.

    """

    type: ClassVar[str] = "tag"

    name: str
    attrs: Mapping[str, tuple[Node, ...]] = field(default_factory=dict)
    content: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        # Attribute values may be given as a lone node or any iterable of nodes
        attrs = {key: _node_tuple(values) for key, values in self.attrs.items()}
        object.__setattr__(self, "attrs", attrs)
        object.__setattr__(self, "content", tuple(self.content))


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text, emitted verbatim."""

    type: ClassVar[str] = "text"

    content: str


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Python expression evaluated against the render locals.

    ``nodes`` is a side list of raw sub-trees. Each entry is rendered and
    exposed to the expression as ``__nodes[i]``:

        >>> Code("__nodes[0] if ok else __nodes[1]", nodes=(Text("yes"), Text("no")))

    """

    type: ClassVar[str] = "code"

    content: str
    nodes: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment line. Output: ``// content``."""

    type: ClassVar[str] = "comment"

    content: str


def _node_tuple(values: Node | Iterable[Node]) -> tuple[Node, ...]:
    if isinstance(values, Node):
        return (values,)
    return tuple(values)


# Registry of discriminators to classes, used by serialization
NODE_TYPES: dict[str, type[Node]] = {
    "tag": Tag,
    "text": Text,
    "code": Code,
    "comment": Comment,
}
