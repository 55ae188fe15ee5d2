"""AST serialization: dict/JSON conversion for markgen nodes.

Markup parsers hand over plain JSON-shaped data:

    {"type": "tag", "name": "p",
     "attrs": {"class": {"type": "text", "content": "lead"}},
     "content": [{"type": "text", "content": "hello"}],
     "location": {"line": 1, "col": 1}}

``from_dict`` turns that into typed nodes; ``to_dict`` goes the other way.
Attribute values may be a single node or a list of nodes on input and are
always lists on output.

Example:
    from markgen.serialization import from_json, to_json

    nodes = from_json('[{"type": "text", "content": "hi"}]')
    assert from_json(to_json(nodes)) == nodes

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from markgen.errors import UnrecognizedNodeTypeError
from markgen.location import SourceLocation
from markgen.nodes import NODE_TYPES, Code, Comment, Node, Tag, Text


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes the ``type`` discriminator field for deserialization.

    Args:
        node: Any markgen AST node.

    Returns:
        Dict with ``type`` and the node's fields.

    """
    result: dict[str, Any] = {"type": node.type}

    match node:
        case Tag(name=name, attrs=attrs, content=content):
            result["name"] = name
            if attrs:
                result["attrs"] = {
                    key: [to_dict(value) for value in values] for key, values in attrs.items()
                }
            if content:
                result["content"] = [to_dict(child) for child in content]
        case Code(content=content, nodes=nodes):
            result["content"] = content
            if nodes:
                result["nodes"] = [to_dict(child) for child in nodes]
        case Text(content=content) | Comment(content=content):
            result["content"] = content
        case _:
            raise UnrecognizedNodeTypeError(type(node).__name__, node.location)

    if node.location is not None:
        result["location"] = node.location.to_dict()
    return result


def from_dict(data: Mapping[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``type`` discriminator to determine the node class and
    recurses into ``content``, ``attrs`` and ``nodes``.

    Args:
        data: Dict in parser output shape (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        UnrecognizedNodeTypeError: If ``type`` is missing or unknown.

    """
    raw_location = data.get("location")
    location = SourceLocation.from_dict(raw_location) if raw_location else None

    type_name = data.get("type")
    node_cls = NODE_TYPES.get(type_name) if isinstance(type_name, str) else None
    if node_cls is None:
        raise UnrecognizedNodeTypeError(type_name, location)

    if node_cls is Tag:
        raw_attrs = data.get("attrs") or {}
        attrs = {key: _value_nodes(value) for key, value in raw_attrs.items()}
        return Tag(
            name=data["name"],
            attrs=attrs,
            content=_children(data.get("content")),
            location=location,
        )
    if node_cls is Code:
        return Code(
            content=data.get("content", ""),
            nodes=_children(data.get("nodes")),
            location=location,
        )
    return node_cls(content=data.get("content", ""), location=location)


def _value_nodes(value: Any) -> tuple[Node, ...]:
    """Normalize an attribute value (one node or a list) to a tuple."""
    if isinstance(value, Mapping) or isinstance(value, Node):
        return nodes_from_data([value])
    return nodes_from_data(value)


def _children(value: Any) -> tuple[Node, ...]:
    if not value:
        return ()
    return nodes_from_data(value)


def nodes_from_data(data: Iterable[Node | Mapping[str, Any]]) -> tuple[Node, ...]:
    """Convert a sequence mixing typed nodes and dicts into typed nodes.

    Typed nodes pass through unchanged, so hosts can build trees with either
    representation.

    Args:
        data: Iterable of nodes and/or parser dicts.

    Returns:
        Tuple of typed nodes, in input order.

    Raises:
        UnrecognizedNodeTypeError: If any dict, at any depth, has an
            unknown ``type``.

    """
    result: list[Node] = []
    for item in data:
        if isinstance(item, Node):
            result.append(item)
        elif isinstance(item, Mapping):
            result.append(from_dict(item))
        else:
            raise UnrecognizedNodeTypeError(type(item).__name__)
    return tuple(result)


def to_json(nodes: Sequence[Node], *, indent: int | None = None) -> str:
    """Serialize a node sequence to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        nodes: Nodes to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps([to_dict(node) for node in nodes], sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[Node, ...]:
    """Deserialize a node sequence from a JSON string.

    A single top-level object is accepted as a one-node tree.

    Args:
        data: JSON string (as produced by to_json or a markup parser).

    Returns:
        Tuple of typed nodes.

    """
    raw = json.loads(data)
    if isinstance(raw, Mapping):
        raw = [raw]
    return nodes_from_data(raw)
