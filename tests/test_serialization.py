"""Tests for markgen.serialization — parser dicts to typed nodes and back."""

import json

import pytest

from markgen.errors import UnrecognizedNodeTypeError
from markgen.location import SourceLocation
from markgen.nodes import Code, Comment, Tag, Text
from markgen.serialization import from_dict, from_json, nodes_from_data, to_dict, to_json

_LOC = SourceLocation(lineno=1, col_offset=1)


def _tag(name: str, *content, **attrs) -> Tag:  # type: ignore[no-untyped-def]
    return Tag(name, attrs={k: (Text(v),) for k, v in attrs.items()}, content=tuple(content))


class TestFromDict:
    """Parser output to typed nodes."""

    def test_text(self) -> None:
        assert from_dict({"type": "text", "content": "hi"}) == Text("hi")

    def test_comment(self) -> None:
        assert from_dict({"type": "comment", "content": "c"}) == Comment("c")

    def test_code_with_nodes(self) -> None:
        node = from_dict({
            "type": "code",
            "content": "__nodes[0]",
            "nodes": [{"type": "text", "content": "x"}],
        })
        assert node == Code("__nodes[0]", nodes=(Text("x"),))

    def test_tag_with_single_and_list_attrs(self) -> None:
        node = from_dict({
            "type": "tag",
            "name": "a",
            "attrs": {
                "href": {"type": "text", "content": "/"},
                "title": [{"type": "text", "content": "t-"}, {"type": "code", "content": "n"}],
            },
            "content": [{"type": "text", "content": "go"}],
        })
        assert node == Tag(
            "a",
            attrs={"href": (Text("/"),), "title": (Text("t-"), Code("n"))},
            content=(Text("go"),),
        )

    def test_attr_order_preserved(self) -> None:
        node = from_dict({
            "type": "tag",
            "name": "a",
            "attrs": {k: {"type": "text", "content": k} for k in ("z", "y", "x")},
        })
        assert isinstance(node, Tag)
        assert list(node.attrs) == ["z", "y", "x"]

    def test_parser_location(self) -> None:
        node = from_dict({
            "type": "text",
            "content": "x",
            "location": {"line": 3, "col": 9, "filename": "a.sgr"},
        })
        assert node.location == SourceLocation(3, 9, "a.sgr")

    def test_field_name_location(self) -> None:
        node = from_dict({"type": "text", "content": "x", "location": {"lineno": 2, "col_offset": 4}})
        assert node.location == SourceLocation(2, 4)


class TestUnknownTypes:
    """Unknown or missing discriminators."""

    def test_missing_type(self) -> None:
        with pytest.raises(UnrecognizedNodeTypeError, match="None"):
            from_dict({"content": "x"})

    def test_unknown_type_with_location(self) -> None:
        with pytest.raises(UnrecognizedNodeTypeError) as excinfo:
            from_dict({"type": "snargle", "location": {"line": 7, "col": 2}})
        assert excinfo.value.node_type == "snargle"
        assert excinfo.value.location == SourceLocation(7, 2)
        assert "7:2" in str(excinfo.value)

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "tag", "name": "p", "content": [{"type": "snargle"}]},
            {"type": "tag", "name": "p", "attrs": {"x": {"type": "snargle"}}},
            {"type": "code", "content": "x", "nodes": [{"type": "snargle"}]},
        ],
    )
    def test_nested(self, data: dict) -> None:
        with pytest.raises(UnrecognizedNodeTypeError):
            from_dict(data)

    def test_non_node_item(self) -> None:
        with pytest.raises(UnrecognizedNodeTypeError, match="int"):
            nodes_from_data([42])  # type: ignore[list-item]


class TestToDict:
    """Typed nodes to parser shape."""

    def test_tag(self) -> None:
        node = Tag(
            "p",
            attrs={"id": (Text("x"),)},
            content=(Code("y"),),
            location=_LOC,
        )
        assert to_dict(node) == {
            "type": "tag",
            "name": "p",
            "attrs": {"id": [{"type": "text", "content": "x"}]},
            "content": [{"type": "code", "content": "y"}],
            "location": {"line": 1, "col": 1},
        }

    def test_round_trip(self) -> None:
        nodes = (
            _tag("ul", _tag("li", Text("one")), Comment("c"), id="menu"),
            Code("x", nodes=(Text("a"), Text("b"))),
        )
        assert from_json(to_json(nodes)) == nodes

    def test_bare_node_attribute_value(self) -> None:
        attrs = {"title": Text("hi")}
        node = Tag("div", attrs=attrs, content=[Text("x")])  # type: ignore[arg-type]
        assert node.attrs == {"title": (Text("hi"),)}
        assert node.content == (Text("x"),)
        assert to_dict(node)["attrs"] == {"title": [{"type": "text", "content": "hi"}]}
        assert from_dict(to_dict(node)) == node

    def test_json_is_sorted(self) -> None:
        payload = json.loads(to_json([Text("x")]))
        assert payload == [{"content": "x", "type": "text"}]
        assert to_json([Text("x")]) == '[{"content": "x", "type": "text"}]'


class TestNodesFromData:
    """Mixed typed/dict input."""

    def test_mixed(self) -> None:
        nodes = nodes_from_data([Text("a"), {"type": "text", "content": "b"}])
        assert nodes == (Text("a"), Text("b"))

    def test_from_json_single_object(self) -> None:
        assert from_json('{"type": "comment", "content": "x"}') == (Comment("x"),)
