"""Property-based tests for generation using Hypothesis.

These tests verify invariants that should hold for any input:
1. Text-only trees render the exact concatenation of their texts
2. Empty tags follow the self_closing option
3. Indentation grows by one level per nesting depth
4. Generated source is deterministic
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from markgen import ALWAYS_BODY_TAGS, Code, Tag, Text, generate

tag_names = st.from_regex(r"[a-z][a-z0-9-]{0,8}", fullmatch=True).filter(
    lambda name: name not in ALWAYS_BODY_TAGS
)
identifiers = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True).filter(
    lambda name: name not in {"locals", "if", "in", "is", "or", "and", "not", "for", "def"}
)


class TestTextProperties:
    """Text-only trees."""

    @given(texts=st.lists(st.text(), max_size=8))
    @settings(max_examples=100)
    def test_text_only_concatenation(self, texts: list[str]) -> None:
        render = generate([Text(text) for text in texts])
        assert render() == "".join(texts)

    @given(texts=st.lists(st.text(), max_size=5), values=st.dictionaries(identifiers, st.text()))
    @settings(max_examples=50)
    def test_locals_do_not_affect_text(self, texts: list[str], values: dict[str, str]) -> None:
        render = generate([Text(text) for text in texts])
        assert render(values) == "".join(texts)


class TestSelfClosingProperties:
    """Empty tags under every option."""

    @given(name=tag_names)
    @settings(max_examples=50)
    def test_slash(self, name: str) -> None:
        assert generate([Tag(name)], {"self_closing": "slash"})() == f"{name} /"

    @given(name=tag_names, mode=st.sampled_from(["tag", "close"]))
    @settings(max_examples=50)
    def test_tag_and_close(self, name: str, mode: str) -> None:
        assert generate([Tag(name)], {"self_closing": mode})() == name


class TestStructureProperties:
    """Nesting and expressions."""

    @given(names=st.lists(tag_names, min_size=1, max_size=6))
    @settings(max_examples=50)
    def test_indentation_per_depth(self, names: list[str]) -> None:
        tree: Tag | None = None
        for name in reversed(names):
            tree = Tag(name, content=(tree,) if tree is not None else ())
        assert tree is not None

        lines = generate([tree])().split("\n")
        assert len(lines) == len(names)
        for depth, (line, name) in enumerate(zip(lines, names, strict=True)):
            assert line == "  " * depth + name

    @given(values=st.lists(st.text(), min_size=1, max_size=5))
    @settings(max_examples=50)
    def test_adjacent_code_joins_values(self, values: list[str]) -> None:
        names = [f"v{index}" for index in range(len(values))]
        render = generate([Code(name) for name in names])
        assert render(dict(zip(names, values, strict=True))) == "".join(values)

    @given(
        name=tag_names,
        key=tag_names,
        text=st.text(max_size=10),
        expression=identifiers,
    )
    @settings(max_examples=50)
    def test_source_is_deterministic(self, name: str, key: str, text: str, expression: str) -> None:
        tree = [Tag(name, attrs={key: (Text(text), Code(expression))}, content=(Code(expression),))]
        options = {"return_string": True}
        assert generate(tree, options) == generate(tree, options)
