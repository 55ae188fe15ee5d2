"""Tree walker: serialize markgen AST into indented template text.

Walks the tree depth-first and produces a flat tuple of *chunks*. A chunk is
either literal output text or a placeholder for something only known at
render time:

- ``Expression``: a code node's source plus its pre-walked ``__nodes`` list
- ``Attribute``: an attribute whose value contains expressions, rendered as
  ``key="value"`` or as a bare ``key`` when the value resolves empty

The compiler stitches chunks into a render function. Literal chunks already
carry all indentation, shorthand and self-closing decisions.

Output dialect:

    div#main.wide(data-x="1")
      p hello world
      | trailing text
      // a comment
      br /

Thread Safety:
All per-walk state (the line list) is local to each walk() call. A single
TreeWalker can be shared across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from markgen.errors import UnrecognizedNodeTypeError
from markgen.nodes import Code, Comment, Node, Tag, Text

# Tags rendered without a self-closing marker even when empty
ALWAYS_BODY_TAGS: frozenset[str] = frozenset(
    {"canvas", "iframe", "script", "style", "template", "textarea", "title"}
)

INDENT = "  "


@dataclass(frozen=True, slots=True)
class Expression:
    """Placeholder for a code node, resolved at render time.

    Attributes:
        source: Python expression source, as written in the code node
        nodes: One chunk tuple per side-list entry, exposed as ``__nodes[i]``

    """

    source: str
    nodes: tuple[tuple[Chunk, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class Attribute:
    """Attribute with a dynamic value.

    Rendered as ``name="value"``, or as ``name`` alone when the joined
    value is empty at render time.

    """

    name: str
    parts: tuple[Chunk, ...]


Chunk = str | Expression | Attribute


class TreeWalker:
    """Serialize AST nodes into a chunk sequence.

    Usage:
        >>> walker = TreeWalker(self_closing="slash")
        >>> walker.walk([Tag("br")])
        ('br /',)
        >>> walker.walk([Text("hi "), Code("name")])
        ('hi ', Expression(source='name', nodes=()))

    """

    __slots__ = ("_self_closing",)

    def __init__(self, self_closing: str = "tag") -> None:
        self._self_closing = self_closing

    def walk(self, nodes: Sequence[Node]) -> tuple[Chunk, ...]:
        """Walk a node sequence into coalesced chunks.

        Raises:
            UnrecognizedNodeTypeError: At the first node, at any depth,
                that is not a tag, text, code or comment node.
        """
        lines: list[list[Chunk]] = []
        self._render_content(nodes, 0, lines, None)
        return _coalesce(_join_lines(lines))

    # -- Sequences -------------------------------------------------------------

    def _render_content(
        self,
        nodes: Sequence[Node],
        depth: int,
        lines: list[list[Chunk]],
        head: list[Chunk] | None,
    ) -> None:
        """Render a sibling sequence at ``depth``.

        ``head`` is the parent tag's line; the leading inline run is appended
        to it. At the top level there is no head and the run gets its own
        bare line.
        """
        mixed = any(not isinstance(node, (Text, Code)) for node in nodes)
        run: list[Chunk] = []
        leading = True

        for node in nodes:
            match node:
                case Text(content=content):
                    run.append(content)
                    continue
                case Code():
                    run.append(self._expression(node))
                    continue
                case Tag():
                    self._flush(run, depth, lines, head, leading, mixed)
                    self._render_tag(node, depth, lines)
                case Comment(content=content):
                    self._flush(run, depth, lines, head, leading, mixed)
                    lines.append([INDENT * depth, "// ", content])
                case _:
                    raise UnrecognizedNodeTypeError(
                        getattr(node, "type", type(node).__name__),
                        getattr(node, "location", None),
                    )
            run = []
            leading = False

        self._flush(run, depth, lines, head, leading, mixed)

    def _flush(
        self,
        run: list[Chunk],
        depth: int,
        lines: list[list[Chunk]],
        head: list[Chunk] | None,
        leading: bool,
        mixed: bool,
    ) -> None:
        """Emit a run of inline chunks."""
        if not run:
            return
        # Formatting whitespace between block siblings
        if mixed and all(isinstance(chunk, str) and not chunk.strip() for chunk in run):
            return
        if leading and head is not None:
            head.append(" ")
            head.extend(run)
        elif leading:
            lines.append([INDENT * depth, *run])
        else:
            lines.append([INDENT * depth, "| ", *run])

    # -- Tags ------------------------------------------------------------------

    def _render_tag(self, node: Tag, depth: int, lines: list[list[Chunk]]) -> None:
        head: list[Chunk] = [INDENT * depth, *self._head(node)]
        lines.append(head)

        if _is_empty(node.content):
            if self._self_closing == "slash" and node.name not in ALWAYS_BODY_TAGS:
                head.append(" /")
            return

        self._render_content(node.content, depth + 1, lines, head)

    def _head(self, node: Tag) -> list[Chunk]:
        """Tag name with ``#id``/``.class`` shorthand and attribute list."""
        parts: list[Chunk] = [node.name]
        attrs = dict(node.attrs)

        ident = _static_value(attrs.get("id"))
        if ident and not any(ch.isspace() for ch in ident):
            parts.append(f"#{ident}")
            del attrs["id"]

        classes = _static_value(attrs.get("class"))
        if classes is not None and classes.split():
            parts.append("".join(f".{name}" for name in classes.split()))
            del attrs["class"]

        if attrs:
            parts.append("(")
            for index, (key, values) in enumerate(attrs.items()):
                if index:
                    parts.append(" ")
                parts.append(self._attribute(key, values))
            parts.append(")")
        return parts

    def _attribute(self, key: str, values: tuple[Node, ...]) -> Chunk:
        parts: list[Chunk] = []
        for value in values:
            match value:
                case Text(content=content):
                    parts.append(content)
                case Code():
                    parts.append(self._expression(value))
                case _:
                    parts.extend(self.walk([value]))

        if all(isinstance(part, str) for part in parts):
            text = "".join(parts)  # type: ignore[arg-type]
            return f'{key}="{text}"' if text else key
        return Attribute(key, _coalesce(parts))

    # -- Code ------------------------------------------------------------------

    def _expression(self, node: Code) -> Expression:
        return Expression(node.content, tuple(self.walk([sub]) for sub in node.nodes))


def _static_value(values: tuple[Node, ...] | None) -> str | None:
    """Content of a lone text value, or None for anything dynamic or multi-valued."""
    if values is not None and len(values) == 1 and isinstance(values[0], Text):
        return values[0].content
    return None


def _is_empty(content: Sequence[Node]) -> bool:
    return all(isinstance(node, Text) and not node.content.strip() for node in content)


def _join_lines(lines: list[list[Chunk]]) -> list[Chunk]:
    chunks: list[Chunk] = []
    for index, line in enumerate(lines):
        if index:
            chunks.append("\n")
        chunks.extend(line)
    return chunks


def _coalesce(chunks: Iterable[Chunk]) -> tuple[Chunk, ...]:
    """Merge adjacent literal chunks and drop empty ones."""
    result: list[Chunk] = []
    for chunk in chunks:
        if isinstance(chunk, str):
            if not chunk:
                continue
            if result and isinstance(result[-1], str):
                result[-1] = result[-1] + chunk
                continue
        result.append(chunk)
    return tuple(result)
