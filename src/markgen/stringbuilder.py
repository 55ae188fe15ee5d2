"""StringBuilder for O(n) source accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. The compiler uses it to emit the render
module one indented line at a time.

Thread Safety:
StringBuilder instances are local to each compile call.
No shared mutable state.

"""

from __future__ import annotations

# Indentation unit for emitted Python source
INDENT = "    "


class StringBuilder:
    """Efficient line-oriented string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append_line("def render():")
            >>> sb.append_line("return ''", depth=1)
            >>> sb.build()
            "def render():\\n    return ''\\n"

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append_line(self, s: str = "", depth: int = 0) -> StringBuilder:
        """Append an indented line followed by newline.

        Args:
            s: Line content (empty = blank line, never indented)
            depth: Indentation level in units of ``INDENT``

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(INDENT * depth)
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def extend_lines(self, lines: list[str], depth: int = 0) -> StringBuilder:
        """Append several lines at the same depth.

        Returns:
            self for method chaining
        """
        for line in lines:
            self.append_line(line, depth)
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)
