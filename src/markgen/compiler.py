"""Render-function compiler.

Turns the walker's chunk sequence into the source of a small Python module
that defines ``render(locals=None)``, then (by default) executes it to get
the function itself.

Design Principles:
1. **Self-contained source**: the module needs nothing from markgen, so
   ``return_string`` callers can ship it anywhere and ``exec`` it
2. **Compile once**: expression sources are compiled at module load and
   evaluated per call
3. **Deterministic**: same chunks and options, byte-identical source

Generated module for ``p(foo="bar") hello {planet}!``:

    ```python
    _EXPRESSIONS = (
        compile('(planet\\n)', '<markgen expression 0>', 'eval'),
    )


    def render(locals=None):
        if locals is None:
            locals = {}
        scope = dict(globals())
        scope.update(locals)
        return ''.join((
            'p(foo="bar") hello ',
            str(eval(_EXPRESSIONS[0], scope)),
            '!',
        ))
    ```

Expression scope:
    Evaluation starts from the module globals, which is where the runtime
    binding lives. Unscoped mode layers every key of ``locals`` on top;
    scoped mode binds only ``locals``, a read-only wrapper that resolves
    both ``locals.name`` and ``locals["name"]`` from the passed mapping.
    Expressions with a ``nodes`` side list additionally see ``__nodes``,
    the rendered side-list entries.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from markgen.stringbuilder import StringBuilder
from markgen.walker import Attribute, Chunk, Expression

RenderFunction = Callable[..., str]

RENDER_FUNCTION_NAME = "render"

_LOCALS_CLASS = (
    "class _Locals:",
    "    __slots__ = ('_mapping',)",
    "",
    "    def __init__(self, mapping):",
    "        self._mapping = mapping",
    "",
    "    def __getattr__(self, name):",
    "        try:",
    "            return self._mapping[name]",
    "        except KeyError:",
    "            raise AttributeError(name) from None",
    "",
    "    def __getitem__(self, name):",
    "        return self._mapping[name]",
    "",
    "    def __contains__(self, name):",
    "        return name in self._mapping",
)

_ATTRIBUTE_HELPER = (
    "def _attribute(name, value):",
    "    if value:",
    "        return f'{name}=\"{value}\"'",
    "    return name",
)


class Compiler:
    """Compile a chunk sequence into render-module source.

    One Compiler instance compiles one template; it accumulates the
    expression table while emitting.

    Example:
        >>> source = Compiler().compile(("hello ", Expression("name")))
        >>> namespace = {}
        >>> exec(source, namespace)
        >>> namespace["render"]({"name": "world"})
        'hello world'

    """

    __slots__ = ("_expressions", "_scoped_locals", "_uses_attribute")

    def __init__(self, *, scoped_locals: bool = False) -> None:
        self._scoped_locals = scoped_locals
        self._expressions: list[str] = []
        self._uses_attribute = False

    @property
    def expression_count(self) -> int:
        return len(self._expressions)

    def compile(self, chunks: Sequence[Chunk]) -> str:
        """Return module source defining ``render(locals=None)``."""
        self._expressions = []
        self._uses_attribute = False

        # Body first: it fills the expression table and helper flags
        body = self._join(chunks)

        sb = StringBuilder()
        if self._expressions:
            sb.append_line("_EXPRESSIONS = (")
            for index, source in enumerate(self._expressions):
                wrapped = f"({source}\n)"
                sb.append_line(
                    f"compile({wrapped!r}, '<markgen expression {index}>', 'eval'),", depth=1
                )
            sb.append_line(")")
            sb.append_line()
            sb.append_line()
        if self._scoped_locals and self._expressions:
            sb.extend_lines(list(_LOCALS_CLASS))
            sb.append_line()
            sb.append_line()
        if self._uses_attribute:
            sb.extend_lines(list(_ATTRIBUTE_HELPER))
            sb.append_line()
            sb.append_line()

        sb.append_line(f"def {RENDER_FUNCTION_NAME}(locals=None):")
        if self._expressions:
            sb.append_line("if locals is None:", depth=1)
            sb.append_line("locals = {}", depth=2)
            sb.append_line("scope = dict(globals())", depth=1)
            if self._scoped_locals:
                sb.append_line("scope['locals'] = _Locals(locals)", depth=1)
            else:
                sb.append_line("scope.update(locals)", depth=1)
        sb.append_line(f"return {body}", depth=1)
        return sb.build()

    # -- Expressions -----------------------------------------------------------

    def _join(self, chunks: Sequence[Chunk]) -> str:
        """Python expression for the concatenation of ``chunks``."""
        parts = [self._chunk(chunk) for chunk in chunks]
        if not parts:
            return "''"
        if len(parts) == 1:
            return parts[0]
        return f"''.join(({', '.join(parts)},))"

    def _chunk(self, chunk: Chunk) -> str:
        match chunk:
            case str():
                return repr(chunk)
            case Expression(source=source, nodes=nodes):
                if not source.strip():
                    raise SyntaxError("empty expression in code node")
                index = len(self._expressions)
                self._expressions.append(source.strip())
                scope = "scope"
                if nodes:
                    rendered = ", ".join(self._join(entry) for entry in nodes)
                    scope = f"{{**scope, '__nodes': [{rendered}]}}"
                return f"str(eval(_EXPRESSIONS[{index}], {scope}))"
            case Attribute(name=name, parts=parts):
                self._uses_attribute = True
                return f"_attribute({name!r}, {self._join(parts)})"
        raise TypeError(f"Unexpected chunk: {chunk!r}")


def compile_source(
    source: str,
    *,
    runtime_name: str | None = None,
    runtime: Any = None,
    filename: str = "<markgen>",
) -> RenderFunction:
    """Execute render-module source and return its render function.

    Args:
        source: Module source from ``Compiler.compile``
        runtime_name: Global name to bind ``runtime`` under
        runtime: Runtime object; not bound when None
        filename: Filename for tracebacks

    Raises:
        SyntaxError: If an embedded expression is not valid Python.
    """
    namespace: dict[str, Any] = {}
    if runtime is not None and runtime_name:
        namespace[runtime_name] = runtime
    code = compile(source, filename, "exec")
    exec(code, namespace)
    return namespace[RENDER_FUNCTION_NAME]


def render_source(
    source: str,
    locals: Mapping[str, Any] | None = None,
    **bindings: Any,
) -> str:
    """Execute render-module source once with extra globals and render it.

    Convenience for hosts holding a ``return_string`` artifact:

        >>> render_source(source, {"name": "world"}, __runtime=runtime)

    """
    namespace: dict[str, Any] = dict(bindings)
    exec(compile(source, "<markgen>", "exec"), namespace)
    return namespace[RENDER_FUNCTION_NAME](dict(locals) if locals is not None else None)
