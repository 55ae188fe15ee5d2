"""Top-level generation: AST in, render function (or its source) out.

    >>> from markgen import Code, Tag, Text, generate
    >>> render = generate([Tag("p", content=(Text("hello "), Code("planet")))])
    >>> render({"planet": "world"})
    'p hello world'

Order of work per call:
1. Resolve options (explicit, mapping, or context default) and validate
2. Convert parser dicts to typed nodes
3. Walk the tree into chunks
4. Compile chunks into a render module; execute it unless ``return_string``

Thread Safety:
    Every call builds its own walker state and compiler. The runtime binding
    is an explicit argument, never module state, so concurrent calls with
    different runtimes cannot interfere.

"""

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from markgen.compiler import Compiler, RenderFunction, compile_source
from markgen.config import GeneratorOptions, get_generator_options, option_key
from markgen.nodes import Node
from markgen.serialization import nodes_from_data
from markgen.utils.logger import get_logger
from markgen.walker import TreeWalker

logger = get_logger(__name__)

NodeInput = Sequence[Node | Mapping[str, Any]]


def resolve_options(options: GeneratorOptions | Mapping[str, Any] | None) -> GeneratorOptions:
    """Normalize the ``options`` argument of generate().

    None falls back to the current context's default options.
    """
    if options is None:
        return get_generator_options()
    if isinstance(options, GeneratorOptions):
        return options
    return GeneratorOptions.from_dict(options)


def generate(
    nodes: NodeInput,
    options: GeneratorOptions | Mapping[str, Any] | None = None,
    *,
    runtime: Any = None,
) -> RenderFunction | str:
    """Generate a render function from AST nodes.

    Args:
        nodes: Top-level nodes, typed or in parser dict form
        options: GeneratorOptions, a mapping of option values (snake_case or
            camelCase), or None for the context default
        runtime: Object exposed to expressions under ``options.runtime_name``

    Returns:
        ``render(locals=None) -> str``, or with ``return_string`` the source
        of a module defining it. Exec that source in a namespace holding the
        runtime under ``runtime_name`` to get the same function.

    Raises:
        InvalidOptionError: If an option value is illegal (before any walking)
        UnrecognizedNodeTypeError: If any node, at any depth, has an unknown type

    Example:
        >>> generate([Tag("br")], {"selfClosing": "slash"})()
        'br /'

        >>> source = generate([Text("hi")], {"returnString": True})
    """
    opts = resolve_options(options)
    opts.validate(option_key(options, "self_closing"))

    tree = nodes_from_data(nodes)
    chunks = TreeWalker(self_closing=opts.self_closing).walk(tree)

    compiler = Compiler(scoped_locals=opts.scoped_locals)
    source = compiler.compile(chunks)
    logger.debug(
        "Generated render module: %d top-level nodes, %d expressions",
        len(tree),
        compiler.expression_count,
    )

    if opts.return_string:
        return source
    return compile_source(source, runtime_name=opts.runtime_name, runtime=runtime)


class Generator:
    """Reusable generator bound to fixed options and runtime.

    Usage:
        >>> gen = Generator(self_closing="slash")
        >>> gen([Tag("img", attrs={"src": (Text("a.png"),)})])()
        'img(src="a.png") /'

        >>> # Options from a pipeline config
        >>> gen = Generator({"scopedLocals": True}, runtime=helpers)

    Thread Safety:
        Immutable after construction. Safe to share across threads.

    """

    __slots__ = ("_options", "_runtime")

    def __init__(
        self,
        options: GeneratorOptions | Mapping[str, Any] | None = None,
        *,
        runtime: Any = None,
        **overrides: Any,
    ) -> None:
        """Initialize generator.

        Args:
            options: Base options (same forms generate() accepts)
            runtime: Runtime binding for every generated function
            **overrides: Individual option values layered over ``options``

        Raises:
            InvalidOptionError: If the resulting options are illegal.
        """
        base = resolve_options(options)
        if overrides:
            base = dataclasses.replace(base, **overrides)
        if "self_closing" in overrides:
            base.validate()
        else:
            base.validate(option_key(options, "self_closing"))
        self._options = base
        self._runtime = runtime

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    def __call__(self, nodes: NodeInput) -> RenderFunction | str:
        """Generate a render function (or source) for ``nodes``."""
        return generate(nodes, self._options, runtime=self._runtime)
