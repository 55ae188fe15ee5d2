"""
markgen — Markup AST to indented template code generator

Walks a markup AST (tags, text, Python expressions, comments) and produces a
render function. Calling it with a mapping of locals evaluates the embedded
expressions and returns the indented template text.

Quick Start:
    >>> from markgen import Code, Tag, Text, generate
    >>> tree = [
    ...     Tag(
    ...         "p",
    ...         attrs={"id": (Text("intro"),), "class": (Text("lead wide"),)},
    ...         content=(Text("hello "), Code("planet"), Text("!")),
    ...     )
    ... ]
    >>> render = generate(tree)
    >>> render({"planet": "world"})
    'p#intro.lead.wide hello world!'

Parser output (dicts) works directly:
    >>> generate([{"type": "comment", "content": "note"}])()
    '// note'

Shipping the render function elsewhere:
    >>> source = generate(tree, {"return_string": True})
    >>> namespace = {}
    >>> exec(source, namespace)
    >>> namespace["render"]({"planet": "mars"})
    'p#intro.lead.wide hello mars!'

Installation:
    pip install markgen              # Zero runtime dependencies
    pip install markgen[test]        # + pytest and hypothesis
"""

from markgen.compiler import Compiler, RenderFunction, compile_source, render_source
from markgen.config import (
    DEFAULT_RUNTIME_NAME,
    SELF_CLOSING_CHOICES,
    GeneratorOptions,
    generator_options_context,
    get_generator_options,
    reset_generator_options,
    set_generator_options,
)
from markgen.errors import GeneratorError, InvalidOptionError, UnrecognizedNodeTypeError
from markgen.generator import Generator, generate
from markgen.location import SourceLocation
from markgen.nodes import Code, Comment, Node, Tag, Text
from markgen.serialization import from_dict, from_json, nodes_from_data, to_dict, to_json
from markgen.walker import ALWAYS_BODY_TAGS, Attribute, Expression, TreeWalker

__version__ = "0.1.0"


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "generate",
    "Generator",
    "RenderFunction",
    # Nodes
    "Node",
    "Tag",
    "Text",
    "Code",
    "Comment",
    "SourceLocation",
    # Walker + compiler
    "TreeWalker",
    "Expression",
    "Attribute",
    "ALWAYS_BODY_TAGS",
    "Compiler",
    "compile_source",
    "render_source",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "nodes_from_data",
    # Configuration (ContextVar-based)
    "GeneratorOptions",
    "DEFAULT_RUNTIME_NAME",
    "SELF_CLOSING_CHOICES",
    "get_generator_options",
    "set_generator_options",
    "reset_generator_options",
    "generator_options_context",
    # Errors
    "GeneratorError",
    "InvalidOptionError",
    "UnrecognizedNodeTypeError",
]
