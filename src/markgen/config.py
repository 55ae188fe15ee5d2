"""Generator options and their ContextVar-held defaults.

Options are a frozen dataclass passed explicitly to ``generate()``. When a
call passes no options, the generator reads the default for the current
context, so hosts can scope defaults without process-wide state.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from markgen import GeneratorOptions, generate

    render = generate(nodes, GeneratorOptions(self_closing="slash"))

    # Or scope defaults for a block of calls
    with generator_options_context(GeneratorOptions(scoped_locals=True)):
        render = generate(nodes)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Literal

from markgen.errors import InvalidOptionError

SelfClosing = Literal["close", "tag", "slash"]

# Listed in the order error messages name them
SELF_CLOSING_CHOICES: tuple[str, ...] = ("close", "tag", "slash")

DEFAULT_RUNTIME_NAME = "__runtime"

# camelCase spellings used by JavaScript-era pipeline configs
_ALIASES: dict[str, str] = {
    "runtimeName": "runtime_name",
    "selfClosing": "self_closing",
    "returnString": "return_string",
    "scopedLocals": "scoped_locals",
}


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Immutable generator configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Note: the runtime binding is intentionally excluded. It is per-call
    state and is passed to ``generate()`` directly.

    Attributes:
        runtime_name: Name the runtime binding is exposed under in expressions
        self_closing: Rendering of tags without content: ``"slash"`` appends
            `` /``; ``"tag"`` and ``"close"`` both emit the bare name
        return_string: Return the render module's source text instead of
            the compiled function
        scoped_locals: Expose locals as a single ``locals`` container
            instead of as free names

    """

    runtime_name: str = DEFAULT_RUNTIME_NAME
    self_closing: SelfClosing = "tag"
    return_string: bool = False
    scoped_locals: bool = False

    def validate(self, key: str = "self_closing") -> None:
        """Check enumerated option values.

        Args:
            key: Spelling of the option to name in the error, e.g.
                ``"selfClosing"`` when the caller passed the camelCase key

        Raises:
            InvalidOptionError: If ``self_closing`` is not a legal value.
        """
        if self.self_closing not in SELF_CLOSING_CHOICES:
            raise InvalidOptionError(key, self.self_closing, SELF_CLOSING_CHOICES)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "GeneratorOptions":
        """Create GeneratorOptions from a dictionary.

        Useful for pipeline integration where options arrive as plain
        mappings. Accepts field names and their camelCase spellings;
        unknown keys are silently ignored. Values are not validated here.

        Args:
            config_dict: Dictionary with option values.

        Returns:
            New GeneratorOptions instance with values from dict.

        Example:
            >>> options = GeneratorOptions.from_dict({
            ...     "selfClosing": "slash",
            ...     "scoped_locals": True,
            ...     "plugins": ["ignored"],
            ... })
            >>> options.self_closing
            'slash'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _ALIASES.get(key, key)
            if name in valid_fields:
                filtered[name] = value
        return cls(**filtered)



def option_key(options: object, name: str) -> str:
    """Key the caller used for field ``name`` in a mapping of options.

    Falls back to the field name for dataclass options or absent keys. When
    both spellings are present the later one wins, as in ``from_dict``.
    """
    key = name
    if isinstance(options, Mapping):
        for candidate in options:
            if _ALIASES.get(candidate, candidate) == name:
                key = candidate
    return key

# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: GeneratorOptions = GeneratorOptions()

_generator_options: ContextVar[GeneratorOptions] = ContextVar(
    "generator_options",
    default=_DEFAULT_OPTIONS,
)


def get_generator_options() -> GeneratorOptions:
    """Get the default options for the current context."""
    return _generator_options.get()


def set_generator_options(options: GeneratorOptions) -> None:
    """Set the default options for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _generator_options.set(options)


def reset_generator_options() -> None:
    """Reset the current context to the built-in defaults."""
    _generator_options.set(_DEFAULT_OPTIONS)


@contextmanager
def generator_options_context(options: GeneratorOptions) -> Iterator[None]:
    """Context manager for temporary default options.

    Args:
        options: GeneratorOptions to use within the context.

    Example:
        >>> with generator_options_context(GeneratorOptions(self_closing="slash")):
        ...     generate([Tag("br")])()
        'br /'

    Thread Safety:
        Only affects the current thread's context. Properly restores the
        previous options even if an exception is raised.

    """
    previous = _generator_options.get()
    _generator_options.set(options)
    try:
        yield
    finally:
        _generator_options.set(previous)


__all__ = [
    "DEFAULT_RUNTIME_NAME",
    "SELF_CLOSING_CHOICES",
    "GeneratorOptions",
    "SelfClosing",
    "generator_options_context",
    "get_generator_options",
    "option_key",
    "reset_generator_options",
    "set_generator_options",
]
