"""Exception classes for markgen.

Generation fails in exactly two ways: a bad option value (caught before the
tree is walked) or a node whose type the walker does not know (caught at the
first offending node). Neither is recoverable at this layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markgen.location import SourceLocation


class GeneratorError(Exception):
    """Base exception for all markgen errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidOptionError(GeneratorError):
    """An option holds a value outside its enumerated choices.

    Raised by ``GeneratorOptions.validate()`` before any traversal starts.
    """

    def __init__(self, option: str, value: object, choices: Sequence[str]) -> None:
        """Initialize invalid option error.

        Args:
            option: Name of the option (e.g., "self_closing")
            value: The rejected value
            choices: Legal values, in the order they should be listed
        """
        self.option = option
        self.value = value
        self.choices = tuple(choices)

        quoted = [f"'{choice}'" for choice in self.choices]
        if len(quoted) > 1:
            listing = f"{', '.join(quoted[:-1])}, or {quoted[-1]}"
        else:
            listing = "".join(quoted)
        super().__init__(
            f"'{value}' is an invalid option for '{option}'. You can use {listing}"
        )


class UnrecognizedNodeTypeError(GeneratorError):
    """A node type the walker cannot render.

    Raised for unknown ``type`` discriminators in dict input and for
    ``Node`` subclasses outside the tag/text/code/comment set.
    """

    def __init__(self, node_type: object, location: SourceLocation | None = None) -> None:
        """Initialize unrecognized node type error.

        Args:
            node_type: The offending discriminator or class name
            location: Where the node came from (optional)
        """
        self.node_type = node_type
        self.location = location

        where = f" ({location})" if location is not None else ""
        super().__init__(f"Unrecognized node type '{node_type}'{where}")
