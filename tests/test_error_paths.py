"""Error construction and failure-path tests."""

import pytest

from markgen import generate
from markgen.errors import GeneratorError, InvalidOptionError, UnrecognizedNodeTypeError
from markgen.location import SourceLocation

# =========================================================================
# InvalidOptionError
# =========================================================================


class TestInvalidOptionError:
    """Verify InvalidOptionError formatting and hierarchy."""

    def test_message_lists_choices(self) -> None:
        err = InvalidOptionError("self_closing", "snargle", ("close", "tag", "slash"))
        assert str(err) == (
            "'snargle' is an invalid option for 'self_closing'. "
            "You can use 'close', 'tag', or 'slash'"
        )

    def test_single_choice(self) -> None:
        err = InvalidOptionError("mode", "x", ("only",))
        assert str(err).endswith("You can use 'only'")

    def test_is_generator_error(self) -> None:
        assert isinstance(InvalidOptionError("a", "b", ("c",)), GeneratorError)


# =========================================================================
# UnrecognizedNodeTypeError
# =========================================================================


class TestUnrecognizedNodeTypeError:
    """Verify UnrecognizedNodeTypeError formatting and hierarchy."""

    def test_message_only(self) -> None:
        err = UnrecognizedNodeTypeError("snargle")
        assert str(err) == "Unrecognized node type 'snargle'"
        assert err.location is None

    def test_with_location(self) -> None:
        err = UnrecognizedNodeTypeError("snargle", SourceLocation(3, 4, "x.sgr"))
        assert str(err) == "Unrecognized node type 'snargle' (x.sgr:3:4)"

    def test_is_generator_error(self) -> None:
        assert isinstance(UnrecognizedNodeTypeError("x"), GeneratorError)


# =========================================================================
# No partial artifacts
# =========================================================================


class TestNoPartialOutput:
    """Failures raise; nothing is returned."""

    def test_return_string_still_raises(self) -> None:
        tree = [{"type": "text", "content": "ok"}, {"type": "snargle"}]
        with pytest.raises(UnrecognizedNodeTypeError):
            generate(tree, {"return_string": True})

    def test_catch_all_as_base_class(self) -> None:
        with pytest.raises(GeneratorError):
            generate([], {"self_closing": "nope"})
