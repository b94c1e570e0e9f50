"""Unit tests for ArgumentBinder."""

from typing import Annotated
from unittest.mock import MagicMock

import pytest
from pydantic import Field, TypeAdapter

from infrastructure.commands.binder import bind_arguments
from infrastructure.commands.exceptions import (
    ArgumentTypeError,
    ArgumentValidationError,
)
from infrastructure.commands.models import (
    ArgKind,
    BoundArgument,
    Token,
    TokenFormat,
)
from infrastructure.commands.tokenizer import tokenize


@pytest.mark.unit
class TestBinderPositional:
    """Tests for positional pairing of tokens and schema entries."""

    def test_tokens_pair_with_entries_by_position(
        self, argument_binder, argument_factory
    ):
        """Token i is named after schema entry i."""
        schema = [argument_factory(name="first"), argument_factory(name="second")]

        bound = argument_binder.bind(tokenize("a b"), schema)

        assert [(b.name, b.value) for b in bound] == [("first", "a"), ("second", "b")]

    def test_entry_without_kind_binds_as_any(self, argument_binder, argument_factory):
        """No declared kind means ANY and no coercion."""
        bound = argument_binder.bind(tokenize("42"), [argument_factory(name="x")])

        assert bound[0].kind is ArgKind.ANY
        assert bound[0].value == "42"

    def test_extra_tokens_pass_through(self, argument_binder, argument_factory):
        """Tokens past the schema keep their raw value and no name or kind."""
        bound = argument_binder.bind(
            tokenize("1 two 'three'"), [argument_factory(name="n", kind=ArgKind.INT)]
        )

        assert len(bound) == 3
        assert bound[0].value == 1
        assert bound[1].name is None and bound[1].kind is None
        assert bound[1].value == "two"
        assert bound[2].format is TokenFormat.SINGLE_QUOTED

    def test_missing_tokens_are_not_synthesized(
        self, argument_binder, argument_factory
    ):
        """A schema longer than the input binds only the tokens present."""
        schema = [
            argument_factory(name="a"),
            argument_factory(name="b", required=True),
        ]

        bound = argument_binder.bind(tokenize("only"), schema)

        assert len(bound) == 1

    def test_format_and_language_are_preserved(
        self, argument_binder, argument_factory
    ):
        """Binding copies the token's format and language."""
        bound = argument_binder.bind(
            tokenize("```py\nx = 1```"), [argument_factory(name="code")]
        )

        assert bound[0].format is TokenFormat.CODE_BLOCK
        assert bound[0].language == "py"

    def test_source_tokens_are_not_mutated(self, argument_binder, argument_factory):
        """Coercion produces new objects."""
        tokens = tokenize("5")

        argument_binder.bind(tokens, [argument_factory(name="n", kind=ArgKind.UINT)])

        assert tokens[0] == Token("5", TokenFormat.UNQUOTED_WORD)

    def test_empty_input(self, argument_binder, argument_factory):
        """No tokens bind to an empty list."""
        assert argument_binder.bind([], [argument_factory(name="a")]) == []


@pytest.mark.unit
class TestBinderCoercion:
    """Tests for kind coercion."""

    def test_uint(self, argument_binder, argument_factory):
        """UINT parses a non-negative integer."""
        bound = argument_binder.bind(
            tokenize("5"), [argument_factory(name="n", kind=ArgKind.UINT)]
        )

        assert bound[0].value == 5
        assert isinstance(bound[0].value, int)

    @pytest.mark.parametrize("raw", ["-1", "abc"])
    def test_uint_rejects(self, argument_binder, argument_factory, raw):
        """Negative or non-numeric input is not a UINT."""
        with pytest.raises(ArgumentTypeError, match="not assignable to type UINT"):
            argument_binder.bind(
                tokenize(raw), [argument_factory(name="n", kind=ArgKind.UINT)]
            )

    def test_int(self, argument_binder, argument_factory):
        """INT accepts negative integers."""
        bound = argument_binder.bind(
            tokenize("-7"), [argument_factory(name="n", kind=ArgKind.INT)]
        )

        assert bound[0].value == -7

    def test_int_rejects_with_value_and_kind(self, argument_binder, argument_factory):
        """The error carries the raw value and target kind."""
        with pytest.raises(ArgumentTypeError) as exc:
            argument_binder.bind(
                tokenize("seven"), [argument_factory(name="n", kind=ArgKind.INT)]
            )

        assert exc.value.value == "seven"
        assert exc.value.kind is ArgKind.INT
        assert str(exc.value) == (
            "Invalid type. Type seven is not assignable to type INT"
        )

    @pytest.mark.parametrize("raw, expected", [("0x1F", 31), ("-0x1F", -31)])
    def test_int_accepts_hex(self, argument_binder, argument_factory, raw, expected):
        """INT understands a 0x prefix."""
        bound = argument_binder.bind(
            tokenize(raw), [argument_factory(name="n", kind=ArgKind.INT)]
        )

        assert bound[0].value == expected

    @pytest.mark.parametrize("kind", [ArgKind.INT, ArgKind.UINT])
    @pytest.mark.parametrize("raw", ["0x", "\u0663"])
    def test_int_rejects_bare_hex_prefix_and_non_ascii_digits(
        self, argument_binder, argument_factory, raw, kind
    ):
        """A hex prefix needs digits, and only ASCII digits count."""
        with pytest.raises(ArgumentTypeError):
            argument_binder.bind(tokenize(raw), [argument_factory(name="n", kind=kind)])

    def test_uint_accepts_hex_and_rejects_negative_hex(
        self, argument_binder, argument_factory
    ):
        """UINT applies the sign check after hex parsing."""
        schema = [argument_factory(name="n", kind=ArgKind.UINT)]

        assert argument_binder.bind(tokenize("0x1F"), schema)[0].value == 31

        with pytest.raises(ArgumentTypeError):
            argument_binder.bind(tokenize("-0x1F"), schema)

    def test_float(self, argument_binder, argument_factory):
        """FLOAT parses floating point numbers."""
        bound = argument_binder.bind(
            tokenize("3.14"), [argument_factory(name="x", kind=ArgKind.FLOAT)]
        )

        assert bound[0].value == 3.14

    def test_float_rejects(self, argument_binder, argument_factory):
        """Non-numeric input is not a FLOAT."""
        with pytest.raises(ArgumentTypeError, match="type FLOAT"):
            argument_binder.bind(
                tokenize("pi"), [argument_factory(name="x", kind=ArgKind.FLOAT)]
            )

    @pytest.mark.parametrize("raw, expected", [("yes", True), ("F", False)])
    def test_boolean(self, argument_binder, argument_factory, raw, expected):
        """BOOLEAN uses the loose boolean rules."""
        bound = argument_binder.bind(
            tokenize(raw), [argument_factory(name="b", kind=ArgKind.BOOLEAN)]
        )

        assert bound[0].value is expected

    def test_boolean_rejects(self, argument_binder, argument_factory):
        """Unrecognized words are not booleans."""
        with pytest.raises(ArgumentTypeError, match="type BOOLEAN"):
            argument_binder.bind(
                tokenize("maybe"), [argument_factory(name="b", kind=ArgKind.BOOLEAN)]
            )

    @pytest.mark.parametrize("raw", ["`x`", "```\nx\n```"])
    def test_code_accepts_code_tokens(self, argument_binder, argument_factory, raw):
        """CODE accepts inline code and code blocks unchanged."""
        bound = argument_binder.bind(
            tokenize(raw), [argument_factory(name="c", kind=ArgKind.CODE)]
        )

        assert bound[0].value == "x"

    @pytest.mark.parametrize("raw", ["x", '"x"'])
    def test_code_rejects_other_tokens(self, argument_binder, argument_factory, raw):
        """Words and quoted strings are not CODE."""
        with pytest.raises(ArgumentTypeError, match="type CODE"):
            argument_binder.bind(
                tokenize(raw), [argument_factory(name="c", kind=ArgKind.CODE)]
            )

    @pytest.mark.parametrize("kind", [ArgKind.STRING, ArgKind.USER, ArgKind.ANY])
    def test_passthrough_kinds(self, argument_binder, argument_factory, kind):
        """STRING, USER and ANY keep the raw string."""
        bound = argument_binder.bind(
            tokenize("<@123>"), [argument_factory(name="v", kind=kind)]
        )

        assert bound[0].value == "<@123>"
        assert bound[0].kind is kind

    def test_first_failure_aborts(self, argument_binder, argument_factory):
        """Later entries are not processed after a failure."""
        transform = MagicMock(return_value="x")
        schema = [
            argument_factory(name="n", kind=ArgKind.INT),
            argument_factory(name="s", transform=transform),
        ]

        with pytest.raises(ArgumentTypeError):
            argument_binder.bind(tokenize("nope ok"), schema)

        transform.assert_not_called()

    def test_rebinding_coerced_values_is_a_noop(
        self, argument_binder, argument_factory
    ):
        """Already coerced arguments bind to themselves."""
        schema = [
            argument_factory(name="u", kind=ArgKind.UINT),
            argument_factory(name="i", kind=ArgKind.INT),
            argument_factory(name="f", kind=ArgKind.FLOAT),
            argument_factory(name="b", kind=ArgKind.BOOLEAN),
            argument_factory(name="c", kind=ArgKind.CODE),
            argument_factory(name="s", kind=ArgKind.STRING),
        ]
        first = argument_binder.bind(tokenize("5 -3 2.5 yes `c` s"), schema)

        second = argument_binder.bind(first, schema)

        assert second == first
        assert [b.value for b in second] == [5, -3, 2.5, True, "c", "s"]


@pytest.mark.unit
class TestBinderTransformAndValidation:
    """Tests for transforms and validators."""

    def test_transform_receives_coerced_argument(
        self, argument_binder, argument_factory
    ):
        """The transform sees the coerced BoundArgument and replaces its value."""
        seen = []

        def double(arg):
            seen.append(arg)
            return arg.value * 2

        bound = argument_binder.bind(
            tokenize("21"),
            [argument_factory(name="n", kind=ArgKind.INT, transform=double)],
        )

        assert bound[0].value == 42
        assert isinstance(seen[0], BoundArgument)
        assert seen[0].value == 21
        assert seen[0].name == "n"

    def test_type_adapter_validator(self, argument_binder, argument_factory):
        """A pydantic TypeAdapter validates the final value."""
        validator = TypeAdapter(Annotated[int, Field(ge=0, le=400)])
        schema = [
            argument_factory(name="count", kind=ArgKind.UINT, validator=validator)
        ]

        assert argument_binder.bind(tokenize("400"), schema)[0].value == 400

        with pytest.raises(ArgumentValidationError, match="count") as exc:
            argument_binder.bind(tokenize("401"), schema)

        assert exc.value.name == "count"
        assert "less than or equal to 400" in str(exc.value)

    def test_predicate_validator(self, argument_binder, argument_factory):
        """A predicate returning False rejects the value."""
        schema = [
            argument_factory(name="word", validator=lambda v: v.isalpha()),
        ]

        assert argument_binder.bind(tokenize("abc"), schema)[0].value == "abc"

        with pytest.raises(ArgumentValidationError, match="word"):
            argument_binder.bind(tokenize("abc1"), schema)

    def test_validator_raising_value_error(self, argument_binder, argument_factory):
        """A ValueError from a validator carries its message."""

        def no_spaces(value):
            if " " in value:
                raise ValueError("must not contain spaces")

        schema = [argument_factory(name="slug", validator=no_spaces)]

        with pytest.raises(ArgumentValidationError, match="must not contain spaces"):
            argument_binder.bind(tokenize('"a b"'), schema)

    def test_validation_runs_after_transform(self, argument_binder, argument_factory):
        """Order is coerce, then transform, then validate."""
        schema = [
            argument_factory(
                name="n",
                kind=ArgKind.INT,
                transform=lambda arg: arg.value - 10,
                validator=TypeAdapter(Annotated[int, Field(ge=0)]),
            )
        ]

        assert argument_binder.bind(tokenize("15"), schema)[0].value == 5

        with pytest.raises(ArgumentValidationError):
            argument_binder.bind(tokenize("5"), schema)

    def test_transform_result_is_not_recoerced(
        self, argument_binder, argument_factory
    ):
        """A transform may change the value's type."""
        schema = [
            argument_factory(
                name="n", kind=ArgKind.INT, transform=lambda arg: str(arg.value)
            )
        ]

        assert bind_arguments(tokenize("3"), schema)[0].value == "3"
