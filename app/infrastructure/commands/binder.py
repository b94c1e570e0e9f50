"""Bind tokens to a positional argument schema."""

from dataclasses import replace
from typing import Any, List, Sequence

from pydantic import TypeAdapter, ValidationError

from core.logging import get_module_logger
from infrastructure.commands.coercion import parse_float, parse_int, to_boolean
from infrastructure.commands.exceptions import (
    ArgumentTypeError,
    ArgumentValidationError,
    CommandError,
)
from infrastructure.commands.models import (
    ArgKind,
    Argument,
    BoundArgument,
    Token,
    TokenFormat,
)

logger = get_module_logger()

PASSTHROUGH_KINDS = frozenset({ArgKind.ANY, ArgKind.STRING, ArgKind.USER})
CODE_FORMATS = frozenset({TokenFormat.CODE_BLOCK, TokenFormat.INLINE_CODE})


class ArgumentBinder:
    """Pair tokens with schema entries and coerce them to declared kinds.

    Token ``i`` is bound to schema entry ``i``. For each pair the value is
    coerced to the entry's kind, then passed through the entry's transform,
    then checked by its validator. Tokens past the end of the schema are
    passed through untouched. Missing required arguments are not checked
    here, the dispatcher does that.

    Example:
        binder = ArgumentBinder()
        bound = binder.bind(
            tokenize("5 yes"),
            [Argument("count", kind=ArgKind.UINT),
             Argument("force", kind=ArgKind.BOOLEAN)],
        )
        # bound[0].value == 5, bound[1].value is True
    """

    def bind(
        self, tokens: Sequence[Token], schema: Sequence[Argument]
    ) -> List[BoundArgument]:
        """Bind ``tokens`` against ``schema``.

        Args:
            tokens: Tokens produced by the tokenizer
            schema: Positional argument schema

        Returns:
            One BoundArgument per token, in token order

        Raises:
            ArgumentTypeError: If a token cannot be coerced to its kind
            ArgumentValidationError: If a validator rejects a value
        """
        bound: List[BoundArgument] = []
        for index, token in enumerate(tokens):
            if index >= len(schema):
                bound.append(self._passthrough(token))
                continue

            entry = schema[index]
            try:
                bound.append(self._bind_one(token, entry))
            except CommandError as e:
                logger.warning(
                    "argument_binding_failed",
                    argument=entry.name,
                    kind=entry.kind.name if entry.kind else None,
                    position=index,
                    error=str(e),
                )
                raise

        return bound

    def _passthrough(self, token: Token) -> BoundArgument:
        if isinstance(token, BoundArgument):
            return token
        return BoundArgument(token.value, token.format, token.language)

    def _bind_one(self, token: Token, entry: Argument) -> BoundArgument:
        kind = entry.kind or ArgKind.ANY
        arg = BoundArgument(
            value=token.value,
            format=token.format,
            language=token.language,
            name=entry.name,
            kind=kind,
        )
        arg = replace(arg, value=self._coerce(arg, kind))

        if entry.transform is not None:
            arg = replace(arg, value=entry.transform(arg))

        if entry.validator is not None:
            self._validate(entry, arg.value)

        return arg

    def _coerce(self, arg: BoundArgument, kind: ArgKind) -> Any:
        """Coerce ``arg.value`` to ``kind``.

        Raises:
            ArgumentTypeError: If coercion fails
        """
        value = arg.value

        if kind is ArgKind.UINT:
            number = parse_int(value)
            if number is None or number < 0:
                raise ArgumentTypeError(value, kind)
            return number

        if kind is ArgKind.INT:
            number = parse_int(value)
            if number is None:
                raise ArgumentTypeError(value, kind)
            return number

        if kind is ArgKind.FLOAT:
            number = parse_float(value)
            if number is None:
                raise ArgumentTypeError(value, kind)
            return number

        if kind is ArgKind.BOOLEAN:
            try:
                return to_boolean(value)
            except ArgumentTypeError as e:
                raise ArgumentTypeError(value, kind) from e

        if kind is ArgKind.CODE:
            if arg.format not in CODE_FORMATS:
                raise ArgumentTypeError(
                    value,
                    kind,
                    "Invalid type. Type STRING is not assignable to type CODE",
                )
            return value

        if kind in PASSTHROUGH_KINDS:
            return value

        raise ValueError(f"Unhandled argument kind: {kind}")

    def _validate(self, entry: Argument, value: Any) -> None:
        """Run the entry's validator, labelled with the entry name.

        Raises:
            ArgumentValidationError: If the validator rejects the value
        """
        validator = entry.validator

        if isinstance(validator, TypeAdapter):
            try:
                validator.validate_python(value)
            except ValidationError as e:
                message = e.errors()[0]["msg"]
                raise ArgumentValidationError(
                    entry.name, f"{entry.name}: {message}"
                ) from e
            return

        try:
            valid = validator(value)
        except (ValueError, TypeError) as e:
            raise ArgumentValidationError(entry.name, f"{entry.name}: {e}") from e

        if valid is False:
            raise ArgumentValidationError(
                entry.name, f"{entry.name}: invalid value {value}"
            )


def bind_arguments(
    tokens: Sequence[Token], schema: Sequence[Argument]
) -> List[BoundArgument]:
    """Shortcut for ``ArgumentBinder().bind(tokens, schema)``."""
    return ArgumentBinder().bind(tokens, schema)
