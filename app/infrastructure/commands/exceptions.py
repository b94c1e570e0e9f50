"""Custom exceptions for the command framework.

Binding errors are raised at the point of failure and abort the rest of the
binding for that invocation. Callers (usually the dispatcher's caller) catch
``CommandError`` and present a user-facing message.
"""

from typing import Any, Iterable, Optional


class CommandError(Exception):
    """Base exception for all command framework errors.

    Example:
        try:
            await dispatcher.dispatch(text, ctx)
        except CommandError as e:
            ctx.respond(str(e))
    """

    pass


class CommandRegistrationError(CommandError):
    """Raised when a command definition cannot be registered."""

    pass


class DuplicateArgumentError(CommandError):
    """Raised when two schema entries of one command share a name.

    Example:
        >>> CommandDefinition(name="x", args=[Argument("a"), Argument("a")])
        Traceback (most recent call last):
        ...
        DuplicateArgumentError: Duplicate argument name: a
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate argument name: {name}")


class ArgumentTypeError(CommandError, TypeError):
    """Raised when a token cannot be coerced to its declared kind.

    Attributes:
        value: The offending raw value
        kind: The ArgKind the value was being coerced to
    """

    def __init__(self, value: Any, kind: Any, message: Optional[str] = None):
        self.value = value
        self.kind = kind
        kind_name = getattr(kind, "name", kind)
        super().__init__(
            message
            or f"Invalid type. Type {value} is not assignable to type {kind_name}"
        )


class ArgumentValidationError(CommandError, ValueError):
    """Raised when a custom validator rejects an otherwise coerced value."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class MissingArgumentError(CommandError):
    """Raised when required arguments were not supplied."""

    def __init__(self, command: str, names: Iterable[str]):
        self.command = command
        self.names = list(names)
        super().__init__(
            f"Missing required argument(s) for {command}: {', '.join(self.names)}"
        )


class GuardRejectedError(CommandError):
    """Raised when a guard refuses to let a command run."""

    def __init__(self, command: str, guard: Any):
        self.command = command
        self.guard = guard
        super().__init__(f"Command {command} rejected by {type(guard).__name__}")
