"""Command framework for platform-agnostic chat command handling.

This framework provides:
- tokenize: Split raw argument text into quoted, code and bare-word tokens
- ArgumentBinder: Bind tokens to a positional schema with typed coercion
- ArgumentSet: Cursor over parsed arguments plus lookup by name
- CommandDefinition / CommandRegistry: Declare and discover commands
- Guard: Checks that run before a command executes
- CommandDispatcher: Route message text to the right handler

Example:
    from infrastructure.commands import (
        ArgKind, Argument, ArgumentSet, CommandContext,
        CommandDispatcher, CommandRegistry, RequireAdmin,
    )

    registry = CommandRegistry("moderation")

    @registry.command(
        name="purge",
        args=[Argument("count", kind=ArgKind.UINT, required=True)],
        guards=[RequireAdmin()],
    )
    async def purge(ctx: CommandContext, args: ArgumentSet):
        ctx.respond(f"Deleting {args.get('count').value} messages")

    dispatcher = CommandDispatcher(registry)
    await dispatcher.dispatch("!purge 20", ctx)
"""

from infrastructure.commands.models import (
    ArgKind,
    Argument,
    BoundArgument,
    CommandDefinition,
    Token,
    TokenFormat,
)
from infrastructure.commands.exceptions import (
    ArgumentTypeError,
    ArgumentValidationError,
    CommandError,
    CommandRegistrationError,
    DuplicateArgumentError,
    GuardRejectedError,
    MissingArgumentError,
)
from infrastructure.commands.tokenizer import tokenize
from infrastructure.commands.coercion import to_boolean
from infrastructure.commands.binder import ArgumentBinder, bind_arguments
from infrastructure.commands.arguments import ArgumentCursor, ArgumentSet
from infrastructure.commands.context import CommandContext, ResponseChannel
from infrastructure.commands.guards import (
    DisabledCommand,
    Guard,
    RequireAdmin,
    run_guards,
)
from infrastructure.commands.registry import CommandRegistry
from infrastructure.commands.dispatcher import CommandDispatcher, DispatchResult

__all__ = [
    # Models
    "ArgKind",
    "Argument",
    "BoundArgument",
    "CommandDefinition",
    "Token",
    "TokenFormat",
    # Errors
    "ArgumentTypeError",
    "ArgumentValidationError",
    "CommandError",
    "CommandRegistrationError",
    "DuplicateArgumentError",
    "GuardRejectedError",
    "MissingArgumentError",
    # Parsing
    "tokenize",
    "to_boolean",
    "ArgumentBinder",
    "bind_arguments",
    "ArgumentCursor",
    "ArgumentSet",
    # Execution
    "CommandContext",
    "ResponseChannel",
    "Guard",
    "RequireAdmin",
    "DisabledCommand",
    "run_guards",
    "CommandRegistry",
    "CommandDispatcher",
    "DispatchResult",
]
