"""Route inbound message text to registered command handlers."""

import inspect
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import structlog

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.arguments import ArgumentSet
from infrastructure.commands.context import CommandContext
from infrastructure.commands.exceptions import (
    CommandError,
    GuardRejectedError,
    MissingArgumentError,
)
from infrastructure.commands.guards import run_guards
from infrastructure.commands.models import CommandDefinition
from infrastructure.commands.registry import CommandRegistry

logger = get_module_logger()

_LEADING_WORD = re.compile(r"\s*(\S*)(.*)", re.DOTALL)


def _split_word(text: str) -> Tuple[str, str]:
    """Split ``text`` into its first whitespace-delimited word and the rest."""
    match = _LEADING_WORD.match(text)
    return match.group(1), match.group(2)


@dataclass
class DispatchResult:
    """Outcome of a dispatched command.

    Attributes:
        command: The (sub)command whose handler ran
        args: Arguments parsed for the handler
        result: Whatever the handler returned
    """

    command: CommandDefinition
    args: ArgumentSet
    result: Any = None


class CommandDispatcher:
    """Turn message text into a handler call.

    Steps:
    1. Ignore text that does not start with the command prefix
    2. Resolve the command by name or alias, then descend into subcommands
       while the next word names one
    3. Run the guards of each level, outermost first
    4. Parse the remaining text into an ArgumentSet using the command schema
    5. Reject missing required arguments
    6. Call ``handler(ctx, args)``, awaiting it if it is a coroutine

    Example:
        dispatcher = CommandDispatcher(registry)

        try:
            await dispatcher.dispatch("!config prefix ?", ctx)
        except CommandError as e:
            ctx.respond(str(e))
    """

    def __init__(self, registry: CommandRegistry, prefix: Optional[str] = None):
        """Initialize dispatcher.

        Args:
            registry: Registry to resolve commands from
            prefix: Override for COMMAND_PREFIX
        """
        self.registry = registry
        self.prefix = prefix if prefix is not None else settings.commands.PREFIX

    def resolve(self, text: str) -> Optional[Tuple[List[CommandDefinition], str]]:
        """Resolve the command chain addressed by ``text``.

        Args:
            text: Full message text, prefix included

        Returns:
            Tuple of (command chain from outermost to innermost, raw argument
            text), or None if the text is not a known command
        """
        text = text.strip()
        if not text.startswith(self.prefix):
            return None

        name, rest = _split_word(text[len(self.prefix) :])
        if not name:
            return None

        command = self.registry.get(name)
        if command is None:
            return None

        chain = [command]
        while True:
            word, remainder = _split_word(rest)
            subcommand = (
                command.get_subcommand(word, self.registry.case_sensitive)
                if word
                else None
            )
            if subcommand is None:
                break
            chain.append(subcommand)
            command = subcommand
            rest = remainder

        return chain, rest.strip()

    async def dispatch(
        self, text: str, ctx: CommandContext
    ) -> Optional[DispatchResult]:
        """Run the command addressed by ``text``.

        Args:
            text: Full message text, prefix included
            ctx: Context of the inbound message

        Returns:
            DispatchResult, or None if the text is not a known command

        Raises:
            GuardRejectedError: If a guard refuses the command
            ArgumentTypeError: If an argument cannot be coerced to its kind
            ArgumentValidationError: If a validator rejects an argument
            MissingArgumentError: If required arguments are absent
            CommandError: If the resolved command has no handler
        """
        resolved = self.resolve(text)
        if resolved is None:
            logger.debug("command_not_found", text=text[:80])
            return None

        chain, raw_args = resolved
        command = chain[-1]
        path = " ".join(level.name for level in chain)

        with structlog.contextvars.bound_contextvars(
            correlation_id=ctx.correlation_id, command=path
        ):
            try:
                return await self._execute(chain, raw_args, ctx)
            except CommandError as e:
                logger.warning(
                    "command_dispatch_failed",
                    command=command.name,
                    user_id=ctx.user_id,
                    error=str(e),
                )
                raise

    async def _execute(
        self, chain: List[CommandDefinition], raw_args: str, ctx: CommandContext
    ) -> DispatchResult:
        for level in chain:
            rejected = await run_guards(level.guards, ctx)
            if rejected is not None:
                raise GuardRejectedError(level.name, rejected)

        command = chain[-1]
        if command.handler is None:
            raise CommandError(f"Command {command.name} has no handler")

        args = ArgumentSet(raw_args, command.args)
        missing = args.missing_required()
        if missing:
            raise MissingArgumentError(command.name, [arg.name for arg in missing])

        result = command.handler(ctx, args)
        if inspect.isawaitable(result):
            result = await result

        logger.info("command_executed", command=command.name, user_id=ctx.user_id)
        return DispatchResult(command=command, args=args, result=result)
