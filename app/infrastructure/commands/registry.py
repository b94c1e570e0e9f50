"""Command registry for registration and discovery."""

from typing import Callable, Dict, Iterator, List, Optional

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.exceptions import CommandRegistrationError
from infrastructure.commands.models import Argument, CommandDefinition

logger = get_module_logger()


class CommandRegistry:
    """Registry for command registration and discovery.

    Commands are found by name or by any of their aliases.

    Attributes:
        namespace: Namespace for the registry (e.g., "moderation", "fun")
        case_sensitive: Whether lookups respect case
        _commands: Dict of registered commands keyed by name

    Example:
        registry = CommandRegistry("moderation")

        @registry.command(
            name="ban",
            aliases=["b"],
            args=[Argument("user", kind=ArgKind.USER, required=True)],
            guards=[RequireAdmin()],
        )
        async def ban(ctx: CommandContext, args: ArgumentSet):
            ...

        registry.get("b")  # CommandDefinition(name="ban", ...)
    """

    def __init__(self, namespace: str = "", case_sensitive: Optional[bool] = None):
        """Initialize registry.

        Args:
            namespace: Namespace for commands
            case_sensitive: Override for COMMAND_CASE_SENSITIVE
        """
        self.namespace = namespace
        self.case_sensitive = (
            case_sensitive
            if case_sensitive is not None
            else settings.commands.CASE_SENSITIVE
        )
        self._commands: Dict[str, CommandDefinition] = {}

    def register(
        self, definition: CommandDefinition, name: Optional[str] = None
    ) -> "CommandRegistry":
        """Register a command definition.

        Args:
            definition: Command to register
            name: Key to register under, defaults to the command's name

        Returns:
            The registry, for chaining

        Raises:
            CommandRegistrationError: If the command has no name
        """
        key = name or definition.name
        if not key:
            raise CommandRegistrationError(
                f"Command with handler {definition.handler!r} could not be "
                "registered as it does not have a name"
            )

        if key in self._commands:
            logger.warning("command_replaced", namespace=self.namespace, name=key)
        self._commands[key] = definition
        logger.debug("registered command", namespace=self.namespace, name=key)
        return self

    def command(
        self,
        name: str,
        aliases: Optional[List[str]] = None,
        args: Optional[List[Argument]] = None,
        guards: Optional[List] = None,
        subcommands: Optional[List[CommandDefinition]] = None,
        description: str = "",
    ) -> Callable:
        """Decorator to register a command with handler.

        Args:
            name: Command name
            aliases: Alternate names
            args: Positional Argument schema
            guards: Guards run before the handler
            subcommands: Nested command definitions
            description: Human-readable description

        Returns:
            Decorator function that registers the handler

        Raises:
            DuplicateArgumentError: If ``args`` repeats a name
        """

        def decorator(handler: Callable) -> Callable:
            definition = CommandDefinition(
                name=name,
                handler=handler,
                aliases=aliases or [],
                args=args or [],
                guards=guards or [],
                description=description,
            )
            for subcommand in subcommands or []:
                definition.add_subcommand(subcommand)
            self.register(definition)
            return handler

        return decorator

    def subcommand(
        self,
        parent_name: str,
        name: str,
        aliases: Optional[List[str]] = None,
        args: Optional[List[Argument]] = None,
        guards: Optional[List] = None,
        description: str = "",
    ) -> Callable:
        """Decorator to register a subcommand of an already registered command.

        Raises:
            ValueError: If parent command not found
        """

        def decorator(handler: Callable) -> Callable:
            parent = self.get(parent_name)
            if parent is None:
                raise ValueError(
                    f"Parent command '{parent_name}' not found in {self.namespace}"
                )

            parent.add_subcommand(
                CommandDefinition(
                    name=name,
                    handler=handler,
                    aliases=aliases or [],
                    args=args or [],
                    guards=guards or [],
                    description=description,
                )
            )
            logger.debug(
                "registered subcommand",
                namespace=self.namespace,
                parent=parent_name,
                name=name,
            )
            return handler

        return decorator

    def get(self, name: str) -> Optional[CommandDefinition]:
        """Find a top-level command by its name or one of its aliases."""
        for definition in self._commands.values():
            if definition.matches(name, self.case_sensitive):
                return definition
        return None

    def list_commands(self) -> List[CommandDefinition]:
        """Get all registered commands."""
        return list(self._commands.values())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self._commands.values())
