"""Command framework data models."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import TypeAdapter

from infrastructure.commands.exceptions import DuplicateArgumentError


class TokenFormat(Enum):
    """Delimiter style a token was scanned with."""

    UNQUOTED_WORD = "unquoted_word"
    DOUBLE_QUOTED = "double_quoted"
    SINGLE_QUOTED = "single_quoted"
    INLINE_CODE = "inline_code"
    CODE_BLOCK = "code_block"


class ArgKind(Enum):
    """Kinds of argument a command can declare.

    Declaring a kind coerces the token to the matching Python type and raises
    ArgumentTypeError if that is not possible.
    """

    ANY = "any"  # no coercion
    BOOLEAN = "boolean"
    CODE = "code"  # inline code or code block, value unchanged
    STRING = "string"
    FLOAT = "float"
    INT = "int"  # positive or negative whole number
    UINT = "uint"  # positive whole number
    USER = "user"  # user id, passed through as a string


@dataclass(frozen=True)
class Token:
    """One lexical unit of raw command text.

    Attributes:
        value: Token text with its delimiters removed
        format: TokenFormat that produced the token
        language: Language tag, only for CODE_BLOCK tokens that declare one
    """

    value: Any
    format: TokenFormat
    language: Optional[str] = None

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BoundArgument(Token):
    """A token paired with its schema entry.

    ``value`` holds the coerced (and transformed) value: ``int`` for INT/UINT,
    ``float`` for FLOAT, ``bool`` for BOOLEAN, the raw string otherwise.
    Tokens past the end of the schema keep ``name`` and ``kind`` unset.
    """

    name: Optional[str] = None
    kind: Optional[ArgKind] = None


Validator = Union[TypeAdapter, Callable[[Any], Any]]


@dataclass
class Argument:
    """Positional argument schema entry.

    Attributes:
        name: Argument name, unique within a command
        kind: ArgKind used for coercion (None binds as ANY)
        validator: pydantic TypeAdapter, or a predicate returning False /
            raising ValueError on invalid values
        transform: Callable receiving the coerced BoundArgument and returning
            the new value
        required: Whether the dispatcher must see this argument
        description: Human-readable description

    Examples:
        Argument("count", kind=ArgKind.UINT,
                 validator=TypeAdapter(Annotated[int, Field(le=400)]))
        Argument("target", kind=ArgKind.USER, required=True)
    """

    name: str
    kind: Optional[ArgKind] = None
    validator: Optional[Validator] = None
    transform: Optional[Callable[[BoundArgument], Any]] = None
    required: bool = False
    description: str = ""


def check_unique_names(args: List[Argument]) -> None:
    """Raise DuplicateArgumentError if two entries share a name."""
    seen = set()
    for arg in args:
        if arg.name in seen:
            raise DuplicateArgumentError(arg.name)
        seen.add(arg.name)


def _normalize(name: str, case_sensitive: bool) -> str:
    return name if case_sensitive else name.lower()


@dataclass
class CommandDefinition:
    """Command definition passed to the registry at construction time.

    Attributes:
        name: Command name
        handler: Callable invoked as ``handler(ctx, args)``; may be async
        aliases: Alternate names for the command
        args: Positional Argument schema, order defines binding
        guards: Guard instances run before the command executes
        subcommands: Nested commands keyed by name
        description: Human-readable description

    Example:
        ban = CommandDefinition(
            name="ban",
            handler=ban_user,
            args=[Argument("user", kind=ArgKind.USER, required=True)],
            guards=[RequireAdmin()],
        )
    """

    name: str
    handler: Optional[Callable] = None
    aliases: List[str] = field(default_factory=list)
    args: List[Argument] = field(default_factory=list)
    guards: List[Any] = field(default_factory=list)
    subcommands: Dict[str, "CommandDefinition"] = field(default_factory=dict)
    description: str = ""

    def __post_init__(self):
        """Validate the schema and collapse repeated guards."""
        check_unique_names(self.args)
        unique_guards: List[Any] = []
        for guard in self.guards:
            if guard not in unique_guards:
                unique_guards.append(guard)
        self.guards = unique_guards

    def compose(self, *others: "CommandDefinition") -> "CommandDefinition":
        """Return a new definition with the args, guards, aliases and
        subcommands of ``others`` merged into this one.

        Raises:
            DuplicateArgumentError: If the merged schema repeats a name
        """
        aliases = list(self.aliases)
        args = list(self.args)
        guards = list(self.guards)
        subcommands = dict(self.subcommands)
        for other in others:
            aliases.extend(a for a in other.aliases if a not in aliases)
            args.extend(other.args)
            guards.extend(other.guards)
            subcommands.update(other.subcommands)
        return replace(
            self,
            aliases=aliases,
            args=args,
            guards=guards,
            subcommands=subcommands,
        )

    def add_subcommand(self, subcommand: "CommandDefinition") -> None:
        """Add a nested subcommand."""
        self.subcommands[subcommand.name] = subcommand

    def matches(self, name: str, case_sensitive: bool = False) -> bool:
        """Check whether ``name`` is this command's name or one of its aliases."""
        wanted = _normalize(name, case_sensitive)
        return any(
            _normalize(candidate, case_sensitive) == wanted
            for candidate in [self.name, *self.aliases]
        )

    def get_subcommand(
        self, name: str, case_sensitive: bool = False
    ) -> Optional["CommandDefinition"]:
        """Find a direct subcommand by name or alias."""
        for subcommand in self.subcommands.values():
            if subcommand.matches(name, case_sensitive):
                return subcommand
        return None

    def get_required_args(self) -> List[Argument]:
        """Get required positional arguments."""
        return [arg for arg in self.args if arg.required]
