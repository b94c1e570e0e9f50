"""Guards: checks that run before a command executes.

For nested commands A -> B -> C, every guard of A must pass before B is
considered, and every guard of B before C.

Custom guards subclass ``Guard`` and implement ``check``:

    class InChannel(Guard):
        def __init__(self, channel_id: str):
            self.channel_id = channel_id

        async def check(self, ctx: CommandContext) -> bool:
            return ctx.channel_id == self.channel_id
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext

logger = get_module_logger()


class Guard(ABC):
    """Base class all guards derive from.

    Two guards are equal when they are the same class with the same
    attributes, so repeating a guard on a command only runs it once.
    """

    @abstractmethod
    async def check(self, ctx: CommandContext) -> bool:
        """Return True if the user in ``ctx`` may run the command."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RequireAdmin(Guard):
    """Require the user running the command to be a bot administrator.

    Admins default to ``settings.commands.admin_ids`` (COMMAND_ADMINS).
    """

    def __init__(self, admins: Optional[Iterable[str]] = None):
        self.admins = list(admins) if admins is not None else None

    async def check(self, ctx: CommandContext) -> bool:
        admins = (
            self.admins if self.admins is not None else settings.commands.admin_ids
        )
        return ctx.user_id in admins


class DisabledCommand(Guard):
    """Always refuses. Disables a command for every user."""

    async def check(self, ctx: CommandContext) -> bool:
        return False


async def run_guards(guards: List[Guard], ctx: CommandContext) -> Optional[Guard]:
    """Run ``guards`` in order.

    Returns:
        The first guard that rejected, or None if all passed
    """
    for guard in guards:
        if not await guard.check(ctx):
            logger.info(
                "guard_rejected",
                guard=type(guard).__name__,
                user_id=ctx.user_id,
                correlation_id=ctx.correlation_id,
            )
            return guard
    return None
