"""Feature-level fixtures for command framework tests."""

from unittest.mock import MagicMock
import pytest

from infrastructure.commands.binder import ArgumentBinder
from infrastructure.commands.registry import CommandRegistry
from tests.factories.commands import (
    make_argument,
    make_command,
    make_command_context,
)


@pytest.fixture
def argument_factory():
    """Factory for Argument schema entries."""
    return make_argument


@pytest.fixture
def command_factory():
    """Factory for CommandDefinition instances."""
    return make_command


@pytest.fixture
def command_context_factory():
    """Factory for CommandContext instances.

    Returns:
        Callable that creates CommandContext with default or custom values
    """
    return make_command_context


@pytest.fixture
def command_registry_factory():
    """Factory for CommandRegistry instances, case-insensitive by default."""

    def _factory(namespace: str = "test", case_sensitive: bool = False):
        return CommandRegistry(namespace, case_sensitive=case_sensitive)

    return _factory


@pytest.fixture
def argument_binder():
    """ArgumentBinder instance for binding tests."""
    return ArgumentBinder()


@pytest.fixture
def mock_response_channel():
    """Mock ResponseChannel for CommandContext.

    Returns:
        MagicMock with send_message and send_ephemeral methods
    """
    channel = MagicMock()
    channel.send_message = MagicMock()
    channel.send_ephemeral = MagicMock()
    return channel
