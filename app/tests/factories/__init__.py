"""Test data factories for deterministic test data generation."""

from tests.factories.commands import (
    make_argument,
    make_command,
    make_command_context,
)

__all__ = [
    "make_argument",
    "make_command",
    "make_command_context",
]
