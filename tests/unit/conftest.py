"""
Pytest fixtures for unit tests.

Provides a registry pre-loaded with a few simple types and helpers for
recording command calls.
"""

from typing import List

import pytest

from cmdcore import (
    ArgSpec,
    CommandDefinition,
    Dispatcher,
    Registry,
    TypeDefinition,
    make_enum_type,
    make_listable_type,
)


def _parse_integer(text: str) -> int:
    return int(text)


def _validate_integer(text: str):
    return text.lstrip("-").isdigit(), "Only whole numbers are valid."


INTEGER_TYPE = TypeDefinition(
    name="integer",
    parse=_parse_integer,
    validate=_validate_integer,
)

STRING_TYPE = TypeDefinition(name="string", parse=lambda text: text, greedy=True)

COLOR_TYPE = make_enum_type("color", ["red", "green", "blue", "black"])


class CallRecorder:
    """Implementation stand-in that records every call."""

    def __init__(self, response="ok"):
        self.calls: List[tuple] = []
        self.response = response

    def __call__(self, context, *args):
        self.calls.append((context, args))
        return self.response

    @property
    def called(self) -> bool:
        return bool(self.calls)


@pytest.fixture
def registry() -> Registry:
    registry = Registry()
    registry.register_type("integer", INTEGER_TYPE)
    registry.register_type("integers", make_listable_type(INTEGER_TYPE))
    registry.register_type("string", STRING_TYPE)
    registry.register_type("color", COLOR_TYPE)
    registry.register_type("colors", make_listable_type(COLOR_TYPE))
    return registry


@pytest.fixture
def dispatcher(registry) -> Dispatcher:
    return Dispatcher(registry)


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


def make_command(name: str, *args: ArgSpec, aliases=(), group: str = "General") -> CommandDefinition:
    return CommandDefinition(name=name, aliases=frozenset(aliases), group=group, args=tuple(args))
