"""
Command Registry

Central registry for console commands, argument types and hooks.
Commands can be registered with decorators or manually.

The registry is filled during start-up and read by every dispatch afterwards.
Writes take a lock so a late registration cannot interleave with another;
reads are plain dictionary lookups.
"""

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional

from .errors import (
    DuplicateCommandError,
    DuplicateTypeError,
    InvalidCommandError,
    UnknownTypeError,
)
from .hooks import HookCallback, HookName, hook_key
from .types import ArgSpec, CommandDefinition, Implementation, TypeDefinition

logger = logging.getLogger(__name__)


class Registry:
    """
    Central registry for commands, types and hooks.

    Commands are looked up by name or alias, case-insensitively.
    """

    def __init__(self):
        self._commands: Dict[str, CommandDefinition] = {}  # name -> definition
        self._aliases: Dict[str, str] = {}  # alias -> command name
        self._implementations: Dict[str, Implementation] = {}
        self._types: Dict[str, TypeDefinition] = {}
        self._hooks: Dict[str, List[HookCallback]] = {}
        self._by_group: Dict[str, List[str]] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Types
    # =========================================================================

    def register_type(self, name: str, definition: TypeDefinition) -> None:
        """Register an argument type under ``name``."""
        key = name.lower()
        with self._lock:
            if key in self._types:
                raise DuplicateTypeError(name)
            self._types[key] = definition
        logger.debug(f"Registered type: {name}")

    def get_type(self, name: str) -> Optional[TypeDefinition]:
        """Get a type by name, or None."""
        return self._types.get(name.lower())

    def get_type_names(self) -> List[str]:
        return list(self._types.keys())

    # =========================================================================
    # Commands
    # =========================================================================

    def register_command(
        self,
        definition: CommandDefinition,
        implementation: Optional[Implementation] = None,
    ) -> None:
        """
        Register a command definition and, optionally, its implementation.

        Raises:
            DuplicateCommandError: the name or an alias is already taken
            UnknownTypeError: an argument names an unregistered type
            InvalidCommandError: a greedy argument is misplaced or unsupported
        """
        name = definition.name.lower()
        with self._lock:
            for key in definition.names:
                owner = self._owner_of(key)
                if owner is not None:
                    raise DuplicateCommandError(key, owner)

            self._check_args(definition)

            self._commands[name] = definition
            for alias in definition.names[1:]:
                self._aliases[alias] = name
            self._by_group.setdefault(definition.group, []).append(name)
            if implementation is not None:
                self._implementations[name] = implementation

        logger.debug(f"Registered command: {name}")

    def bind_implementation(self, command_name: str, implementation: Implementation) -> None:
        """Attach an implementation to an already registered command."""
        definition = self.get_command(command_name)
        if definition is None:
            raise InvalidCommandError(f"Cannot bind implementation: unknown command '{command_name}'.")
        with self._lock:
            self._implementations[definition.name.lower()] = implementation
        logger.debug(f"Bound implementation for command: {definition.name}")

    def get_command(self, command_name: str) -> Optional[CommandDefinition]:
        """Get a command by name or alias."""
        name = command_name.lower()

        # Check direct command
        if name in self._commands:
            return self._commands[name]

        # Check aliases
        if name in self._aliases:
            return self._commands[self._aliases[name]]

        return None

    def get_implementation(self, command_name: str) -> Optional[Implementation]:
        definition = self.get_command(command_name)
        if definition is None:
            return None
        return self._implementations.get(definition.name.lower())

    def get_commands(self) -> Dict[str, CommandDefinition]:
        """Get all registered commands."""
        return self._commands.copy()

    def get_groups(self) -> List[str]:
        return list(self._by_group.keys())

    def get_by_group(self, group: str) -> List[CommandDefinition]:
        """Get commands in a group, in registration order."""
        return [self._commands[name] for name in self._by_group.get(group, [])]

    def _owner_of(self, key: str) -> Optional[str]:
        if key in self._commands:
            return key
        return self._aliases.get(key)

    def _check_args(self, definition: CommandDefinition) -> None:
        args = definition.args
        for index, arg in enumerate(args):
            type_def = self.get_type(arg.type)
            if type_def is None:
                raise UnknownTypeError(arg.type, definition.name, arg.name)
            if not arg.greedy:
                continue
            if index != len(args) - 1:
                raise InvalidCommandError(
                    f"Argument '{arg.name}' of command '{definition.name}' is greedy "
                    "but is not the last argument."
                )
            if not type_def.greedy:
                raise InvalidCommandError(
                    f"Argument '{arg.name}' of command '{definition.name}' is greedy "
                    f"but type '{arg.type}' cannot take several words."
                )

    # =========================================================================
    # Hooks
    # =========================================================================

    def add_hook(self, hook: HookName, callback: HookCallback) -> None:
        """Append ``callback`` to the chain for ``hook``."""
        key = hook_key(hook)
        with self._lock:
            self._hooks.setdefault(key, []).append(callback)
        logger.debug(f"Added {key} hook: {callback!r}")

    def get_hooks(self, hook: HookName) -> List[HookCallback]:
        """Snapshot of the callbacks for ``hook`` in registration order."""
        return list(self._hooks.get(hook_key(hook), []))


# Global registry instance
_registry: Optional[Registry] = None


def get_registry() -> Registry:
    """Get the global registry."""
    global _registry
    if _registry is None:
        _registry = Registry()
    return _registry


def command(
    name: str,
    args: Iterable[ArgSpec] = (),
    aliases: Optional[Iterable[str]] = None,
    description: str = "",
    group: str = "General",
    registry: Optional[Registry] = None,
) -> Callable:
    """
    Decorator to register a command implementation.

    Usage:
        @command("kick", args=[ArgSpec("player", "target")], aliases=["boot"])
        async def cmd_kick(context: CommandContext, target) -> str:
            return f"Kicked {target.name}."
    """

    def decorator(func: Callable):
        definition = CommandDefinition(
            name=name,
            aliases=frozenset(aliases or []),
            description=description or func.__doc__ or "",
            group=group,
            args=tuple(args),
        )
        (registry or get_registry()).register_command(definition, func)
        return func

    return decorator
