"""
Console

Owns everything one console needs: the registry, the name cache, the
identity lookup and the dispatcher. The name cache lives as long as the
console; ``shutdown`` clears it.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from .builtin_types import register_builtin_types
from .cache import MemoryNameCache, NameCache
from .config import ConsoleConfig, configure_logging
from .dispatcher import Dispatcher
from .hooks import HookCallback, HookName
from .identity import HttpIdentityResolver, IdentityLookup, IdentityResolver, Player
from .loader import CommandLoader
from .registry import Registry, get_registry
from .types import ArgSpec, CommandDefinition, Implementation, TypeDefinition

logger = logging.getLogger(__name__)

HELP_COMMAND = CommandDefinition(
    name="help",
    description="List commands, or describe one command.",
    group="Help",
    args=(ArgSpec("string", "topic", optional=True, greedy=True),),
)


class Console:
    """
    A command console.

    Usage:
        console = Console(ConsoleConfig.from_env(), players=server.get_players)
        console.start()
        console.register_command(kick_definition, cmd_kick)
        response = await console.run("kick bob", executor=admin)
    """

    def __init__(
        self,
        config: Optional[ConsoleConfig] = None,
        players: Optional[Callable[[], Iterable[Player]]] = None,
        resolver: Optional[IdentityResolver] = None,
        name_cache: Optional[NameCache] = None,
        registry: Optional[Registry] = None,
    ):
        self.config = config or ConsoleConfig()
        self.registry = registry or Registry()
        self.name_cache = name_cache or MemoryNameCache(
            max_size=self.config.name_cache_size,
            ttl_seconds=self.config.name_cache_ttl,
        )
        if resolver is None and self.config.identity_url:
            resolver = HttpIdentityResolver(
                self.config.identity_url, timeout=self.config.lookup_timeout
            )
        self.identity = IdentityLookup(resolver=resolver, cache=self.name_cache, players=players)
        self.dispatcher = Dispatcher(self.registry)
        self._started = False
        self._initialised = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self, implementations: Optional[dict] = None) -> None:
        """
        Register the built-in types, load declared commands and add ``help``.

        Registration happens on the first start only; starting again after
        ``shutdown`` just resumes the console.
        """
        if self._started:
            return
        configure_logging(self.config)

        if not self._initialised:
            register_builtin_types(self.registry, self.identity)
            if self.config.commands_path:
                CommandLoader(self.registry, implementations).load_path(self.config.commands_path)
            if self.registry.get_command(HELP_COMMAND.name) is None:
                self.registry.register_command(HELP_COMMAND, self._cmd_help)
            self._initialised = True

        self._started = True
        logger.info(f"Console started with {len(self.registry.get_commands())} commands")

    async def shutdown(self) -> None:
        """Forget cached identities and close remote clients."""
        await self.name_cache.clear()
        await self.identity.close()
        self._started = False
        logger.info("Console shutdown complete")

    def _cmd_help(self, context: Any, topic: Optional[str]) -> str:
        return self.dispatcher.get_help(topic or "")

    # =========================================================================
    # Registration
    # =========================================================================

    def register_type(self, name: str, definition: TypeDefinition) -> None:
        self.registry.register_type(name, definition)

    def register_command(
        self, definition: CommandDefinition, implementation: Optional[Implementation] = None
    ) -> None:
        self.registry.register_command(definition, implementation)

    def add_hook(self, hook: HookName, callback: HookCallback) -> None:
        self.registry.add_hook(hook, callback)

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def run(self, raw_text: str, executor: Any) -> str:
        return await self.dispatcher.run(raw_text, executor)

    async def suggest(self, partial_text: str, executor: Any) -> List[str]:
        return await self.dispatcher.suggest(partial_text, executor)

    def get_help(self, topic: str = "") -> str:
        return self.dispatcher.get_help(topic)


# Global console instance
_console: Optional[Console] = None


def get_console() -> Console:
    """
    Get the global console, configured from the environment.

    It dispatches against the global registry, so commands registered with
    the ``command`` decorator are available to it.
    """
    global _console
    if _console is None:
        _console = Console(ConsoleConfig.from_env(), registry=get_registry())
    return _console
