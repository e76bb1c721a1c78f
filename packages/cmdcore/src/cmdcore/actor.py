"""
Console Actor

Ray actor exposing a console to other processes in the cluster, so every
front-end can submit input to one shared set of commands.
"""

import importlib
import logging
from typing import Any, Callable, Iterable, List, Optional

import ray
from ray.actor import ActorHandle

from .config import ConsoleConfig
from .console import Console
from .constants import CONSOLE_ACTOR, NAMESPACE
from .identity import Player

logger = logging.getLogger(__name__)


class ConsoleService:
    """
    Serves ``run``/``suggest``/``get_help`` for one console.

    ``setup`` is called with the name of a module that defines
    ``register(console)``; the service calls it with its own console. Each
    service owns a separate registry, so commands registered on the global
    registry with ``cmdcore.command`` are not seen here (use ``get_console``).
    """

    def __init__(
        self,
        config: Optional[ConsoleConfig] = None,
        players: Optional[Callable[[], Iterable[Player]]] = None,
    ):
        self._console = Console(config or ConsoleConfig.from_env(), players=players)
        self._console.start()

    @property
    def console(self) -> Console:
        return self._console

    def setup(self, module_name: str) -> int:
        """Import a command module and let it register. Returns command count."""
        module = importlib.import_module(module_name)
        register = getattr(module, "register", None)
        if register is not None:
            register(self._console)
        count = len(self._console.registry.get_commands())
        logger.info(f"Console set up from {module_name}: {count} commands")
        return count

    async def run(self, raw_text: str, executor: Any) -> str:
        return await self._console.run(raw_text, executor)

    async def suggest(self, partial_text: str, executor: Any) -> List[str]:
        return await self._console.suggest(partial_text, executor)

    async def get_help(self, topic: str = "") -> str:
        return self._console.get_help(topic)

    async def shutdown(self) -> None:
        await self._console.shutdown()


ConsoleActor = ray.remote(ConsoleService)


# ============================================================================
# Actor Management
# ============================================================================

_console_actor: Optional[ActorHandle] = None


def get_console_actor() -> ActorHandle:
    """Get the named console actor."""
    global _console_actor
    if _console_actor is None:
        _console_actor = ray.get_actor(CONSOLE_ACTOR, namespace=NAMESPACE)
    return _console_actor  # type: ignore[return-value]


async def start_console_actor(config: Optional[ConsoleConfig] = None) -> ActorHandle:
    """Start the console actor (detached, reused if it already exists)."""
    global _console_actor

    actor: ActorHandle = ConsoleActor.options(
        name=CONSOLE_ACTOR,
        namespace=NAMESPACE,
        lifetime="detached",
        get_if_exists=True,
    ).remote(config)  # type: ignore[assignment]

    _console_actor = actor
    logger.info(f"Registered console actor at: {CONSOLE_ACTOR}")
    return actor
