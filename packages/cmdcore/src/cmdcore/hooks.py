"""
Hook Chains

A hook chain is an ordered list of callbacks run at a named point of a
dispatch. Callbacks receive the CommandContext and run in registration order.
The first callback that returns a non-empty string short-circuits the chain:
that string becomes the response and later callbacks are skipped.

BeforeRun and AfterRun are the core hook points. Any other name is an
extension point that callers may run themselves.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

from .errors import HookFailure
from .types import maybe_await

logger = logging.getLogger(__name__)


class HookPoint(str, Enum):
    """Core hook points run by the dispatcher."""

    BEFORE_RUN = "BeforeRun"
    AFTER_RUN = "AfterRun"


HookName = Union[HookPoint, str]
HookCallback = Callable[[Any], Any]


def hook_key(name: HookName) -> str:
    """Storage key for a hook name."""
    if isinstance(name, HookPoint):
        return name.value
    return str(name)


async def run_hook_chain(
    hook: HookName,
    callbacks: Sequence[HookCallback],
    context: Any,
) -> Optional[str]:
    """
    Run ``callbacks`` in order against ``context``.

    Returns the first non-empty string result, or None if every callback
    returned nothing. Raises HookFailure if a callback raises.
    """
    name = hook_key(hook)
    for callback in callbacks:
        try:
            result = await maybe_await(callback(context))
        except Exception as e:
            command = getattr(getattr(context, "command", None), "name", "")
            logger.error(f"{name} hook {callback!r} failed for {command}: {e}")
            raise HookFailure(name, command, e) from e

        if not result:
            continue
        logger.debug(f"{name} hook short-circuited with: {result}")
        return str(result)
    return None
