"""
Built-in Types

``string`` takes its raw text as-is and may consume several words.
``playerId`` resolves one player name to a user id, ``playerIds`` a
comma-separated list of them. Names of players who are offline still
resolve through the identity service.
"""

from typing import Any, List

from .adapters import make_listable_type
from .fuzzy import Matches, get_names, make_fuzzy_finder
from .identity import IdentityLookup
from .registry import Registry
from .types import TypeDefinition

PLAYER_NOT_FOUND = "No player with that name could be found."


def make_player_id_type(lookup: IdentityLookup) -> TypeDefinition:
    """Build the ``playerId`` type around an identity lookup."""

    def transform(text: str, executor: Any):
        find = make_fuzzy_finder(lookup.online_players())
        return text, find(text)

    async def validate_once(text: str, players: Matches):
        return await lookup.get_user_id(text) is not None, PLAYER_NOT_FOUND

    def autocomplete(text: str, players: Matches) -> List[str]:
        return get_names(players)

    async def parse(text: str, players: Matches):
        return await lookup.get_user_id(text)

    return TypeDefinition(
        name="playerId",
        parse=parse,
        transform=transform,
        validate_once=validate_once,
        autocomplete=autocomplete,
        description="A player name, online or not, resolved to a user id.",
    )


def register_player_types(registry: Registry, lookup: IdentityLookup) -> None:
    """Register ``playerId`` and ``playerIds``."""
    player_id = make_player_id_type(lookup)
    registry.register_type("playerId", player_id)
    registry.register_type("playerIds", make_listable_type(player_id, name="playerIds"))


STRING_TYPE = TypeDefinition(
    name="string",
    parse=lambda text: text,
    greedy=True,
    description="Free text.",
)


def register_builtin_types(registry: Registry, lookup: IdentityLookup) -> None:
    """Register ``string`` and the player types."""
    registry.register_type("string", STRING_TYPE)
    register_player_types(registry, lookup)
