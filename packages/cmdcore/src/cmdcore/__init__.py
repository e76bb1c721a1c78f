"""
Command Console Core

Turns a line of typed text into a validated, typed call of a registered
command.

Key concepts:
- Types: four-stage pipelines (transform, validate, autocomplete, parse)
- Commands: named definitions with ordered, typed arguments
- Hooks: BeforeRun/AfterRun chains where the first non-empty result wins
- Dispatcher: tokenize, resolve, bind, validate, run; never raises

Flow:
    "kick bob spamming"
        │ tokenize + resolve command
        ▼
    CommandContext ── ArgumentContext per argument
        │ transform → validate → parse
        ▼
    BeforeRun hooks → implementation → AfterRun hooks
        │
        ▼
    response text
"""

import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from .types import ArgSpec, CommandDefinition, TypeDefinition  # noqa: E402

from .errors import (  # noqa: E402
    ConsoleError,
    RegistrationError,
    DuplicateRegistrationError,
    DuplicateTypeError,
    DuplicateCommandError,
    UnknownTypeError,
    InvalidCommandError,
    DispatchError,
    UnknownCommandError,
    MissingArgumentError,
    TooManyArgumentsError,
    TypeValidationError,
    AmbiguousMatchError,
    ImplementationFailure,
    HookFailure,
)

from .registry import Registry, command, get_registry  # noqa: E402
from .hooks import HookPoint, run_hook_chain  # noqa: E402
from .parser import CommandParser, ParsedCommand, tokenize  # noqa: E402
from .context import ArgumentContext, CommandContext  # noqa: E402
from .fuzzy import FuzzyFinder, Matches, get_names, make_fuzzy_finder  # noqa: E402
from .adapters import make_enum_type, make_listable_type  # noqa: E402
from .cache import MemoryNameCache, NameCache  # noqa: E402

from .identity import (  # noqa: E402
    DirectoryIdentityResolver,
    HttpIdentityResolver,
    IdentityLookup,
    IdentityResolver,
    LookupResult,
    LookupStatus,
    Player,
)

from .builtin_types import (  # noqa: E402
    make_player_id_type,
    register_builtin_types,
    register_player_types,
)
from .dispatcher import Dispatcher, bind_arguments  # noqa: E402
from .config import ConsoleConfig, configure_logging  # noqa: E402
from .loader import CommandLoader  # noqa: E402
from .console import Console, get_console  # noqa: E402

__all__ = [
    # Types
    "ArgSpec",
    "CommandDefinition",
    "TypeDefinition",
    # Errors
    "ConsoleError",
    "RegistrationError",
    "DuplicateRegistrationError",
    "DuplicateTypeError",
    "DuplicateCommandError",
    "UnknownTypeError",
    "InvalidCommandError",
    "DispatchError",
    "UnknownCommandError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "TypeValidationError",
    "AmbiguousMatchError",
    "ImplementationFailure",
    "HookFailure",
    # Registry and hooks
    "Registry",
    "command",
    "get_registry",
    "HookPoint",
    "run_hook_chain",
    # Parsing and contexts
    "CommandParser",
    "ParsedCommand",
    "tokenize",
    "ArgumentContext",
    "CommandContext",
    # Matching and adapters
    "FuzzyFinder",
    "Matches",
    "get_names",
    "make_fuzzy_finder",
    "make_enum_type",
    "make_listable_type",
    # Identities
    "MemoryNameCache",
    "NameCache",
    "DirectoryIdentityResolver",
    "HttpIdentityResolver",
    "IdentityLookup",
    "IdentityResolver",
    "LookupResult",
    "LookupStatus",
    "Player",
    "make_player_id_type",
    "register_builtin_types",
    "register_player_types",
    # Dispatch
    "Dispatcher",
    "bind_arguments",
    "ConsoleConfig",
    "configure_logging",
    "CommandLoader",
    "Console",
    "get_console",
]
