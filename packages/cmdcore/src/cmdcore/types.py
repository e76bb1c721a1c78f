"""
Core type definitions for the command console.

A TypeDefinition turns the raw text of one argument into a typed value through
four stages: transform -> validate / validate_once -> autocomplete -> parse.
Only ``parse`` is required. Stage callables may be plain functions or
coroutine functions.

The defaults for absent stages are defined here, once:
- transform: the candidate is the raw text itself
- validate / validate_once: every value is valid
- autocomplete: no suggestions
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, FrozenSet, List, Optional, Tuple, Union

# Stage results may be awaitables
StageResult = Union[Any, Awaitable[Any]]
Stage = Callable[..., StageResult]

# Transformed values are always carried as a tuple of candidates
Candidates = Tuple[Any, ...]


async def maybe_await(value: StageResult) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value


def normalize_validation(result: Any, default_message: str) -> Tuple[bool, Optional[str]]:
    """
    Normalize what a validate stage returned into ``(ok, message)``.

    Accepts ``True``/``False``, ``None`` (valid) or an ``(ok, message)`` tuple.
    """
    if result is None:
        return True, None
    if isinstance(result, tuple):
        ok = bool(result[0]) if result else True
        message = result[1] if len(result) > 1 else None
        if ok:
            return True, None
        return False, message or default_message
    if result:
        return True, None
    return False, default_message


def as_candidates(value: Any) -> Candidates:
    """Transform may return one value or several; carry them as a tuple."""
    if isinstance(value, tuple):
        return value
    return (value,)


@dataclass(frozen=True)
class TypeDefinition:
    """A pluggable argument type."""

    name: str
    parse: Stage
    transform: Optional[Stage] = None
    validate: Optional[Stage] = None
    validate_once: Optional[Stage] = None
    autocomplete: Optional[Stage] = None
    greedy: bool = False  # Can consume several raw tokens
    listable: bool = False  # Raw text is a separated list
    description: str = ""

    async def run_transform(self, raw_text: str, executor: Any) -> Candidates:
        if self.transform is None:
            return (raw_text,)
        return as_candidates(await maybe_await(self.transform(raw_text, executor)))

    async def run_validate(self, candidates: Candidates) -> Tuple[bool, Optional[str]]:
        if self.validate is None:
            return True, None
        result = await maybe_await(self.validate(*candidates))
        return normalize_validation(result, f"Invalid {self.name}.")

    async def run_validate_once(self, candidates: Candidates) -> Tuple[bool, Optional[str]]:
        if self.validate_once is None:
            return True, None
        result = await maybe_await(self.validate_once(*candidates))
        return normalize_validation(result, f"Invalid {self.name}.")

    async def run_autocomplete(self, candidates: Candidates) -> List[str]:
        if self.autocomplete is None:
            return []
        suggestions = await maybe_await(self.autocomplete(*candidates))
        return [str(s) for s in suggestions or []]

    async def run_parse(self, candidates: Candidates) -> Any:
        return await maybe_await(self.parse(*candidates))


@dataclass(frozen=True)
class ArgSpec:
    """Declared shape of one command argument."""

    type: str
    name: str
    description: str = ""
    optional: bool = False
    default: Optional[str] = None
    greedy: bool = False  # Consumes all remaining tokens (last argument only)


@dataclass(frozen=True)
class CommandDefinition:
    """Definition of a console command."""

    name: str
    aliases: FrozenSet[str] = field(default_factory=frozenset)
    description: str = ""
    group: str = "General"
    args: Tuple[ArgSpec, ...] = ()
    has_server_implementation: bool = True

    def __post_init__(self):
        # Accept lists from callers but keep the definition immutable
        object.__setattr__(self, "aliases", frozenset(self.aliases))
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def names(self) -> List[str]:
        """Canonical name followed by aliases, all lowercase."""
        seen = [self.name.lower()]
        for alias in sorted(self.aliases):
            if alias.lower() not in seen:
                seen.append(alias.lower())
        return seen

    @property
    def usage(self) -> str:
        """Usage line built from the argument specs."""
        parts = [self.name]
        for arg in self.args:
            label = f"{arg.name}..." if arg.greedy else arg.name
            parts.append(f"[{label}]" if arg.optional else f"<{label}>")
        return " ".join(parts)


# Command implementations receive (CommandContext, *parsed_values)
Implementation = Callable[..., StageResult]
