"""
Dispatch Contexts

One CommandContext is built per dispatch attempt, with one ArgumentContext
per declared argument. Nothing here is shared between dispatches.

Each ArgumentContext runs its type's pipeline lazily and remembers the result
of every stage, so a stage runs at most once per context (validate excepted,
which is cheap and may be re-run for live feedback).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from .errors import DispatchError, TypeValidationError
from .types import ArgSpec, Candidates, CommandDefinition, TypeDefinition

logger = logging.getLogger(__name__)

_UNSET = object()


class ArgumentContext:
    """State of one argument during one dispatch."""

    def __init__(
        self,
        command: "CommandContext",
        spec: ArgSpec,
        type_def: TypeDefinition,
        raw_text: Optional[str],
    ):
        self.command = command
        self.spec = spec
        self.type = type_def
        self.raw_text = raw_text

        self._transformed: Any = _UNSET
        self._validated_once: Optional[Tuple[bool, Optional[str]]] = None
        self._value: Any = _UNSET
        self._error: Optional[str] = None
        self._once_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def executor(self) -> Any:
        return self.command.executor

    @property
    def provided(self) -> bool:
        """False for an optional argument that was left out."""
        return self.raw_text is not None

    @property
    def error(self) -> Optional[str]:
        """Message of the first failed stage, if any."""
        return self._error

    @property
    def value(self) -> Any:
        """Parsed value, or None if not (successfully) resolved."""
        return None if self._value is _UNSET else self._value

    async def get_transformed(self) -> Candidates:
        """Run transform once and return its candidates."""
        if self._transformed is _UNSET:
            self._transformed = await self._guard(
                "transform", self.type.run_transform(self.raw_text, self.executor)
            )
        return self._transformed

    async def validate(self, final: bool = True) -> Tuple[bool, Optional[str]]:
        """
        Validate the transformed value.

        ``validate`` runs on every call. ``validate_once`` only runs when
        ``final`` is set, and at most once for this context.
        """
        if not self.provided:
            return True, None
        try:
            candidates = await self.get_transformed()
            ok, message = await self._guard("validate", self.type.run_validate(candidates))
            if not ok or not final:
                return ok, message

            async with self._once_lock:
                if self._validated_once is None:
                    try:
                        self._validated_once = await self._guard(
                            "validate_once", self.type.run_validate_once(candidates)
                        )
                    except DispatchError as e:
                        self._validated_once = (False, e.message)
            return self._validated_once
        except DispatchError as e:
            return False, e.message

    async def get_autocomplete(self) -> List[str]:
        """Suggestions for the current raw text. Never used by dispatch."""
        if not self.provided:
            return []
        try:
            candidates = await self.get_transformed()
            return await self._guard("autocomplete", self.type.run_autocomplete(candidates))
        except DispatchError:
            return []

    async def resolve(self) -> Any:
        """
        Run the full pipeline and return the parsed value.

        Raises:
            TypeValidationError: a stage failed; parse is never run after that
        """
        if self._value is not _UNSET:
            return self._value
        if self._error is not None:
            raise TypeValidationError(self.name, self._error)
        if not self.provided:
            self._value = None
            return None

        ok, message = await self.validate(final=True)
        if not ok:
            self._error = message or f"Invalid {self.type.name}."
            raise TypeValidationError(self.name, self._error)

        try:
            candidates = await self.get_transformed()
            self._value = await self._guard("parse", self.type.run_parse(candidates))
        except DispatchError as e:
            self._error = e.message
            raise TypeValidationError(self.name, self._error) from e
        return self._value

    async def _guard(self, stage: str, coro) -> Any:
        """Await a stage, turning unexpected exceptions into a DispatchError."""
        try:
            return await coro
        except DispatchError:
            raise
        except Exception as e:
            logger.warning(
                f"{stage} of type {self.type.name} failed for argument "
                f"'{self.name}' ({self.raw_text!r}): {e}"
            )
            raise DispatchError(f"Could not process '{self.raw_text}'.") from e

    def __repr__(self) -> str:
        return f"ArgumentContext({self.name}={self.raw_text!r})"


class CommandContext:
    """State of one dispatch attempt."""

    def __init__(
        self,
        command: CommandDefinition,
        raw_text: str,
        executor: Any,
        raw_arguments: Optional[List[str]] = None,
    ):
        self.command = command
        self.raw_text = raw_text
        self.executor = executor
        self.raw_arguments: List[str] = list(raw_arguments or [])
        self.arguments: List[ArgumentContext] = []
        self.response: Optional[str] = None
        self.data: Dict[str, Any] = {}  # Free-form state shared by hooks

    @property
    def name(self) -> str:
        return self.command.name

    def get_argument(self, name: str) -> Optional[ArgumentContext]:
        """Get an argument context by argument name."""
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    @property
    def parsed_values(self) -> List[Any]:
        """Parsed values in declaration order."""
        return [argument.value for argument in self.arguments]

    def __repr__(self) -> str:
        return f"CommandContext({self.command.name!r}, executor={self.executor!r})"
