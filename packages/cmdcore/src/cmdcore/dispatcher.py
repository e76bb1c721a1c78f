"""
Command Dispatcher

Turns a line of user input into a validated call of a registered command.

Pipeline for ``run``:
    tokenize -> resolve command -> bind arguments -> resolve argument types
    -> BeforeRun hooks -> implementation -> AfterRun hooks -> response

``run`` never raises; every failure comes back as the response string.
Dispatches share nothing but the registry, so several may be in flight at once.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .constants import EMPTY_INPUT_RESPONSE, NO_RESPONSE
from .context import ArgumentContext, CommandContext
from .errors import (
    DispatchError,
    ImplementationFailure,
    MissingArgumentError,
    TooManyArgumentsError,
    UnknownCommandError,
)
from .fuzzy import make_fuzzy_finder
from .hooks import HookPoint, run_hook_chain
from .parser import CommandParser, ParsedCommand, tokenize
from .registry import Registry, get_registry
from .types import ArgSpec, CommandDefinition, maybe_await

logger = logging.getLogger(__name__)


def bind_arguments(
    definition: CommandDefinition, tokens: Sequence[str]
) -> List[Tuple[ArgSpec, Optional[str]]]:
    """
    Pair each argument spec with its raw text.

    Non-greedy arguments take one token each; a trailing greedy argument takes
    the rest. Missing arguments fall back to their default; an optional
    argument without a default is bound to None.

    Raises:
        MissingArgumentError: a required argument has no token and no default
        TooManyArgumentsError: tokens are left over
    """
    remaining = list(tokens)
    bound = []

    for spec in definition.args:
        raw: Optional[str] = None
        if spec.greedy:
            if remaining:
                raw = " ".join(remaining)
                remaining = []
        elif remaining:
            raw = remaining.pop(0)

        if raw is None:
            if spec.default is not None:
                raw = spec.default
            elif not spec.optional:
                raise MissingArgumentError(spec.name, definition.name)

        bound.append((spec, raw))

    if remaining:
        raise TooManyArgumentsError(definition.name, len(definition.args), len(tokens))

    return bound


class Dispatcher:
    """Runs console input against a registry."""

    def __init__(self, registry: Optional[Registry] = None, parser: Optional[CommandParser] = None):
        self.registry = registry or get_registry()
        self._parser = parser or CommandParser()

    async def run(self, raw_text: str, executor: Any) -> str:
        """
        Run one command invocation and return the response text.

        Never raises.
        """
        try:
            return await self._run(raw_text, executor)
        except DispatchError as e:
            return e.message
        except Exception as e:
            logger.exception(f"Unexpected error dispatching {raw_text!r}")
            return f"Could not run '{raw_text}': {e}"

    async def _run(self, raw_text: str, executor: Any) -> str:
        parsed = self._parser.parse(raw_text)
        if not parsed.command:
            return EMPTY_INPUT_RESPONSE

        definition = self.registry.get_command(parsed.command)
        if definition is None:
            raise UnknownCommandError(
                parsed.command, help_available=self.registry.get_command("help") is not None
            )

        context = self.build_context(definition, parsed, executor)

        # First failing argument aborts the dispatch
        for argument in context.arguments:
            await argument.resolve()

        blocked = await run_hook_chain(
            HookPoint.BEFORE_RUN, self.registry.get_hooks(HookPoint.BEFORE_RUN), context
        )
        if blocked:
            return blocked

        context.response = await self._invoke(context)

        override = await run_hook_chain(
            HookPoint.AFTER_RUN, self.registry.get_hooks(HookPoint.AFTER_RUN), context
        )
        if override:
            context.response = override

        return context.response or NO_RESPONSE

    def build_context(
        self, definition: CommandDefinition, parsed: ParsedCommand, executor: Any
    ) -> CommandContext:
        """Create the command context and one argument context per spec."""
        context = CommandContext(definition, parsed.raw, executor, parsed.args)
        for spec, raw in bind_arguments(definition, parsed.args):
            context.arguments.append(self._argument_context(context, spec, raw))
        return context

    def _argument_context(
        self, context: CommandContext, spec: ArgSpec, raw: Optional[str]
    ) -> ArgumentContext:
        type_def = self.registry.get_type(spec.type)
        if type_def is None:
            # Registration checks types, so this only happens if a type was removed
            raise DispatchError(
                f"Argument '{spec.name}' of command '{context.name}' has unknown type '{spec.type}'."
            )
        return ArgumentContext(context, spec, type_def, raw)

    async def _invoke(self, context: CommandContext) -> Optional[str]:
        implementation = self.registry.get_implementation(context.name)
        if implementation is None:
            return f"Command '{context.name}' has no implementation."

        try:
            result = await maybe_await(implementation(context, *context.parsed_values))
        except Exception as e:
            logger.error(f"Error executing command {context.name}: {e}")
            raise ImplementationFailure(context.name, e) from e

        return None if result is None else str(result)

    # =========================================================================
    # Autocomplete
    # =========================================================================

    async def suggest(self, partial_text: str, executor: Any) -> List[str]:
        """
        Suggestions for partially typed input.

        While the command word is being typed, returns matching command names.
        Afterwards, returns the current argument's autocomplete output.
        """
        tokens = tokenize(partial_text)
        # Inside an unclosed quote, spaces belong to the token being typed
        # and a bare opening quote starts an empty one
        in_quotes = partial_text.count('"') % 2 == 1
        typing_new_token = (
            not partial_text
            or (partial_text[-1].isspace() and not in_quotes)
            or (in_quotes and partial_text.endswith('"'))
        )

        if not tokens or (len(tokens) == 1 and not typing_new_token):
            names = sorted(self.registry.get_commands().keys())
            word = tokens[0] if tokens else ""
            return [str(name) for name in make_fuzzy_finder(names)(word)]

        definition = self.registry.get_command(tokens[0])
        if definition is None or not definition.args:
            return []

        args = tokens[1:]
        if typing_new_token:
            args.append("")
        index = len(args) - 1

        last = len(definition.args) - 1
        if index >= last and definition.args[last].greedy:
            spec, raw = definition.args[last], " ".join(args[last:])
        elif index <= last:
            spec, raw = definition.args[index], args[index]
        else:
            return []

        context = CommandContext(definition, partial_text, executor, tokens[1:])
        try:
            argument = self._argument_context(context, spec, raw)
        except DispatchError:
            return []
        return await argument.get_autocomplete()

    # =========================================================================
    # Help
    # =========================================================================

    def get_help(self, topic: str = "") -> str:
        """Get help text for a command, or the command list."""
        if not topic:
            lines = ["Available commands by group:", ""]
            for group in self.registry.get_groups():
                commands = self.registry.get_by_group(group)
                if commands:
                    cmd_names = [c.name for c in commands]
                    lines.append(f"  {group}: {', '.join(cmd_names)}")
            lines.append("")
            lines.append("Type 'help <command>' for details on a specific command.")
            return "\n".join(lines)

        definition = self.registry.get_command(topic)
        if definition is None:
            return f"No help available for: {topic}"

        lines = [
            f"Command: {definition.name}",
            f"Usage: {definition.usage}",
        ]
        if definition.description:
            lines += ["", definition.description]
        if definition.args:
            lines.append("")
            for arg in definition.args:
                detail = f"  {arg.name} ({arg.type})"
                if arg.description:
                    detail += f": {arg.description}"
                if arg.default is not None:
                    detail += f" [default: {arg.default}]"
                lines.append(detail)
        if definition.aliases:
            lines.append(f"Aliases: {', '.join(sorted(definition.aliases))}")
        return "\n".join(lines)
