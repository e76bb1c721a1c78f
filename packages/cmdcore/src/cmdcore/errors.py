"""
Console Errors

Two families of errors:
- RegistrationError: programmer mistakes found while building the registry.
  These propagate to whoever is registering.
- DispatchError: user-facing failures during a dispatch. The dispatcher turns
  each one into its ``message`` and never lets it escape ``run``.
"""

from typing import Any, List, Optional, Sequence


class ConsoleError(Exception):
    """Base class for all console errors."""


# =============================================================================
# Registration Errors
# =============================================================================


class RegistrationError(ConsoleError):
    """Error raised while registering commands, types or hooks."""


class DuplicateRegistrationError(RegistrationError):
    """A name collided with something already registered."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} '{name}' is already registered.")
        self.kind = kind
        self.name = name


class DuplicateTypeError(DuplicateRegistrationError):
    def __init__(self, name: str):
        super().__init__("Type", name)


class DuplicateCommandError(DuplicateRegistrationError):
    def __init__(self, name: str, existing: Optional[str] = None):
        super().__init__("Command name or alias", name)
        self.existing = existing


class UnknownTypeError(RegistrationError):
    """An argument refers to a type that has not been registered."""

    def __init__(self, type_name: str, command: str = "", argument: str = ""):
        where = f" (argument '{argument}' of command '{command}')" if command else ""
        super().__init__(f"Unknown type '{type_name}'{where}.")
        self.type_name = type_name
        self.command = command
        self.argument = argument


class InvalidCommandError(RegistrationError):
    """A command definition is malformed."""


# =============================================================================
# Dispatch Errors
# =============================================================================


class DispatchError(ConsoleError):
    """A user-facing dispatch failure. ``message`` is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownCommandError(DispatchError):
    def __init__(self, name: str, help_available: bool = False):
        hint = " Type 'help' for commands." if help_available else ""
        super().__init__(f"Unknown command: {name}.{hint}")
        self.name = name


class MissingArgumentError(DispatchError):
    def __init__(self, argument: str, command: str):
        super().__init__(f"Missing required argument '{argument}' for command '{command}'.")
        self.argument = argument
        self.command = command


class TooManyArgumentsError(DispatchError):
    def __init__(self, command: str, expected: int, given: int):
        super().__init__(
            f"Too many arguments for command '{command}': expected at most {expected}, got {given}."
        )
        self.command = command
        self.expected = expected
        self.given = given


class TypeValidationError(DispatchError):
    """A type pipeline stage rejected an argument."""

    def __init__(self, argument: str, message: str):
        super().__init__(f"Invalid value for argument '{argument}': {message}")
        self.argument = argument
        self.reason = message


class AmbiguousMatchError(DispatchError):
    """More than one candidate matched equally well."""

    def __init__(self, text: str, candidates: Sequence[Any]):
        names = ", ".join(str(c) for c in candidates)
        super().__init__(f"'{text}' is ambiguous, it could be any of: {names}.")
        self.text = text
        self.candidates: List[Any] = list(candidates)


class ImplementationFailure(DispatchError):
    """The command's own code raised."""

    def __init__(self, command: str, original_error: Optional[BaseException] = None):
        super().__init__(f"Error executing command '{command}': {original_error}")
        self.command = command
        self.original_error = original_error


class HookFailure(DispatchError):
    """A hook callback raised."""

    def __init__(self, hook: str, command: str, original_error: Optional[BaseException] = None):
        super().__init__(f"The {hook} hook failed while running command '{command}'.")
        self.hook = hook
        self.command = command
        self.original_error = original_error
