"""Constants for the command console."""

# Ray namespace for console actors
NAMESPACE: str = "cmdcore"

# Named actor paths
CONSOLE_ACTOR: str = "cmdcore/console"

# Separator used by listable types ("a,b,c")
LIST_SEPARATOR: str = ","

# Responses
NO_RESPONSE: str = "Command executed."
EMPTY_INPUT_RESPONSE: str = "No command given."

# Identity lookups
DEFAULT_LOOKUP_TIMEOUT_S: float = 5.0
