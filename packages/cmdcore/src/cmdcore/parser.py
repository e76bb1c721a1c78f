"""
Command Parser

Parses raw console input into a command word and argument tokens.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ParsedCommand:
    """Represents a parsed line of input."""

    raw: str  # Original input
    command: str  # The command word, as typed
    args: List[str] = field(default_factory=list)  # Argument tokens

    @property
    def arg_string(self) -> str:
        """Get all arguments as a single string."""
        return " ".join(self.args)

    def get_arg(self, index: int, default: str = "") -> str:
        """Get argument at index, or default if not present."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return default


def tokenize(text: str) -> List[str]:
    """
    Tokenize input, respecting double-quoted strings.

    Examples:
        'kick bob' -> ['kick', 'bob']
        'announce "hello world"' -> ['announce', 'hello world']
        "kick O'Brien" -> ['kick', "O'Brien"]
    """
    tokens = []
    current = ""
    in_quotes = False

    for char in text:
        if char == '"':
            in_quotes = not in_quotes
            if not in_quotes and current:
                tokens.append(current)
                current = ""
        elif char.isspace() and not in_quotes:
            if current:
                tokens.append(current)
                current = ""
        else:
            current += char

    if current:
        tokens.append(current)

    return tokens


class CommandParser:
    """Splits a line of input into the command word and its arguments."""

    def parse(self, raw_input: str) -> ParsedCommand:
        """Parse raw input into a structured command."""
        raw_input = raw_input.strip()
        if not raw_input:
            return ParsedCommand(raw="", command="")

        tokens = tokenize(raw_input)
        if not tokens:
            return ParsedCommand(raw=raw_input, command="")

        # First token is the command
        return ParsedCommand(raw=raw_input, command=tokens[0], args=tokens[1:])
