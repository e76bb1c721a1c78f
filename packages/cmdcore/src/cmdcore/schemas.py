"""
Command Declaration Schemas

Pydantic models for command definitions declared in YAML.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .types import ArgSpec, CommandDefinition


class ArgumentSchema(BaseModel):
    """One declared argument."""

    type: str = Field(..., min_length=1, description="Registered type name")
    name: str = Field(..., min_length=1, description="Argument name")
    description: str = ""
    optional: bool = False
    default: Optional[str] = None
    greedy: bool = False

    def to_spec(self) -> ArgSpec:
        return ArgSpec(
            type=self.type,
            name=self.name,
            description=self.description,
            optional=self.optional,
            default=self.default,
            greedy=self.greedy,
        )


class CommandSchema(BaseModel):
    """One declared command."""

    name: str = Field(..., min_length=1, pattern=r"^\S+$")
    aliases: List[str] = Field(default_factory=list)
    description: str = ""
    group: str = "General"
    args: List[ArgumentSchema] = Field(default_factory=list)
    server_implementation: bool = True

    def to_definition(self) -> CommandDefinition:
        return CommandDefinition(
            name=self.name,
            aliases=frozenset(self.aliases),
            description=self.description,
            group=self.group,
            args=tuple(arg.to_spec() for arg in self.args),
            has_server_implementation=self.server_implementation,
        )


class CommandFile(BaseModel):
    """Top level of a YAML command file."""

    commands: List[CommandSchema] = Field(default_factory=list)
