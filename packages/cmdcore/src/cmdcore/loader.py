"""
Command Loader

Loads command declarations from YAML files into a registry.

Expected file shape:

    commands:
      - name: kick
        aliases: [boot]
        group: Admin
        description: Remove a player from the server.
        args:
          - {type: playerId, name: target}
          - {type: string, name: reason, optional: true, greedy: true}

Implementations are bound explicitly, either through ``implementations``
or later with ``Registry.bind_implementation``.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from .registry import Registry, get_registry
from .schemas import CommandFile

logger = logging.getLogger(__name__)


class CommandLoader:
    """
    Loads command definitions from YAML.

    Malformed files are recorded in ``errors`` and skipped. Registration
    errors (duplicates, unknown types) are programmer mistakes and propagate.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        implementations: Optional[Dict[str, Callable]] = None,
    ):
        self.registry = registry or get_registry()
        self.implementations = implementations or {}
        self._errors: List[str] = []

    @property
    def errors(self) -> List[str]:
        return self._errors.copy()

    def load_path(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a YAML file, or every ``*.yaml`` file in a directory.

        Returns dict with load statistics.
        """
        path = Path(path)
        files = sorted(path.glob("*.yaml")) if path.is_dir() else [path]

        logger.info(f"Loading commands from: {path}")

        count = 0
        for yaml_file in files:
            count += self.load_file(yaml_file)

        stats = {"commands": count, "errors": self.errors}
        logger.info(f"Commands loaded: {count} commands, {len(self._errors)} errors")
        return stats

    def load_file(self, path: Path) -> int:
        """Load one YAML file. Returns the number of commands registered."""
        data = self._load_yaml_file(path)
        if data is None:
            return 0

        try:
            declared = CommandFile.model_validate(data)
        except ValidationError as e:
            self._errors.append(f"Error parsing commands in {path}: {e}")
            logger.warning(f"Invalid command file {path}: {e}")
            return 0

        for schema in declared.commands:
            definition = schema.to_definition()
            self.registry.register_command(
                definition, self.implementations.get(definition.name.lower())
            )
        return len(declared.commands)

    def _load_yaml_file(self, path: Path) -> Optional[Dict]:
        """Load a YAML file, recording an error if it cannot be read."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._errors.append(f"Error loading {path}: {e}")
            logger.warning(f"Could not load {path}: {e}")
            return None

        if data is None:
            return None
        if not isinstance(data, dict):
            self._errors.append(f"Error loading {path}: expected a mapping at top level")
            return None
        return data
