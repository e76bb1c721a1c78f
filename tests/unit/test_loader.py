"""YAML command loader tests."""

import pytest

from cmdcore import CommandLoader, Dispatcher, DuplicateCommandError, UnknownTypeError

KICK_YAML = """
commands:
  - name: kick
    aliases: [boot]
    group: Admin
    description: Remove a player.
    args:
      - {type: string, name: target}
      - {type: string, name: reason, optional: true, greedy: true}
  - name: roll
    args:
      - {type: integer, name: sides, default: "6"}
"""


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestCommandLoader:
    def test_loads_definitions(self, registry, tmp_path):
        stats = CommandLoader(registry).load_path(write(tmp_path / "admin.yaml", KICK_YAML))

        assert stats == {"commands": 2, "errors": []}
        kick = registry.get_command("boot")
        assert kick.group == "Admin"
        assert kick.args[1].greedy
        assert registry.get_command("roll").args[0].default == "6"

    @pytest.mark.asyncio
    async def test_binds_implementations_by_name(self, registry, tmp_path):
        loader = CommandLoader(registry, implementations={"roll": lambda context, sides: f"d{sides}"})
        loader.load_path(write(tmp_path / "admin.yaml", KICK_YAML))
        assert await Dispatcher(registry).run("roll", "alice") == "d6"

    def test_directory_and_bad_files(self, registry, tmp_path):
        write(tmp_path / "a.yaml", KICK_YAML)
        write(tmp_path / "b.yaml", "commands:\n  - aliases: [x]\n")  # missing name
        write(tmp_path / "c.yaml", "- just\n- a list\n")
        write(tmp_path / "d.yaml", "commands: [\n")

        loader = CommandLoader(registry)
        stats = loader.load_path(tmp_path)

        assert stats["commands"] == 2
        assert len(stats["errors"]) == 3
        assert registry.get_command("kick") is not None

    def test_empty_file(self, registry, tmp_path):
        assert CommandLoader(registry).load_path(write(tmp_path / "empty.yaml", ""))["commands"] == 0

    def test_registration_errors_propagate(self, registry, tmp_path):
        path = write(tmp_path / "admin.yaml", KICK_YAML)
        CommandLoader(registry).load_path(path)
        with pytest.raises(DuplicateCommandError):
            CommandLoader(registry).load_path(path)

    def test_unknown_type_propagates(self, registry, tmp_path):
        path = write(tmp_path / "fly.yaml", "commands:\n  - name: fly\n    args: [{type: vector, name: to}]\n")
        with pytest.raises(UnknownTypeError):
            CommandLoader(registry).load_path(path)
