"""Console facade, configuration and service tests."""

import logging

import pytest

from cmdcore import (
    ArgSpec,
    CommandDefinition,
    Console,
    ConsoleConfig,
    DirectoryIdentityResolver,
    HookPoint,
    HttpIdentityResolver,
    Player,
    command,
    configure_logging,
    get_console,
    get_registry,
)
from cmdcore.actor import ConsoleService


class TestConsoleConfig:
    def test_defaults(self, monkeypatch):
        for name in (
            "CMDCORE_IDENTITY_URL",
            "CMDCORE_LOOKUP_TIMEOUT",
            "CMDCORE_NAME_CACHE_SIZE",
            "CMDCORE_NAME_CACHE_TTL",
            "CMDCORE_LOG_LEVEL",
            "CMDCORE_COMMANDS_PATH",
        ):
            monkeypatch.delenv(name, raising=False)
        config = ConsoleConfig.from_env()
        assert config.identity_url is None
        assert config.lookup_timeout == 5.0
        assert config.name_cache_size == 0
        assert config.log_level == "INFO"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CMDCORE_IDENTITY_URL", "http://identity:8080")
        monkeypatch.setenv("CMDCORE_LOOKUP_TIMEOUT", "1.5")
        monkeypatch.setenv("CMDCORE_NAME_CACHE_SIZE", "500")
        monkeypatch.setenv("CMDCORE_LOG_LEVEL", "debug")
        config = ConsoleConfig.from_env()
        assert config.identity_url == "http://identity:8080"
        assert config.lookup_timeout == 1.5
        assert config.name_cache_size == 500
        assert config.log_level == "DEBUG"

    def test_configure_logging(self):
        configure_logging(ConsoleConfig(log_level="WARNING"))
        assert logging.getLogger("cmdcore").level == logging.WARNING
        configure_logging(ConsoleConfig(log_level="bogus"))
        assert logging.getLogger("cmdcore").level == logging.INFO


class TestConsole:
    @pytest.mark.asyncio
    async def test_run_with_builtin_types(self):
        console = Console(
            players=lambda: [Player("Alice", 1)],
            resolver=DirectoryIdentityResolver({"Zed": 9}),
        )
        console.start()
        console.register_command(
            CommandDefinition(name="whois", args=(ArgSpec("playerId", "who"),)),
            lambda context, who: f"id={who}",
        )
        assert await console.run("whois Zed", "alice") == "id=9"
        assert await console.suggest("whois al", "alice") == ["Alice"]
        assert "whois" in console.get_help()

    @pytest.mark.asyncio
    async def test_hooks_through_console(self):
        console = Console()
        console.start()
        console.register_command(CommandDefinition(name="ping"), lambda context: "pong")
        console.add_hook(HookPoint.BEFORE_RUN, lambda context: "maintenance")
        assert await console.run("ping", "alice") == "maintenance"

    @pytest.mark.asyncio
    async def test_shutdown_clears_name_cache(self):
        console = Console(resolver=DirectoryIdentityResolver({"Zed": 9}))
        console.start()
        assert await console.identity.get_user_id("Zed") == 9
        assert console.name_cache.size == 1

        await console.shutdown()
        assert console.name_cache.size == 0
        assert not console.started

    def test_start_is_idempotent(self):
        console = Console()
        console.start()
        console.start()
        assert console.registry.get_type("playerIds") is not None

    def test_identity_url_builds_http_resolver(self):
        console = Console(ConsoleConfig(identity_url="http://identity"))
        assert isinstance(console.identity.resolver, HttpIdentityResolver)

    def test_name_cache_uses_config(self):
        console = Console(ConsoleConfig(name_cache_size=3))
        assert console.name_cache._max_size == 3

    def test_start_loads_declared_commands(self, tmp_path):
        (tmp_path / "cmds.yaml").write_text(
            "commands:\n  - name: say\n    args: [{type: string, name: text, greedy: true}]\n",
            encoding="utf-8",
        )
        console = Console(ConsoleConfig(commands_path=str(tmp_path)))
        console.start(implementations={"say": lambda context, text: text})
        assert console.registry.get_implementation("say") is not None


class TestConsoleService:
    @pytest.mark.asyncio
    async def test_service_runs_commands(self):
        service = ConsoleService(ConsoleConfig())
        service.console.register_command(CommandDefinition(name="ping"), lambda context: "pong")

        assert await service.run("ping", "alice") == "pong"
        assert await service.suggest("pi", "alice") == ["ping"]
        assert "ping" in await service.get_help()
        await service.shutdown()

    def test_setup_imports_module(self, tmp_path, monkeypatch):
        (tmp_path / "console_commands_fixture.py").write_text(
            "from cmdcore import CommandDefinition\n"
            "def register(console):\n"
            "    console.register_command(CommandDefinition(name='hello'), lambda context: 'hi')\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        service = ConsoleService(ConsoleConfig())
        assert service.setup("console_commands_fixture") == 1


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_after_shutdown(self):
        console = Console(resolver=DirectoryIdentityResolver({"Zed": 9}))
        console.start()
        console.register_command(
            CommandDefinition(name="whois", args=(ArgSpec("playerId", "who"),)),
            lambda context, who: f"id={who}",
        )
        assert await console.run("whois Zed", "alice") == "id=9"

        await console.shutdown()
        console.start()

        assert console.started
        assert console.name_cache.size == 0
        assert await console.run("whois Zed", "alice") == "id=9"

    @pytest.mark.asyncio
    async def test_restart_with_http_resolver(self):
        console = Console(ConsoleConfig(identity_url="http://identity"))
        console.start()
        await console.shutdown()
        console.start()
        assert not console.identity.resolver._get_client().is_closed
        await console.shutdown()


class TestHelpCommand:
    @pytest.mark.asyncio
    async def test_help_lists_commands(self):
        console = Console()
        console.start()
        console.register_command(CommandDefinition(name="kick", group="Admin"), lambda context: "")
        text = await console.run("help", "alice")
        assert "  Admin: kick" in text
        assert "  Help: help" in text

    @pytest.mark.asyncio
    async def test_help_for_one_command(self):
        console = Console()
        console.start()
        console.register_command(
            CommandDefinition(name="kick", args=(ArgSpec("playerId", "target"),)),
            lambda context, target: "",
        )
        text = await console.run("help kick", "alice")
        assert "Usage: kick <target>" in text

    @pytest.mark.asyncio
    async def test_unknown_command_hint_is_followable(self):
        console = Console()
        console.start()
        assert await console.run("fly", "alice") == "Unknown command: fly. Type 'help' for commands."
        assert (await console.run("help", "alice")).startswith("Available commands by group:")

    def test_declared_help_command_is_kept(self, tmp_path):
        (tmp_path / "cmds.yaml").write_text("commands:\n  - name: help\n", encoding="utf-8")
        console = Console(ConsoleConfig(commands_path=str(tmp_path)))
        console.start(implementations={"help": lambda context: "custom"})
        assert console.registry.get_implementation("help")(None) == "custom"


class TestGlobalConsole:
    @pytest.mark.asyncio
    async def test_decorated_command_reaches_global_console(self, monkeypatch):
        monkeypatch.setattr("cmdcore.registry._registry", None)
        monkeypatch.setattr("cmdcore.console._console", None)

        @command("hello")
        def cmd_hello(context):
            return "hi"

        console = get_console()
        console.start()
        assert console.registry is get_registry()
        assert await console.run("hello", "alice") == "hi"
