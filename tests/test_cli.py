"""Tests for the command line interface."""
import io

import pytest
from rich.console import Console
from typer.testing import CliRunner

from interprete.cli.app import app, split_command
from interprete.cli.config import LogLevel
from interprete.cli.providers import make_debug_callback

runner = CliRunner()


@pytest.fixture
def env(monkeypatch):
    for name in ("OPENAI_API_KEY", "OPENAI_ASSISTANT_ID", "INTERPRETE_PROTOCOL", "INTERPRETE_LOCALE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigCommand:
    """Tests for `interprete config`."""

    def test_valid_configuration(self, env):
        env.setenv("OPENAI_API_KEY", "sk-cli-secret")
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "sk-cli-secret" not in result.output

    def test_missing_key(self, env):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 1
        assert "API key is not configured" in result.output

    def test_threads_without_assistant(self, env):
        env.setenv("OPENAI_API_KEY", "sk-cli")
        result = runner.invoke(app, ["config", "--protocol", "threads"])
        assert result.exit_code == 1
        assert "assistant id" in result.output


    def test_invalid_numeric_variable(self, env):
        """Test that a malformed limit is reported instead of crashing."""
        env.setenv("OPENAI_API_KEY", "sk-cli")
        env.setenv("INTERPRETE_MAX_PER_DAY", "lots")
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 1
        assert "max_messages_per_day" in result.output
        assert not isinstance(result.exception, ValueError)


class TestAskCommand:
    """Tests for `interprete ask` paths that never reach the network."""

    def test_requires_key(self, env):
        result = runner.invoke(app, ["ask", "¿Qué es un contrato?"])
        assert result.exit_code == 1

    def test_filtered_message(self, env):
        env.setenv("OPENAI_API_KEY", "sk-cli")
        result = runner.invoke(app, ["ask", "esto es spam"])

        assert result.exit_code == 1
        assert "Contenido filtrado" in result.output

    def test_english_messages(self, env):
        env.setenv("OPENAI_API_KEY", "sk-cli")
        result = runner.invoke(app, ["ask", "   ", "--locale", "en"])

        assert result.exit_code == 1
        assert "empty or too long" in result.output


class TestChatCommands:
    """Tests for chat command parsing."""

    @pytest.mark.parametrize("line,expected", [
        ("/image foto.png", ("/image", "foto.png")),
        ("/image   ~/docs/multa.jpg ", ("/image", "~/docs/multa.jpg")),
        ("/image", ("/image", "")),
        ("/report la respuesta es incorrecta", ("/report", "la respuesta es incorrecta")),
        ("/quit", ("/quit", "")),
        ("/exit", ("/exit", "")),
        ("/clear", ("/clear", "")),
    ])
    def test_known_commands(self, line, expected):
        assert split_command(line) == expected

    @pytest.mark.parametrize("line", [
        "/imagenes foo",
        "/reporte algo",
        "/quitar la cláusula",
        "¿Qué es /image?",
    ])
    def test_other_lines_are_messages(self, line):
        """Test that words merely starting like a command are sent as text."""
        assert split_command(line) == (None, line)


class TestDebugCallback:
    """Tests for the rich debug callback."""

    def test_filters_by_level(self):
        buffer = io.StringIO()
        callback = make_debug_callback(Console(file=buffer, width=200), LogLevel.INFO)

        callback("debug", "client", "hidden")
        callback("warning", "client", "shown [not markup]")

        output = buffer.getvalue()
        assert "hidden" not in output
        assert "WARNING" in output
        assert "client: shown [not markup]" in output

    def test_truncates_long_messages(self):
        buffer = io.StringIO()
        callback = make_debug_callback(Console(file=buffer, width=1000), LogLevel.DEBUG)

        callback("error", "threads", "x" * 600)

        assert "x" * 500 + "..." in buffer.getvalue()
        assert "x" * 501 not in buffer.getvalue()
