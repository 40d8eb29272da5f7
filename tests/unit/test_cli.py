#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the ao3kit command line interface."""

import io
import logging

import httpx
import pytest

from ao3kit import cli
from ao3kit.cli import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_NETWORK_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    get_exit_code_for_exception,
    main,
)
from ao3kit.client import Ao3Client
from ao3kit.exceptions import Ao3KitError, FetchError, ParsingError, ValidationError
from ao3kit.logging_utils import HTTP_LOGGERS, configure_logging, resolve_log_level


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo the root handler changes main() makes."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    http_levels = {name: logging.getLogger(name).level for name in HTTP_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, http_level in http_levels.items():
        logging.getLogger(name).setLevel(http_level)


@pytest.fixture
def fake_archive(monkeypatch, chapter_page):
    """Route the CLI's client through a mock transport and record requests."""
    requests: list[httpx.Request] = []

    def respond(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/works/1/chapters/2":
            return httpx.Response(200, text=chapter_page)
        return httpx.Response(404, text="Not found")

    monkeypatch.setattr(cli, "Ao3Client", lambda options: Ao3Client(options, transport=httpx.MockTransport(respond)))
    return requests


@pytest.mark.unit
@pytest.mark.cli
class TestLocalInput:
    """Tests for rendering local HTML."""

    def test_render_file(self, tmp_path, capsys) -> None:
        """Test a chapter file is rendered to stdout."""
        source = tmp_path / "chapter.html"
        source.write_text("<p>Hello <b>world</b></p><p>Bye</p>", encoding="utf-8")

        assert main([str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Hello world\n\nBye\n"

    def test_render_stdin(self, monkeypatch, capsys) -> None:
        """Test '-' reads the chapter from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<ol><li>a</li><li>b</li></ol>"))

        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "1. a\n2. b\n"

    def test_skin_and_ansi(self, tmp_path, capsys, skin_css) -> None:
        """Test a skin file colors classes in ANSI output."""
        source = tmp_path / "chapter.html"
        source.write_text('<p><span class="FogLandry">Fog</span></p>', encoding="utf-8")
        skin = tmp_path / "skin.css"
        skin.write_text(skin_css, encoding="utf-8")

        assert main([str(source), "--skin-css", str(skin), "--ansi"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "\x1b[38;2;252;78;71mFog\x1b[0m\n"

    def test_unopenable_log_file(self, tmp_path, capsys) -> None:
        """Test a log file that cannot be created is a file error."""
        source = tmp_path / "chapter.html"
        source.write_text("<p>x</p>", encoding="utf-8")

        assert main([str(source), "--log-file", str(tmp_path / "missing" / "x.log")]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        """Test a missing input file is a file error."""
        assert main([str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentValidation:
    """Tests for inconsistent arguments."""

    def test_input_required(self, capsys) -> None:
        """Test running without input is rejected."""
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "Input file is required" in capsys.readouterr().err

    def test_work_id_without_chapter_id(self, capsys) -> None:
        """Test work and chapter IDs must be given together."""
        assert main(["--work-id", "1"]) == EXIT_VALIDATION_ERROR
        assert "--chapter-id" in capsys.readouterr().err

    def test_input_with_work_id(self, tmp_path) -> None:
        """Test a file and a fetch cannot be combined."""
        assert main([str(tmp_path / "x.html"), "--work-id", "1", "--chapter-id", "2"]) == EXIT_VALIDATION_ERROR

    def test_invalid_log_level(self) -> None:
        """Test argparse rejects unknown log levels."""
        with pytest.raises(SystemExit):
            main(["-", "--log-level", "LOUD"])


@pytest.mark.unit
@pytest.mark.cli
class TestFetching:
    """Tests for rendering chapters fetched from the archive."""

    def test_fetch_chapter(self, fake_archive, capsys) -> None:
        """Test a fetched chapter is rendered with its own work skin."""
        assert main(["--work-id", "1", "--chapter-id", "2", "--ansi"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "First \x1b[1mbold\x1b[0m line." in out
        assert "\x1b[38;2;252;78;71mFog speaks.\x1b[0m" in out

    def test_user_agent_from_environment(self, fake_archive, monkeypatch) -> None:
        """Test the User-Agent can be overridden from the environment."""
        monkeypatch.setenv("AO3KIT_USER_AGENT", "env-agent/1.0")

        assert main(["--work-id", "1", "--chapter-id", "2"]) == EXIT_SUCCESS
        assert fake_archive[0].headers["User-Agent"] == "env-agent/1.0"

    def test_fetch_error_exit_code(self, fake_archive, capsys) -> None:
        """Test fetch failures map to the network exit code."""
        assert main(["--work-id", "9", "--chapter-id", "9"]) == EXIT_NETWORK_ERROR
        assert "404" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception,expected",
        [
            (FetchError("x"), EXIT_NETWORK_ERROR),
            (ValidationError("x"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x"), EXIT_FILE_ERROR),
            (ParsingError("x"), EXIT_PARSING_ERROR),
            (Ao3KitError("x"), EXIT_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, expected) -> None:
        """Test each exception family maps to its exit code."""
        assert get_exit_code_for_exception(exception) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_and_handler(self) -> None:
        """Test the root logger gets one console handler at the level."""
        root = configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_log_file(self, tmp_path) -> None:
        """Test a log file handler is added."""
        log_file = tmp_path / "ao3kit.log"
        root = configure_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("ao3kit.test").info("hello")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        assert "hello" in log_file.read_text(encoding="utf-8")
        root.handlers[1].close()

    def test_httpx_quiet_without_trace(self) -> None:
        """Test httpx request logging is held at WARNING unless tracing."""
        configure_logging(logging.DEBUG)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_http_logs_through_when_tracing(self) -> None:
        """Test trace mode leaves the HTTP loggers at the requested level."""
        configure_logging(logging.DEBUG, trace_mode=True)
        assert all(logging.getLogger(name).level == logging.DEBUG for name in HTTP_LOGGERS)

    def test_trace_format(self) -> None:
        """Test trace mode adds the logger name to each record."""
        root = configure_logging(logging.INFO, trace_mode=True)
        record = logging.LogRecord("ao3kit.client", logging.INFO, __file__, 1, "hello", None, None)
        assert "[ao3kit.client] hello" in root.handlers[0].format(record)

    def test_unopenable_log_file_raises(self, tmp_path) -> None:
        """Test a log file in a missing directory fails without touching the handlers."""
        before = list(logging.getLogger().handlers)
        with pytest.raises(OSError):
            configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "ao3kit.log"))
        assert logging.getLogger().handlers == before

    @pytest.mark.parametrize(
        "value,expected",
        [
            (logging.ERROR, logging.ERROR),
            ("debug", logging.DEBUG),
            ("WARNING", logging.WARNING),
            ("LOUD", logging.INFO),
        ],
    )
    def test_resolve_log_level(self, value, expected) -> None:
        """Test level names and numbers resolve, unknown names falling back to INFO."""
        assert resolve_log_level(value) == expected
