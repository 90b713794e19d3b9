"""Tests for the logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from inkwell.ai.ai_types import GenerationSuccess
from inkwell.utils import logging as logging_utils
from inkwell.web.app import create_app
from tests.helpers import FakeClock, StubGateway


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging_utils._log_path = None


def _flush() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_setup_logging_writes_to_rotating_file(tmp_path: Path) -> None:
    log_path = logging_utils.setup_logging(logging.DEBUG, log_dir=tmp_path, console=False, force=True)

    logging.getLogger("inkwell.test").info("hello from test")
    _flush()

    assert log_path == tmp_path / "inkwell.log"
    assert logging_utils.get_log_path() == log_path
    assert "| - | inkwell.test | hello from test" in log_path.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_bound_identity_is_stamped_and_then_released(tmp_path: Path) -> None:
    log_path = logging_utils.setup_logging(log_dir=tmp_path, console=False, force=True)
    logger = logging.getLogger("inkwell.test")

    with logging_utils.bind_identity("203.0.113.9"):
        assert logging_utils.current_identity() == "203.0.113.9"
        logger.info("inside")
    logger.info("outside")
    _flush()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert any("| 203.0.113.9 | inkwell.test | inside" in line for line in lines)
    assert any("| - | inkwell.test | outside" in line for line in lines)
    assert logging_utils.current_identity() == "-"


def test_server_loggers_propagate_to_root_handlers(tmp_path: Path) -> None:
    server_logger = logging.getLogger("uvicorn.error")
    stray = logging.NullHandler()
    server_logger.addHandler(stray)
    server_logger.propagate = False

    log_path = logging_utils.setup_logging(log_dir=tmp_path, console=False, force=True)
    server_logger.warning("server says hi")
    _flush()

    assert stray not in server_logger.handlers
    assert server_logger.propagate is True
    assert "uvicorn.error | server says hi" in log_path.read_text(encoding="utf-8")


def test_setup_logging_is_idempotent_without_force(tmp_path: Path) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "a", console=False, force=True)
    second = logging_utils.setup_logging(log_dir=tmp_path / "b", console=False)

    assert first == second


def test_log_dir_environment_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INKWELL_LOG_DIR", str(tmp_path / "env"))

    log_path = logging_utils.setup_logging(console=False, force=True)

    assert log_path.parent == tmp_path / "env"


def test_generate_requests_are_logged_under_the_caller_identity(tmp_path: Path) -> None:
    log_path = logging_utils.setup_logging(log_dir=tmp_path, console=False, force=True)
    app = create_app(gateway=StubGateway(GenerationSuccess("# Doc")), clock=FakeClock())

    with TestClient(app) as client:
        client.post("/generate", json={"topic": "Doc"}, headers={"X-Forwarded-For": "198.51.100.4"})
    _flush()

    assert "| 198.51.100.4 | inkwell.web.app | POST /generate answered 200" in log_path.read_text(
        encoding="utf-8"
    )
