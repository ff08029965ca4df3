from __future__ import annotations

"""
Integration tests for the logging subsystem.

Verifies idempotent configuration, handler ownership tagging, file
output through the queue listener and log tail retrieval.
"""

import logging
from unittest.mock import patch

import pytest

from workspace_vfs.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_recent_logs,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach our handlers and listener before and after each test."""
    root = logging.getLogger()
    original_level = root.level

    def _reset() -> None:
        listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
        if listener is not None and getattr(listener, "_thread", None) is not None:
            listener.stop()
        setattr(root, _QUEUE_LISTENER_ATTR, None)
        setattr(root, _CONFIGURED_FLAG_ATTR, False)
        for h in list(root.handlers):
            if getattr(h, _HANDLER_TAG_ATTR, False):
                root.removeHandler(h)
                h.close()

    _reset()
    yield
    _reset()
    root.setLevel(original_level)


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_configure_is_idempotent() -> None:
    configure_logging(LoggingConfig(level="DEBUG"))
    configure_logging(LoggingConfig(level="ERROR"))

    assert len(_our_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="DEBUG"))
    configure_logging(LoggingConfig(level="warn"), force=True)

    assert len(_our_handlers()) == 1
    assert logging.getLogger().level == logging.WARNING


def test_unknown_level_defaults_to_info() -> None:
    configure_logging(LoggingConfig(level="chatty"))
    assert logging.getLogger().level == logging.INFO


def test_file_output_through_queue(tmp_path) -> None:
    log_file = tmp_path / "logs" / "vfs.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("workspace_vfs.test").info("hello from the workspace")
    listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)
    listener.stop()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO | workspace_vfs.test | hello from the workspace" in content


def test_unwritable_log_file_falls_back_to_console(capsys) -> None:
    with patch(
        "workspace_vfs.infra.logging.handlers.RotatingFileHandler",
        side_effect=PermissionError("denied"),
    ):
        configure_logging(LoggingConfig(console=True, log_file="/nowhere/vfs.log"))

    assert "Cannot open log file" in capsys.readouterr().err
    assert len(_our_handlers()) == 1


def test_no_sinks_leaves_root_unconfigured() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))
    assert _our_handlers() == []
    assert not getattr(logging.getLogger(), _CONFIGURED_FLAG_ATTR, False)


def test_recent_logs_tail(tmp_path) -> None:
    log_file = tmp_path / "vfs.log"
    log_file.write_text("".join(f"line {i}\n" for i in range(10)), encoding="utf-8")

    with patch("workspace_vfs.infra.logging.core.get_default_log_path", return_value=str(log_file)):
        assert get_recent_logs(3) == "line 7\nline 8\nline 9\n"


def test_recent_logs_missing_file(tmp_path) -> None:
    with patch(
        "workspace_vfs.infra.logging.core.get_default_log_path",
        return_value=str(tmp_path / "absent.log"),
    ):
        assert get_recent_logs() == "Log file not found."
