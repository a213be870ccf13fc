from __future__ import annotations

import io
import logging

from dlpsynth.utils.logging import ROOT_LOGGER, configure_logging, get_logger


def test_get_logger_namespacing() -> None:
    assert get_logger("driver").name == "dlpsynth.driver"
    assert get_logger("dlpsynth.io").name == "dlpsynth.io"
    assert get_logger(ROOT_LOGGER).name == ROOT_LOGGER


def test_configure_logging_is_idempotent() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    before = list(root.handlers)
    try:
        first = io.StringIO()
        second = io.StringIO()
        configure_logging("INFO", stream=first)
        configure_logging("DEBUG", stream=second)
        ours = [h for h in root.handlers if h not in before]
        assert len(ours) <= 1
        get_logger("test").debug("hello debug")
        assert "hello debug" in second.getvalue()
        assert first.getvalue() == ""
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
        root.setLevel(logging.NOTSET)
