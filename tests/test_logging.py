from __future__ import annotations

import io
import logging
from pathlib import Path

from policy_analytics.logging_config import configure_logging


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_file_and_accepts_level_name(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "analytics.log"
    stream = io.StringIO()
    configure_logging(log_path, "warning", stream=stream)

    logging.getLogger("policy_analytics.test").warning("window fallback")
    for h in logging.getLogger().handlers:
        h.flush()

    assert logging.getLogger().level == logging.WARNING
    assert "window fallback" in stream.getvalue()
    assert "window fallback" in log_path.read_text(encoding="utf-8")

    configure_logging(None)
