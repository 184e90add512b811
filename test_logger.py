import logging

import config_paths
import logger


def test_setup_logger_names():
    assert logger.setup_logger().name == "scroll"
    assert logger.setup_logger("viewer").name == "scroll.viewer"


def test_configure_writes_to_log_file(monkeypatch, tmp_path):
    monkeypatch.setattr(config_paths, "CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(config_paths, "LOG_PATH", str(tmp_path / "scroll.log"))
    monkeypatch.setattr(logger, "_file_handler", None)

    root = logger.configure("info")
    handler = logger._file_handler
    try:
        assert root.level == logging.INFO
        logger.setup_logger("line_feed").info("end of input after %d lines", 3)
        logger.setup_logger("line_feed").debug("not written")
        handler.flush()
        text = (tmp_path / "scroll.log").read_text(encoding="utf-8")
        assert "scroll.line_feed - INFO - end of input after 3 lines" in text
        assert "not written" not in text
    finally:
        root.removeHandler(handler)
        handler.close()
