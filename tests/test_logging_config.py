import logging
from logging.handlers import RotatingFileHandler

from pdf_fetch.logging_config import LOG_FILE, add_file_handler, get_logger


def _package_logger():
    return logging.getLogger("pdf_fetch")


def test_children_share_package_handlers():
    first = get_logger("unit")

    assert first is get_logger("unit")
    assert first.name == "pdf_fetch.unit"
    assert first.handlers == []
    assert len([h for h in _package_logger().handlers if type(h) is logging.StreamHandler]) == 1


def test_no_log_file_unless_configured():
    get_logger("unit")
    assert not any(isinstance(h, RotatingFileHandler) for h in _package_logger().handlers)


def test_file_handler_writes_under_given_dir(tmp_path):
    handler = add_file_handler(tmp_path / "logs")
    try:
        get_logger("unit_file").warning("hello from the test suite")
        handler.flush()
        text = (tmp_path / "logs" / LOG_FILE).read_text(encoding="utf-8")
    finally:
        _package_logger().removeHandler(handler)
        handler.close()

    assert "[WARNING] pdf_fetch.unit_file: hello from the test suite" in text


def test_propagates_to_root(caplog):
    with caplog.at_level(logging.INFO):
        get_logger("unit_prop").info("visible")
    assert "visible" in caplog.text
