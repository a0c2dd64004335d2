import logging

from mandelexplorer.util.logging_setup import configure_root_logging, get_logger, parse_level


def test_file_handler_receives_records(tmp_path):
    log_file = tmp_path / "explorer.log"
    logger = configure_root_logging(level=logging.DEBUG, console=False, log_file=str(log_file))
    try:
        assert logger is get_logger()
        assert logger.name == "mandelexplorer"
        get_logger().info("Zooming to (%.6f, %.6f) at %.1fx", 0.1, 0.2, 2.0)
        for h in logger.handlers:
            h.flush()
        assert "Zooming to (0.100000, 0.200000) at 2.0x" in log_file.read_text()
    finally:
        configure_root_logging(console=False, log_file=None)


def test_reconfiguring_replaces_handlers():
    configure_root_logging(console=True, log_file=None)
    logger = configure_root_logging(console=True, log_file=None)
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    assert parse_level("nonsense") == logging.INFO
