import json

import structlog
from hash_tickler.logs import configure_logging


def test_json_logs_go_to_stderr(capsys):
    configure_logging(json_logs=True)
    try:
        structlog.get_logger().info("progress", tried=10)
    finally:
        structlog.reset_defaults()

    captured = capsys.readouterr()
    assert captured.out == ""
    line = json.loads(captured.err.strip().splitlines()[-1])
    assert line["event"] == "progress"
    assert line["tried"] == 10
    assert line["level"] == "info"


def test_debug_is_filtered_unless_verbose(capsys):
    configure_logging()
    try:
        structlog.get_logger().debug("hidden")
        configure_logging(verbose=True)
        structlog.get_logger().debug("shown")
    finally:
        structlog.reset_defaults()

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err
