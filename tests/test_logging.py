import logging

import pytest

from fortune_api.logging_config import setup_logging


@pytest.fixture
def bare_root():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_log_file_receives_records(bare_root, tmp_path):
    log_file = tmp_path / "logs" / "fortune.log"

    setup_logging("warning", str(log_file))
    logging.getLogger("fortune_api.tests").warning("cookie crumbled")
    for handler in bare_root.handlers:
        handler.flush()

    assert bare_root.level == logging.WARNING
    assert len(bare_root.handlers) == 2
    assert "[WARNING] fortune_api.tests: cookie crumbled" in log_file.read_text(encoding="utf-8")


def test_configured_root_is_left_alone(bare_root, tmp_path):
    existing = logging.NullHandler()
    bare_root.addHandler(existing)

    setup_logging("DEBUG", str(tmp_path / "unused.log"))

    assert bare_root.handlers == [existing]
    assert not (tmp_path / "unused.log").exists()
