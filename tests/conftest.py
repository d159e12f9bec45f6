import stat

import pytest
from fastapi.testclient import TestClient

from fortune_api.config import Settings
from fortune_api.main import create_app


FAKE_FORTUNE = """#!/bin/sh
[ "$1" = "-a" ] || exit 2
shift
case "$1" in
  "") printf 'A default fortune.\\n' ;;
  riddles) printf 'What has keys but cannot open locks?\\n' ;;
  wisdom) printf 'Know thyself.\\n  ' ;;
  binary) printf '\\377\\376\\n' ;;
  slow) exec sleep 5 ;;
  *) echo "No fortunes found" >&2; exit 1 ;;
esac
"""


@pytest.fixture
def fortune_dir(tmp_path):
    directory = tmp_path / "fortune"
    directory.mkdir()
    for name in ("wisdom", "riddles", "README.md", "wisdom.dat", "riddles.u8"):
        (directory / name).write_text("%\n", encoding="utf-8")
    return directory


@pytest.fixture
def fortune_command(tmp_path):
    script = tmp_path / "fortune.sh"
    script.write_text(FAKE_FORTUNE, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)


@pytest.fixture
def settings(fortune_dir, fortune_command):
    return Settings(
        fortune_dir=str(fortune_dir),
        fortune_command=fortune_command,
        fortune_timeout=2.0,
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
