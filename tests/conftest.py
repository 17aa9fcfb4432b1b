import json
import logging

import pytest


@pytest.fixture
def write_manifest(tmp_path):
    """Write a package.json under tmp_path/<dirname> and return its path."""

    def _write(dirname, content):
        pkg_dir = tmp_path / dirname
        pkg_dir.mkdir(parents=True, exist_ok=True)
        path = pkg_dir / "package.json"
        path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def diamond_repo(write_manifest):
    return [
        write_manifest("one", {"name": "one", "dependencies": {"two": "1.0.0"}, "devDependencies": {"three": "^1.0.0"}}),
        write_manifest("two", {"name": "two", "dependencies": {"four": "*"}}),
        write_manifest("three", {"name": "three", "devDependencies": {"four": "*"}}),
        write_manifest("four", {"name": "four"}),
    ]


@pytest.fixture(autouse=True)
def restore_root_logging():
    # depvis.main() reconfigures the root logger onto the captured stderr
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
