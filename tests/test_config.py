"""
Tests for depvis_config
"""
import pytest

from depvis_config import is_true, load_config
from depvis_errors import ConfigError


def write_config(tmp_path, body):
    path = tmp_path / "config.xml"
    path.write_text(f"<depvis>{body}</depvis>", encoding="utf-8")
    return str(path)


def test_full_config(tmp_path):
    cfg = load_config(write_config(tmp_path, (
        "<entrypoint>four</entrypoint>"
        "<mode>topo</mode>"
        "<working_directory>/src/repo</working_directory>"
        "<image>out/graph</image>"
        "<image_format>svg</image_format>"
        "<debug>true</debug>"
    )))
    assert cfg == {
        "entrypoint": "four",
        "mode": "topo",
        "working_directory": "/src/repo",
        "image": "out/graph",
        "image_format": "svg",
        "debug": "true",
    }


def test_defaults(tmp_path):
    cfg = load_config(write_config(tmp_path, "<entrypoint> four </entrypoint><mode></mode>"))
    assert cfg["entrypoint"] == "four"
    assert cfg["mode"] is None
    assert cfg["image"] is None
    assert cfg["image_format"] == "png"
    assert is_true(cfg["debug"]) is False


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "absent.xml"))


def test_malformed_xml(tmp_path):
    path = tmp_path / "config.xml"
    path.write_text("<depvis><entrypoint>", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(str(path))


def test_invalid_mode(tmp_path):
    with pytest.raises(ConfigError, match="invalid mode"):
        load_config(write_config(tmp_path, "<mode>tree</mode>"))


def test_invalid_debug(tmp_path):
    with pytest.raises(ConfigError, match="invalid debug"):
        load_config(write_config(tmp_path, "<debug>maybe</debug>"))
