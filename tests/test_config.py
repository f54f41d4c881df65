import json
import logging

import pytest

from ocrlayout.config import DEFAULT_CONFIG_PATH, load_layout_config
from ocrlayout.layout.model import ReconstructionOptions


def test_default_config_file_is_loadable():
    cfg = load_layout_config()
    assert cfg["line_width"] == 56
    assert cfg["max_spaces"] == 10
    assert DEFAULT_CONFIG_PATH.endswith("layout.json")


def test_missing_config_returns_empty_and_warns(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="ocrlayout.config"):
        cfg = load_layout_config(str(tmp_path / "nope.json"))
    assert cfg == {}
    assert "not found" in caplog.text


def test_invalid_json_returns_empty(tmp_path, caplog):
    path = tmp_path / "layout.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="ocrlayout.config"):
        assert load_layout_config(str(path)) == {}
    assert "Could not load" in caplog.text


def test_options_from_config_with_overrides(tmp_path, caplog):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"line_width": 48, "max_spaces": 6, "colour": "blue"}), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="ocrlayout.config"):
        opts = ReconstructionOptions.from_config(str(path), max_spaces=4, min_confidence=None)
    assert opts.line_width == 48
    assert opts.max_spaces == 4
    assert opts.min_confidence is None
    assert "colour" in caplog.text


def test_options_from_config_validates_values(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"line_width": 0}), encoding="utf-8")
    with pytest.raises(ValueError):
        ReconstructionOptions.from_config(str(path))


def test_options_from_default_config_match_builtin_defaults():
    assert ReconstructionOptions.from_config() == ReconstructionOptions()
