import json
import logging
import os

import pytest

from raystream import playground
from raystream.utils import load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


# --- utils ---

def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation": {"max_steps": 10}}))
    assert load_config(str(path)) == {"simulation": {"max_steps": 10}}


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_setup_logging_level(restore_root_logger):
    setup_logging({"logging": {"level": "warning"}})
    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1

    setup_logging({"logging": {"level": "warning"}}, level="debug")
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


# --- CLI ---

def test_list(capsys):
    assert playground.main(["--list"]) == 0
    out = capsys.readouterr().out
    for name in playground.SCENARIOS:
        assert name in out


def test_unknown_scenario(tmp_path, capsys, restore_root_logger):
    assert playground.main(["nope", "-o", str(tmp_path)]) == 1
    assert "Unknown scenario" in capsys.readouterr().err


def test_bad_config(tmp_path, capsys, restore_root_logger):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation": {"bogus": 1}}))
    assert playground.main(["fan", "--config", str(path), "-o", str(tmp_path)]) == 2
    assert "bogus" in capsys.readouterr().err


@pytest.mark.parametrize("config", [
    {"simulation": {"max_steps": None}},
    {"simulation": {"trail_radius": "wide"}},
    {"simulation": [1, 2]},
    {"logging": ["DEBUG"]},
    {"logging": {"level": "LOUD"}},
])
def test_malformed_config_exits_with_status_2(tmp_path, capsys, restore_root_logger, config):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config))
    assert playground.main(["fan", "--config", str(path), "-o", str(tmp_path)]) == 2
    assert "Could not load config" in capsys.readouterr().err


def test_unknown_log_level_exits_with_status_2(tmp_path, capsys, restore_root_logger):
    assert playground.main(["fan", "--log-level", "LOUD", "-o", str(tmp_path)]) == 2
    assert "LOUD" in capsys.readouterr().err
    assert not (tmp_path / "fan.png").exists()


def test_renders_scenario(tmp_path, restore_root_logger):
    out_dir = tmp_path / "out"
    assert playground.main(["point-magnet", "-o", str(out_dir), "--log-level", "WARNING"]) == 0
    assert os.path.getsize(out_dir / "point-magnet.png") > 0


def test_renders_name_with_config(tmp_path, restore_root_logger):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation": {"max_steps": 40}, "logging": {"level": "ERROR"}}))
    assert playground.main([
        "name", "--name", "Research", "--width", "640", "--height", "360",
        "--config", str(path), "-o", str(tmp_path),
    ]) == 0
    assert (tmp_path / "name.png").exists()
