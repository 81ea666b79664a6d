import json

import pytest

from utils import app_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "cfg" / "config.json"
    monkeypatch.setattr(app_config, "CONFIG_DIR", path.parent)
    monkeypatch.setattr(app_config, "CONFIG_FILE", path)
    return path


def test_missing_config_is_empty(config_file):
    assert app_config.load_config() == {}
    assert app_config.get_db_folder() is None


def test_corrupt_config_is_empty(config_file):
    config_file.parent.mkdir(parents=True)
    config_file.write_text("{not json", encoding="utf-8")
    assert app_config.load_config() == {}


def test_save_and_reload(config_file):
    app_config.save_config({"db_folder": "/data/expenses"})
    app_config.set_report_folder("/reports")
    assert json.loads(config_file.read_text(encoding="utf-8")) == {
        "db_folder": "/data/expenses",
        "report_folder": "/reports",
    }
    assert not config_file.with_suffix(".tmp").exists()

    assert app_config.get_db_folder() == "/data/expenses"
    assert app_config.get_report_folder() == "/reports"


def test_log_level(config_file):
    assert app_config.get_log_level() == "WARNING"
    app_config.save_config({"log_level": "debug"})
    assert app_config.get_log_level() == "DEBUG"
    app_config.save_config({"log_level": "chatty"})
    assert app_config.get_log_level() == "WARNING"
