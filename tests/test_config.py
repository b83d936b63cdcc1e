from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from iwd.core import config as core_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("VERCEL", "SERVERLESS", "DATA_DIR", "STATIC_DIR", "PORT", "HOST", "LOG_LEVEL", "DEBUG", "APP_ENV"):
        monkeypatch.delenv(var, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


def test_defaults_use_project_data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = core_config.get_settings()
    assert settings.mode == core_config.MODE_SERVER
    assert not settings.serverless
    assert settings.data_dir == tmp_path / "data"
    assert settings.static_dir == tmp_path / "public"
    assert settings.port == 3000
    assert settings.log_level == "INFO"
    assert settings.app_env == "dev"


def test_vercel_switches_to_tmp_storage(monkeypatch):
    monkeypatch.setenv("VERCEL", "1")
    settings = core_config.get_settings()
    assert settings.serverless
    assert settings.data_dir == Path("/tmp") / "data"
    store_config = settings.store_config()
    assert store_config.serverless
    assert store_config.base_dir == settings.data_dir


def test_data_dir_override(tmp_path, monkeypatch):
    monkeypatch.setenv("SERVERLESS", "true")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "custom"))
    assert core_config.get_settings().data_dir == tmp_path / "custom"


def test_invalid_port_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT", "abc")
    assert core_config.get_settings().port == 3000


def test_debug_flag_lowers_log_level(monkeypatch):
    monkeypatch.setenv("DEBUG", "1")
    assert core_config.get_settings().log_level == "DEBUG"
    core_config.get_settings.cache_clear()
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert core_config.get_settings().log_level == "WARNING"


def test_settings_are_cached():
    assert core_config.get_settings() is core_config.get_settings()
