import importlib
import sys
import types
import os
from pathlib import Path

import pytest

import linkcollector
import linkcollector.config


@pytest.fixture(autouse=True)
def restore_config_module():
    original = sys.modules["linkcollector.config"]
    yield
    sys.modules["linkcollector.config"] = original
    linkcollector.config = original


def _reload_config():
    sys.modules.pop("linkcollector.config", None)
    return importlib.import_module("linkcollector.config")


def test_environment_values_are_read(monkeypatch):
    monkeypatch.setenv("USER_AGENT", "X-Agent")
    monkeypatch.setenv("CRAWL_DELAY_MS", "250")
    monkeypatch.setenv("LOG_LEVEL", " DEBUG ")
    cfg = _reload_config()
    assert cfg.get_str_env("USER_AGENT", "LinkCollector/1.0") == "X-Agent"
    assert cfg.CRAWL_DELAY_MS == 250
    assert cfg.LOG_LEVEL == "debug"


def test_invalid_int_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("CRAWL_DELAY_MS", "soon")
    cfg = _reload_config()
    assert cfg.CRAWL_DELAY_MS == 1000
    assert cfg.get_int_env("CRAWL_DELAY_MS", 5) == 5


def test_empty_values_use_defaults(monkeypatch):
    monkeypatch.setenv("DEFAULT_DEPTH", "")
    monkeypatch.delenv("MULTI_CRAWL_CONCURRENCY", raising=False)
    cfg = _reload_config()
    assert cfg.DEFAULT_DEPTH == 1
    assert cfg.get_str_env("DEFAULT_DEPTH", "fallback") == "fallback"
    assert cfg.multi_crawl_concurrency() == 3


def test_dotenv_present_but_fails_to_load(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=FromFile")
    monkeypatch.chdir(tmp_path)

    fake = types.SimpleNamespace(load_dotenv=lambda: False)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    with pytest.raises(RuntimeError):
        _reload_config()


def test_dotenv_loads_sets_variables(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=DotenvAgent")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("USER_AGENT", raising=False)

    def fake_load():
        # emulate dotenv behavior: read .env and set os.environ
        p = Path(".env")
        for line in p.read_text().splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                monkeypatch.setenv(k, v)
        return True

    fake = types.SimpleNamespace(load_dotenv=fake_load)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    cfg = _reload_config()
    assert cfg.get_str_env("USER_AGENT", "LinkCollector/1.0") == "DotenvAgent"
    assert os.environ["USER_AGENT"] == "DotenvAgent"
