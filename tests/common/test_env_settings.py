from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_int, env_str
from common.logging import _resolve_level, setup_default_logging


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    assert env_int("SWB_TEST_INT", 5) == 5
    monkeypatch.setenv("SWB_TEST_INT", " 12 ")
    assert env_int("SWB_TEST_INT", 5) == 12
    monkeypatch.setenv("SWB_TEST_INT", "-3")
    assert env_int("SWB_TEST_INT", 5, min_value=0) == 0
    monkeypatch.setenv("SWB_TEST_INT", "x")
    assert env_int("SWB_TEST_INT", 5) == 5


def test_env_str_blank_is_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SWB_TEST_STR", "   ")
    assert env_str("SWB_TEST_STR", "dflt") == "dflt"


def test_reload_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = settings.get()
    assert cfg.STATE_DIR is None
    assert cfg.LOG_LEVEL == "INFO"
    assert cfg.RANDOM_SEED is None
    monkeypatch.setenv("SWB_LOG_LEVEL", "debug")
    monkeypatch.setenv("SWB_RANDOM_SEED", "42")
    monkeypatch.setenv("SWB_STATE_DIR", "/tmp/swb")
    settings.reload_from_env()
    cfg = settings.get()
    assert (cfg.LOG_LEVEL, cfg.RANDOM_SEED, cfg.STATE_DIR) == ("DEBUG", 42, "/tmp/swb")


def test_resolve_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert _resolve_level("warning") == logging.WARNING
    assert _resolve_level(logging.ERROR) == logging.ERROR
    assert _resolve_level("nonsense") == logging.INFO
    monkeypatch.setenv("SWB_LOG_LEVEL", "DEBUG")
    settings.reload_from_env()
    assert _resolve_level(None) == logging.DEBUG


def test_setup_default_logging_respects_existing_handlers() -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    level = root.level
    try:
        setup_default_logging("DEBUG")
        assert root.level == level
    finally:
        root.removeHandler(handler)
