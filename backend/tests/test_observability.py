from __future__ import annotations

import pytest
from pydantic import ValidationError

import duplicate_detector.core.observability as obs
from duplicate_detector.core import config as cfg
from duplicate_detector.models.enums import GroupingMode


def test_init_sentry_noop_without_dsn(monkeypatch):
    monkeypatch.setattr(cfg.settings, "SENTRY_DSN", None)
    assert obs.init_sentry("test") is False


def test_capture_noop_without_dsn(monkeypatch):
    monkeypatch.setattr(cfg.settings, "SENTRY_DSN", None)
    called = {"n": 0}
    monkeypatch.setattr(obs.sentry_sdk, "capture_exception", lambda exc: called.__setitem__("n", 1))
    obs.sentry_capture(RuntimeError("x"))
    assert called["n"] == 0


def test_capture_forwards_when_configured(monkeypatch):
    monkeypatch.setattr(cfg.settings, "SENTRY_DSN", "https://key@example.invalid/1")
    seen = []
    monkeypatch.setattr(obs.sentry_sdk, "capture_exception", seen.append)
    exc = RuntimeError("boom")
    obs.sentry_capture(exc)
    assert seen == [exc]


def test_before_send_strips_body_and_auth():
    event = {"request": {"headers": {"Authorization": "Bearer t", "Accept": "*/*"}, "data": {"receipts": []}}}
    scrubbed = obs._before_send(event)
    assert scrubbed["request"]["headers"] == {"Accept": "*/*"}
    assert "data" not in scrubbed["request"]


def test_settings_rejects_unknown_grouping_mode(monkeypatch):
    monkeypatch.setenv("GROUPING_MODE", "transitive")
    with pytest.raises(ValidationError):
        cfg.Settings()


def test_settings_reads_grouping_mode(monkeypatch):
    monkeypatch.setenv("GROUPING_MODE", "connected")
    assert cfg.Settings().GROUPING_MODE is GroupingMode.CONNECTED


def test_settings_defaults():
    settings = cfg.Settings()
    assert settings.MAX_BATCH_SIZE == 1000
    assert settings.GROUPING_MODE is GroupingMode.ANCHOR
    assert settings.PORT == 5004
