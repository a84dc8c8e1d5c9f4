from __future__ import annotations

import logging

from twitch_eventsub.logs.logger import EventSubLogger


def test_logger_template_and_fallback(caplog) -> None:  # type: ignore[no-untyped-def]
    log = EventSubLogger("test_eventsub_logger")
    caplog.set_level(logging.INFO)

    log.log_event("moderation", "message_deleted", message_id="m-1")
    # Unknown template should fallback and mark derived
    log.log_event("custom_domain", "custom_action", extra_field=123)

    msgs = [r.message for r in caplog.records]
    if not any("Deleted message m-1" in m for m in msgs):
        raise AssertionError("Expected message_deleted template in logs")
    if not any("custom domain: custom action" in m for m in msgs):
        raise AssertionError("Expected derived fallback for unknown template")


def test_logger_missing_placeholder_keeps_raw_template(caplog) -> None:  # type: ignore[no-untyped-def]
    log = EventSubLogger("test_eventsub_logger2")
    caplog.set_level(logging.INFO)
    log.log_event("moderation", "timeout", user_id="555")
    msgs = [r.message for r in caplog.records]
    if not any("{duration}" in m for m in msgs):
        raise AssertionError("Expected unformatted template when a field is missing")


def test_logger_explicit_human_and_prefix(caplog) -> None:  # type: ignore[no-untyped-def]
    log = EventSubLogger("test_eventsub_logger3")
    caplog.set_level(logging.INFO)
    log.log_event("chat", "custom", human="hello world", broadcaster="somechannel")
    first = caplog.records[0].message
    assert first == f"[{'somechannel'.ljust(16)}] hello world"


def test_logger_default_prefix(caplog) -> None:  # type: ignore[no-untyped-def]
    log = EventSubLogger("test_eventsub_logger4")
    caplog.set_level(logging.INFO)
    log.log_event("chat", "custom", human="hi")
    assert caplog.records[0].message.startswith("[eventsub")


def test_logger_debug_alignment(caplog, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("DEBUG", "1")
    log = EventSubLogger("test_eventsub_logger5")
    caplog.set_level(logging.DEBUG)
    log.log_event("token", "refreshed", lifetime="1h 0m 0s")
    first = caplog.records[0].message
    if "token_refreshed" not in first:
        raise AssertionError("Expected event name present")
    segment = first.split("[")[0]
    if len(segment) < EventSubLogger.EVENT_NAME_WIDTH:
        raise AssertionError("Expected debug alignment width >= 32 for event column")
    if "(lifetime=1h 0m 0s)" not in first:
        raise AssertionError("Expected context values in debug output")


def test_logger_debug_truncates_long_event_names(caplog, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("DEBUG", "true")
    log = EventSubLogger("test_eventsub_logger6")
    caplog.set_level(logging.DEBUG)
    log.log_event("a_really_long_domain_name", "with_an_even_longer_action", human="x")
    event_col = caplog.records[0].message.split(" ", 1)[0]
    assert len(event_col) == EventSubLogger.EVENT_NAME_WIDTH
    assert event_col.endswith("…")


def test_logger_level_filtering(caplog) -> None:  # type: ignore[no-untyped-def]
    log = EventSubLogger("test_eventsub_logger7")
    caplog.set_level(logging.INFO)
    log.set_level(logging.WARNING)
    log.log_event("http", "request", level=logging.INFO, request="GET x")
    log.log_event("http", "failure", level=logging.WARNING, request="GET x", status=500, error="TransportError")
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
