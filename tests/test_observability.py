"""Structured logging, redaction and tool instrumentation."""

import asyncio
import json
import logging

import pytest

from stylist_app.logging_config import JsonFormatter, correlation_context, log_event, redact_for_log
from tools.observability import instrument_tool


def test_redaction_scrubs_user_text_urls_and_emails() -> None:
    payload = {
        "user_id": "ana",
        "message": "I'm going to Tokyo",
        "nested": {"link": "https://shop.example.com/p/1", "contact": "ana@example.com", "count": 3},
        "urls": ["https://img.example.com/a.jpg", "plain"],
    }

    scrubbed = redact_for_log(payload)

    assert scrubbed["user_id"] == "[redacted]"
    assert scrubbed["message"] == "[redacted]"
    assert scrubbed["nested"] == {"link": "[redacted]", "contact": "[redacted-email]", "count": 3}
    assert scrubbed["urls"] == ["[redacted-url]", "plain"]


def test_json_formatter_includes_event_and_correlation_id() -> None:
    logger = logging.getLogger("tests.observability.formatter")
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = _Collect()
    logger.addHandler(handler)
    try:
        with correlation_context("corr-123"):
            log_event(logger, logging.WARNING, "resolution_failure", category="shoes", reason="ImageSearchError")
    finally:
        logger.removeHandler(handler)

    payload = json.loads(JsonFormatter().format(records[0]))
    assert payload["event"] == "resolution_failure"
    assert payload["correlation_id"] == "corr-123"
    assert payload["category"] == "shoes"
    assert payload["level"] == "WARNING"


def test_instrument_tool_wraps_coroutines_and_reraises() -> None:
    calls = []

    @instrument_tool("demo_search")
    async def search(query: str) -> list:
        calls.append(query)
        return [query]

    @instrument_tool("demo_failure")
    async def explode() -> None:
        raise RuntimeError("boom")

    assert asyncio.run(search("linen shirt")) == ["linen shirt"]
    assert calls == ["linen shirt"]
    with pytest.raises(RuntimeError):
        asyncio.run(explode())


def test_instrument_tool_wraps_sync_functions() -> None:
    @instrument_tool("demo_sync")
    def add(a: int, b: int = 1) -> int:
        return a + b

    assert add(2, b=3) == 5
