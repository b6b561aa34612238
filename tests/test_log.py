"""Tests for the library logger."""

import importlib
from loguru import logger
from dollarbrace.lib import log


def test_host_sinks_survive_import():
    seen: list[str] = []
    host_sink = logger.add(seen.append, format="{message}")
    try:
        logger.remove(log.sink_id)
        importlib.reload(log)
        logger.info("host message")
    finally:
        logger.remove(host_sink)
    assert seen == ["host message\n"]


def test_record_filter_accepts_only_library_records():
    assert log.record_filter({"extra": {"app": "DOLLARBRACE"}})
    assert not log.record_filter({"extra": {}})
    assert not log.record_filter({"extra": {"app": "HOST"}})
