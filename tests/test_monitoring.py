import json
import logging
import sys

import pytest

from rtdb_admin.utilities.monitoring import MonitoringFactory, MonitoringService
from rtdb_admin.utilities.monitoring.logging import setup_logger
from rtdb_admin.utilities.monitoring.logging.formatters import JSONFormatter
from rtdb_admin.utilities.monitoring.metrics import MetricsCollector


@pytest.fixture
def service(tmp_path):
    return MonitoringService(
        "rtdb_admin_test",
        log_dir=str(tmp_path / "logs"),
        metrics_dir=str(tmp_path / "metrics"),
        level=logging.DEBUG
    )


def test_get_logger_is_cached(service):
    logger = service.get_logger("client")
    assert logger is service.get_logger("client")
    assert logger.name == "rtdb_admin_test.client"
    assert logger.level == logging.DEBUG


def test_file_handler_writes_json(service, tmp_path):
    logger = service.get_logger("http-client")
    logger.debug("GET /users -> 200", extra={"method": "GET", "path": "/users", "status": 200})
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "logs" / "http-client.log").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "GET /users -> 200"
    assert record["level"] == "DEBUG"
    assert record["method"] == "GET"
    assert record["status"] == 200


def test_setup_logger_replaces_handlers():
    first = setup_logger("rtdb_admin_test.replace")
    second = setup_logger("rtdb_admin_test.replace")
    assert first is second
    assert len(second.handlers) == 1


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "request failed", (), sys.exc_info()
        )

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "request failed"
    assert "RuntimeError: boom" in data["exception"]


def test_metrics_summary():
    collector = MetricsCollector()
    for value in (10.0, 30.0, 20.0):
        collector.record("rtdb.request.latency_ms", value, {"method": "GET"})

    assert collector.summary("rtdb.request.latency_ms") == {
        "count": 3,
        "total": 60.0,
        "min": 10.0,
        "max": 30.0,
    }
    assert collector.summary("missing")["count"] == 0

    collector.clear_metrics("rtdb.request.latency_ms")
    assert collector.get_metrics() == {}


def test_export_metrics(service):
    service.record_metric("rtdb.transaction.attempts", 2, {"path": "/counter"})

    output = service.export_metrics()

    with open(output, encoding="utf-8") as f:
        data = json.load(f)
    assert data["rtdb.transaction.attempts"][0]["value"] == 2
    assert data["rtdb.transaction.attempts"][0]["labels"] == {"path": "/counter"}


@pytest.mark.asyncio
async def test_requests_record_latency(ref, session, respond):
    collector = MonitoringFactory.get_monitoring_service().metrics_collector
    collector.clear_metrics()
    session.responses = [respond(200, {"a": 1})]

    await ref.get()

    metrics = collector.get_metrics("rtdb.request.latency_ms")["rtdb.request.latency_ms"]
    assert len(metrics) == 1
    assert metrics[0].labels == {"method": "GET", "status": "200"}


def test_configure_updates_existing_loggers():
    logger = MonitoringFactory.get_logger("configure-test")
    MonitoringFactory.configure(level="WARNING")
    try:
        assert logger.level == logging.WARNING
    finally:
        MonitoringFactory.configure(level="INFO")


def test_metrics_keep_only_recent_samples():
    collector = MetricsCollector(max_samples=100)
    for value in range(250):
        collector.record("rtdb.request.latency_ms", float(value))

    samples = collector.get_metrics("rtdb.request.latency_ms")["rtdb.request.latency_ms"]
    assert len(samples) == 100
    assert samples[0].value == 150.0
    assert samples[-1].value == 249.0


@pytest.mark.asyncio
async def test_request_metrics_stay_bounded(ref, session, respond):
    collector = MonitoringFactory.get_monitoring_service().metrics_collector
    collector.clear_metrics()
    session.responses = [respond(200, {"a": 1})]

    for _ in range(collector.max_samples + 50):
        await ref.get()

    assert len(session.requests) == collector.max_samples + 50
    assert collector.summary("rtdb.request.latency_ms")["count"] == collector.max_samples
