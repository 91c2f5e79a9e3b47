"""Metrics, log context and config redaction around API calls."""

import io
import json
import logging

import pytest

from stripeclient.common.logging import ContextFilter, configure_logging, endpoint_ctx, logger, request_id_ctx
from stripeclient.common.metrics import metrics_payload
from stripeclient.common.startup import redact
from stripeclient.resources import customer


@pytest.fixture
def restore_logger():
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_requests_are_counted(fake_stripe, opts):
    """Successful calls increment the request counter."""

    fake_stripe.route("GET", "/v1/customers/cus_1", body={"id": "cus_1", "object": "customer"})

    customer.retrieve("cus_1", opts)

    payload, content_type = metrics_payload()
    text = payload.decode("utf-8")
    assert content_type.startswith("text/plain")
    assert 'stripe_requests_total{method="GET",endpoint="customers/:id",outcome="ok"}' in text


def test_failures_are_counted_by_source(fake_stripe, opts):
    """API errors are counted under the `stripe` source."""

    customer.retrieve("cus_unknown", opts)

    text = metrics_payload()[0].decode("utf-8")
    assert 'stripe_request_errors_total{source="stripe",code="unknown"}' in text


def test_log_records_carry_request_context():
    """The filter copies request id and endpoint onto records."""

    record = logging.LogRecord("stripeclient", logging.INFO, __file__, 1, "msg", None, None)
    request_token = request_id_ctx.set("req_1")
    endpoint_token = endpoint_ctx.set("/v1/customers")
    try:
        ContextFilter().filter(record)
    finally:
        request_id_ctx.reset(request_token)
        endpoint_ctx.reset(endpoint_token)

    assert record.request_id == "req_1"
    assert record.endpoint == "/v1/customers"
    assert record.service_name


def test_configure_logging_writes_json_lines(restore_logger):
    """Configured logs are JSON with renamed level and request fields."""

    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    token = request_id_ctx.set("req_9")
    try:
        logger.info("customer fetched")
    finally:
        request_id_ctx.reset(token)

    line = json.loads(stream.getvalue().splitlines()[-1])
    assert line["level"] == "INFO"
    assert line["logger"] == "stripeclient"
    assert line["request_id"] == "req_9"
    assert line["message"] == "customer fetched"


def test_request_context_is_cleared_after_call(fake_stripe, opts):
    """Context variables are reset once the call returns."""

    fake_stripe.route("GET", "/v1/customers/cus_1", body={"id": "cus_1", "object": "customer"})

    customer.retrieve("cus_1", opts)

    assert request_id_ctx.get() == ""
    assert endpoint_ctx.get() == ""


def test_secret_values_are_redacted():
    """Secret settings keep only the key prefix; others pass through."""

    assert redact("api_key", "sk_test_abc123") == "sk_test_<redacted>"
    assert redact("api_key", None) == "<unset>"
    assert redact("base_url", "https://api.stripe.com") == "https://api.stripe.com"


def test_redaction_drops_every_secret_segment():
    """Underscores inside the secret part do not leak it."""

    assert redact("api_key", "sk_test_abc_def") == "sk_test_<redacted>"
    assert redact("api_key", "sk_live_4eC39_HqLyjW_DarjtT1") == "sk_live_<redacted>"
    assert redact("api_key", "abc_def") == "<redacted>"
    assert redact("api_key", "plainsecret") == "<redacted>"
