"""Request builder and the shared call pipeline behind every resource operation.

Resource modules compose the stages:

    new_request(opts)
    -> put_endpoint("customers/cus_123")
    -> put_method("post")
    -> put_params({...})
    -> cast_to_id(["coupon"])
    -> make_request(into=Customer)

Each stage returns a new `Request`; nothing is mutated in place and nothing
outlives the call.
"""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import uuid4

import httpx
from pydantic import BaseModel, ConfigDict, Field

from stripeclient.api.converter import decode_response
from stripeclient.api.encoding import encode_body, encode_params
from stripeclient.api.options import RequestOptions
from stripeclient.api.transport import send
from stripeclient.common.config import settings
from stripeclient.common.errors import ConfigurationError, StripeError
from stripeclient.common.logging import endpoint_ctx, logger, request_id_ctx
from stripeclient.common.metrics import (
    stripe_request_duration_seconds,
    stripe_request_errors_total,
    stripe_requests_total,
)
from stripeclient.common.result import Result
from stripeclient.common.startup import log_client_config
from stripeclient.common.telemetry import RequestSpan
from stripeclient.common.tracing import get_tracer
from stripeclient.resources.base import StripeObject


ALLOWED_METHODS = {"GET", "POST", "DELETE"}
API_PREFIX = "/v1/"
USER_AGENT = "stripeclient/0.1.0"


class Request(BaseModel):
    """Everything needed to issue one API call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    options: RequestOptions
    api_key: str | None
    api_version: str
    base_url: str
    endpoint: str | None = None
    method: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + API_PREFIX + (self.endpoint or "")


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    return any(key.lower() == name.lower() for key in headers)


def new_request(opts: RequestOptions | Mapping[str, Any] | None = None) -> Request:
    """Start a request from per-call options layered over `settings`.

    Raises `ConfigurationError` for unknown option names, conflicting
    credentials, or when no API key is available at all.
    """

    options = RequestOptions.parse(opts)
    custom_auth = _has_header(options.headers, "Authorization")
    if options.api_key and custom_auth:
        raise ConfigurationError(
            "api_key and an Authorization header were both given", code="conflicting_credentials"
        )
    api_key = None if custom_auth else options.api_key or settings.api_key
    if not api_key and not custom_auth:
        raise ConfigurationError(
            "no API key: pass api_key in options or set STRIPE_API_KEY", code="missing_api_key"
        )

    request = Request(
        options=options,
        api_key=api_key,
        api_version=options.api_version or settings.api_version,
        base_url=options.base_url or settings.api_base_url,
        params={"expand": list(options.expand)} if options.expand else {},
    )
    log_client_config(
        {
            "api_key": request.api_key,
            "api_version": request.api_version,
            "base_url": request.base_url,
            "connect_account": options.connect_account,
        }
    )
    return request


def put_endpoint(request: Request, endpoint: str) -> Request:
    return request.model_copy(update={"endpoint": endpoint.lstrip("/")})


def put_method(request: Request, method: str) -> Request:
    verb = method.upper()
    if verb not in ALLOWED_METHODS:
        raise ConfigurationError(f"unsupported HTTP method {method!r}", code="invalid_method")
    return request.model_copy(update={"method": verb})


def put_params(request: Request, params: Mapping[str, Any] | None) -> Request:
    """Merge `params` over any parameters already on the request."""

    if params is None:
        return request
    if not isinstance(params, Mapping):
        raise ConfigurationError(f"params must be a mapping, got {type(params).__name__}", code="invalid_params")
    return request.model_copy(update={"params": {**request.params, **params}})


def _reference_id(value: Any) -> Any:
    if isinstance(value, StripeObject) and value.id:
        return value.id
    if isinstance(value, Mapping) and isinstance(value.get("id"), str):
        return value["id"]
    return value


def cast_to_id(request: Request, fields: Iterable[str]) -> Request:
    """Reduce object references in the named params to their bare ids."""

    params = dict(request.params)
    for field in fields:
        if field in params:
            params[field] = _reference_id(params[field])
    return request.model_copy(update={"params": params})


def prefix_expansions(request: Request) -> Request:
    """Point expansions at list items (`customer` -> `data.customer`)."""

    expand = request.params.get("expand")
    if not expand:
        return request
    params = {**request.params, "expand": [f"data.{field}" for field in expand]}
    return request.model_copy(update={"params": params})


def build_headers(request: Request) -> dict[str, str]:
    options = request.options
    headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
        "Stripe-Version": request.api_version,
    }
    if request.api_key:
        headers["Authorization"] = f"Bearer {request.api_key}"
    if options.connect_account:
        headers["Stripe-Account"] = options.connect_account
    if request.method != "GET":
        headers["Content-Type"] = "application/x-www-form-urlencoded"
    if request.method == "POST":
        headers["Idempotency-Key"] = options.idempotency_key or str(uuid4())
    headers.update(options.headers)
    return headers


def _timeout(options: RequestOptions) -> httpx.Timeout:
    return httpx.Timeout(
        options.read_timeout or settings.read_timeout,
        connect=options.connect_timeout or settings.connect_timeout,
    )


def make_request(request: Request, into: type[StripeObject] | None = None) -> Result:
    """Send the request and decode the response into `into`.

    Every outcome is returned as a `Result`; network failures, API errors and
    undecodable bodies never raise.
    """

    if request.endpoint is None or request.method is None:
        raise ConfigurationError("request needs an endpoint and a method before it is sent", code="incomplete_request")

    options = request.options
    path = API_PREFIX + request.endpoint
    # GET carries params in the query string; every other verb in a form body.
    if request.method == "GET":
        query, content = encode_params(request.params) or None, None
    else:
        query, content = None, encode_body(request.params)

    span = RequestSpan(options.observer, {"method": request.method, "path": path})
    endpoint_token = endpoint_ctx.set(path)
    request_id_token = request_id_ctx.set("")
    try:
        with get_tracer().start_as_current_span("stripe.request") as trace_span:
            trace_span.set_attribute("http.method", request.method)
            trace_span.set_attribute("url.path", path)
            span.begin()
            status: int | None = None
            try:
                response = send(
                    request.method,
                    request.url,
                    headers=build_headers(request),
                    params=query,
                    content=content,
                    timeout=_timeout(options),
                    transport=options.transport,
                )
                status = response.status_code
                request_id_ctx.set(response.headers.get("request-id", ""))
                trace_span.set_attribute("http.status_code", status)
                result = decode_response(response, into)
            except StripeError as exc:
                result = Result.err(exc)
            duration_ns = span.end(status=status, outcome="ok" if result.is_ok else "error")
        _record(request, path, status, result, duration_ns)
    finally:
        request_id_ctx.reset(request_id_token)
        endpoint_ctx.reset(endpoint_token)
    return result


def _record(request: Request, path: str, status: int | None, result: Result, duration_ns: int) -> None:
    endpoint = _metric_endpoint(request.endpoint)
    outcome = "ok" if result.is_ok else "error"
    stripe_requests_total.labels(method=request.method, endpoint=endpoint, outcome=outcome).inc()
    stripe_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration_ns / 1e9)
    if result.is_ok:
        logger.info("stripe request method=%s path=%s status=%s", request.method, path, status)
        return
    error = result.error
    stripe_request_errors_total.labels(source=error.source, code=error.code or "unknown").inc()
    logger.warning(
        "stripe request failed method=%s path=%s status=%s source=%s code=%s message=%s",
        request.method,
        path,
        status,
        error.source,
        error.code,
        error.message,
    )


def _metric_endpoint(endpoint: str) -> str:
    # Collapse ids so label cardinality stays bounded: customers/cus_1/discount -> customers/:id/discount
    parts = endpoint.split("/")
    return "/".join(":id" if index % 2 == 1 else part for index, part in enumerate(parts))
