"""Shared fixtures: a fake Stripe API served through `httpx.MockTransport`."""

import json
from urllib.parse import parse_qsl

import httpx
import pytest


class FakeStripe:
    """Records every request and answers from a route table.

    Routes map `(method, path)` to a `(status, body)` pair or to a callable
    taking the `httpx.Request`. Unrouted calls get a 404 error body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], object] = {}

    def route(self, method: str, path: str, status: int = 200, body=None, raw: bytes | None = None, handler=None):
        if handler is None:
            content = raw if raw is not None else json.dumps(body).encode("utf-8")

            def handler(_request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, content=content, headers={"request-id": "req_test"})

        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(
                404,
                json={"error": {"type": "invalid_request_error", "message": f"Unrecognized request URL ({request.url.path})"}},
            )
        return handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> dict[str, str]:
        return dict(parse_qsl(self.last.content.decode("utf-8"), keep_blank_values=True))

    def last_query(self) -> list[tuple[str, str]]:
        return list(self.last.url.params.multi_items())


@pytest.fixture
def fake_stripe() -> FakeStripe:
    return FakeStripe()


@pytest.fixture
def opts(fake_stripe: FakeStripe) -> dict:
    return {"api_key": "sk_test_123", "transport": httpx.MockTransport(fake_stripe)}
