"""Single HTTP round trip over httpx. No retries."""

import httpx

from stripeclient.common.errors import TransportError


def send(
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: list[tuple[str, str]] | None = None,
    content: bytes | None = None,
    timeout: httpx.Timeout,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response:
    """Perform one request; transport failures are raised as `TransportError`."""

    try:
        with httpx.Client(transport=transport, timeout=timeout) as client:
            return client.request(method, url, headers=headers, params=params, content=content)
    except httpx.TimeoutException as exc:
        raise TransportError(f"request to {url} timed out: {exc}", code="timeout") from exc
    except httpx.TransportError as exc:
        raise TransportError(f"request to {url} failed: {exc}", code="network_error") from exc
