"""Turn an HTTP response into a `Result` of decoded models or a typed error."""

import httpx
from pydantic import ValidationError

from stripeclient.common.errors import APIError, DecodeError
from stripeclient.common.result import Result
from stripeclient.resources.base import StripeObject, model_for_tag


def _target_model(into: type[StripeObject] | None, tag) -> type[StripeObject] | None:
    tagged = model_for_tag(tag)
    if into is None:
        if tagged is not None:
            return tagged
        return StripeObject if isinstance(tag, str) else None
    # The tag may only narrow the caller's shape, never replace it.
    if tagged is not None and issubclass(tagged, into):
        return tagged
    return into


def decode_response(response: httpx.Response, into: type[StripeObject] | None = None) -> Result:
    """Decode one response into `into` (the operation's known shape).

    - 2xx with a JSON object body -> `Result.ok(model)`
    - non-2xx with an `{"error": {...}}` body -> `Result.err(APIError)`
    - anything else -> `Result.err(DecodeError)`

    Without `into`, the shape comes from the body's `object` tag.
    """

    status = response.status_code
    request_id = response.headers.get("request-id")
    try:
        body = response.json()
    except ValueError as exc:
        return Result.err(
            DecodeError(f"response body is not valid JSON: {exc}", code="invalid_json", status=status)
        )

    if not response.is_success:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return Result.err(APIError.from_response(status, body, request_id))
        return Result.err(
            DecodeError(f"unexpected error body for status {status}", code="unexpected_response", status=status)
        )

    if not isinstance(body, dict):
        return Result.err(
            DecodeError("response body is not a JSON object", code="unexpected_response", status=status)
        )
    model = _target_model(into, body.get("object"))
    if model is None:
        return Result.err(
            DecodeError("response shape unknown: no target model and no object tag", code="unexpected_response", status=status)
        )
    try:
        return Result.ok(model.model_validate(body))
    except ValidationError as exc:
        return Result.err(
            DecodeError(f"response does not match {model.__name__}: {exc}", code="invalid_response", status=status)
        )
