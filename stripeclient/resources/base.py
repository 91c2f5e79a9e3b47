"""Base record types and the object-tag registry used to decode responses.

Every API payload carries an `object` tag ("customer", "list", ...). Resource
models register themselves under that tag with `register`; `convert` walks a
decoded JSON value and builds the matching models.
"""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator


class StripeObject(BaseModel):
    """Generic API object. Unknown fields are kept as extra attributes."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    object: str | None = None


class StripeValue(BaseModel):
    """Nested value without its own identity (addresses, settings...)."""

    model_config = ConfigDict(extra="allow")


_REGISTRY: dict[str, type[StripeObject]] = {}

M = TypeVar("M", bound=type[StripeObject])


def register(object_name: str):
    """Class decorator binding a model to the API `object` tag it decodes."""

    def decorator(cls: M) -> M:
        _REGISTRY[object_name] = cls
        return cls

    return decorator


def model_for(object_name: str | None) -> type[StripeObject]:
    return _REGISTRY.get(object_name or "", StripeObject)


def model_for_tag(object_name: Any) -> type[StripeObject] | None:
    """Registered model for a tag, `StripeList` for "list", else None."""

    if object_name == "list":
        return StripeList
    if isinstance(object_name, str):
        return _REGISTRY.get(object_name)
    return None


def convert(value: Any) -> Any:
    """Map decoded JSON onto registered models by `object` tag.

    Dicts without an `object` tag (metadata, plain maps) are returned as-is.
    """

    if isinstance(value, list):
        return [convert(item) for item in value]
    if isinstance(value, dict) and isinstance(value.get("object"), str):
        if value["object"] == "list":
            return StripeList.model_validate(value)
        return model_for(value["object"]).model_validate(value)
    return value


class StripeList(StripeObject):
    """One page of a cursor-paginated collection.

    Fetch the next page by passing `starting_after=page.last_id` to the same
    `list` call; the previous page with `ending_before=page.first_id`.
    """

    object: str | None = "list"
    data: list[Any] = []
    has_more: bool = False
    url: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _convert_items(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [convert(item) for item in value]
        return value

    @property
    def first_id(self) -> str | None:
        return _item_id(self.data[0]) if self.data else None

    @property
    def last_id(self) -> str | None:
        return _item_id(self.data[-1]) if self.data else None


def _item_id(item: Any) -> str | None:
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id", None)


def _expand(value: Any) -> Any:
    return convert(value) if isinstance(value, dict) else value


# Bare id unless the caller asked the API to expand it into the full object.
Expandable = Annotated[str | StripeObject | None, BeforeValidator(_expand)]


def get_id(value: Any) -> str:
    """Return the bare id for an id string or a previously fetched object."""

    if isinstance(value, str) and value:
        return value
    if isinstance(value, StripeObject) and value.id:
        return value.id
    raise ValueError(f"expected an id string or an object with an id, got {value!r}")
