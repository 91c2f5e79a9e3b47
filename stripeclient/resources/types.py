"""Nested value types shared by resources."""

from stripeclient.resources.base import Expandable, StripeObject, StripeValue, register


class Address(StripeValue):
    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    state: str | None = None


class Shipping(StripeValue):
    address: Address | None = None
    name: str | None = None
    phone: str | None = None


class CustomField(StripeValue):
    name: str
    value: str


class InvoiceSettings(StripeValue):
    custom_fields: list[CustomField] | None = None
    default_payment_method: Expandable = None
    footer: str | None = None


@register("coupon")
class Coupon(StripeObject):
    amount_off: int | None = None
    created: int | None = None
    currency: str | None = None
    duration: str | None = None
    duration_in_months: int | None = None
    livemode: bool | None = None
    max_redemptions: int | None = None
    metadata: dict[str, str] | None = None
    name: str | None = None
    percent_off: float | None = None
    redeem_by: int | None = None
    times_redeemed: int | None = None
    valid: bool | None = None


@register("discount")
class Discount(StripeObject):
    coupon: Coupon | None = None
    customer: Expandable = None
    end: int | None = None
    start: int | None = None
    subscription: str | None = None
