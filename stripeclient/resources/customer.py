"""Work with Stripe customer objects.

You can create, retrieve, update, delete and list customers, remove a
customer's discount, and read or configure the customer's cash balance.

Every operation returns a `Result`:

    result = customer.create({"name": "Ada"}, {"api_key": "sk_test_..."})
    if result.is_ok:
        print(result.value.id)

Stripe API reference: https://stripe.com/docs/api/customers
"""

from collections.abc import Mapping
from typing import Any

from stripeclient.api.options import RequestOptions
from stripeclient.api.request import (
    cast_to_id,
    make_request,
    new_request,
    prefix_expansions,
    put_endpoint,
    put_method,
    put_params,
)
from stripeclient.common.result import Result
from stripeclient.resources.base import Expandable, StripeList, StripeObject, get_id, register
from stripeclient.resources.cash_balance import CashBalance
from stripeclient.resources.types import Address, Discount, InvoiceSettings, Shipping


PLURAL_ENDPOINT = "customers"

Params = Mapping[str, Any]
Options = RequestOptions | Mapping[str, Any] | None


@register("customer")
class Customer(StripeObject):
    address: Address | None = None
    balance: int | None = None
    cash_balance: CashBalance | None = None
    created: int | None = None
    currency: str | None = None
    default_source: Expandable = None
    deleted: bool | None = None
    delinquent: bool | None = None
    description: str | None = None
    discount: Discount | None = None
    email: str | None = None
    invoice_prefix: str | None = None
    invoice_settings: InvoiceSettings | None = None
    livemode: bool | None = None
    metadata: dict[str, str] | None = None
    name: str | None = None
    next_invoice_sequence: int | None = None
    payment_method: str | None = None
    phone: str | None = None
    preferred_locales: list[str] | None = None
    shipping: Shipping | None = None
    sources: StripeList | None = None
    subscriptions: StripeList | None = None
    tax_exempt: str | None = None
    tax_ids: StripeList | None = None


class CustomerList(StripeList):
    data: list[Customer] = []


def _instance_endpoint(id: str | Customer, suffix: str = "") -> str:
    endpoint = f"{PLURAL_ENDPOINT}/{get_id(id)}"
    return f"{endpoint}/{suffix}" if suffix else endpoint


def create(params: Params, opts: Options = None) -> Result:
    """Create a customer.

    `coupon`, `default_source` and `source` may be given as ids or as
    previously fetched objects.
    """

    request = new_request(opts)
    request = put_endpoint(request, PLURAL_ENDPOINT)
    request = put_params(request, params)
    request = put_method(request, "post")
    request = cast_to_id(request, ["coupon", "default_source", "source"])
    return make_request(request, Customer)


def retrieve(id: str | Customer, opts: Options = None) -> Result:
    """Retrieve a customer."""

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id))
    request = put_method(request, "get")
    return make_request(request, Customer)


def update(id: str | Customer, params: Params, opts: Options = None) -> Result:
    """Update a customer."""

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id))
    request = put_method(request, "post")
    request = put_params(request, params)
    request = cast_to_id(request, ["coupon", "default_source", "source"])
    return make_request(request, Customer)


def delete(id: str | Customer, opts: Options = None) -> Result:
    """Delete a customer. The decoded value has `deleted=True`."""

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id))
    request = put_method(request, "delete")
    return make_request(request, Customer)


def delete_discount(id: str | Customer, opts: Options = None) -> Result:
    """Remove the discount currently applied to a customer."""

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id, "discount"))
    request = put_method(request, "delete")
    return make_request(request, Discount)


def retrieve_cash_balance(id: str | Customer, opts: Options = None) -> Result:
    """Retrieve a customer's cash balance."""

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id, "cash_balance"))
    request = put_method(request, "get")
    return make_request(request, CashBalance)


def update_cash_balance(id: str | Customer, params: Params, opts: Options = None) -> Result:
    """Change the settings on a customer's cash balance.

    Cash balance funds arrive by bank transfer and are applied to payment
    intents whose source is the cash balance; `settings.reconciliation_mode`
    controls whether that happens automatically or manually:

        customer.update_cash_balance("cus_123", {"settings": {"reconciliation_mode": "manual"}})
    """

    request = new_request(opts)
    request = put_endpoint(request, _instance_endpoint(id, "cash_balance"))
    request = put_method(request, "post")
    request = put_params(request, params)
    return make_request(request, CashBalance)


def list(params: Params | None = None, opts: Options = None) -> Result:
    """List customers, newest first.

    Accepts `created`, `email`, `limit` (1-100) and the cursors
    `starting_after` / `ending_before`, which may be ids or customers.
    Expansions from `opts["expand"]` are applied to each listed customer.
    """

    request = new_request(opts)
    request = prefix_expansions(request)
    request = put_endpoint(request, PLURAL_ENDPOINT)
    request = put_method(request, "get")
    request = put_params(request, params or {})
    request = cast_to_id(request, ["ending_before", "starting_after"])
    return make_request(request, CustomerList)
