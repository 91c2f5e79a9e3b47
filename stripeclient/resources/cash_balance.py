"""Customer cash balance: funds received by bank transfer, held per currency.

https://stripe.com/docs/api/cash_balance/object
"""

from pydantic import NonNegativeInt

from stripeclient.resources.base import StripeObject, StripeValue, register


class CashBalanceSettings(StripeValue):
    reconciliation_mode: str | None = None


@register("cash_balance")
class CashBalance(StripeObject):
    available: dict[str, NonNegativeInt] | None = None
    customer: str | None = None
    livemode: bool | None = None
    settings: CashBalanceSettings | None = None
