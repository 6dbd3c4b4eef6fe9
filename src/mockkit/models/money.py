from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Money:
    """
    An amount in a currency.

    Money deliberately defines no ordering: 100 USD vs 90 EUR has no answer
    without an exchange rate. Callers that need to order amounts of the same
    currency pass `money_key` as a sort/comparison key.
    """

    amount: Decimal
    currency: str

    def __post_init__(self):
        # accept ints/strings for convenience, store an exact Decimal
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))


def money_key(money: Money) -> tuple[str, Decimal]:
    """Comparison key: currency first, then amount."""
    return (money.currency, money.amount)
