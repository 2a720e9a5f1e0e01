"""
Currency and inventory item models
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import CurrencyLookupError


class Currency(Enum):
    """Currencies an item can be priced in or displayed in"""
    USD = "usd"
    RUPEE = "rupee"
    YUAN = "yuan"

    @property
    def display_name(self) -> str:
        """Name shown in the currency selector"""
        return _DISPLAY_NAMES[self]

    @property
    def symbol(self) -> str:
        """Symbol prefixed to formatted amounts"""
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, text: str) -> "Currency":
        """
        Look up a currency by value or display name, ignoring case

        Raises CurrencyLookupError for anything outside the supported set
        """
        key = (text or "").strip().lower()
        for currency in cls:
            if key in (currency.value, currency.display_name.lower()):
                return currency
        raise CurrencyLookupError(f"Unknown currency: {text!r}")


_DISPLAY_NAMES = {
    Currency.USD: "USD",
    Currency.RUPEE: "Rupee",
    Currency.YUAN: "Yuan",
}

_SYMBOLS = {
    Currency.USD: "$",
    Currency.RUPEE: "₹",
    Currency.YUAN: "元",
}


@dataclass(frozen=True, eq=False)
class InventoryItem:
    """
    A purchasable product

    Attributes:
        id: identifier, unique within one inventory snapshot
        product: product name
        image: opaque image reference
        description: short description
        price: whole-number amount in the origin currency
        currency: origin currency of the price

    Two items are equal when their ids are equal, whatever the other fields hold.
    """
    id: int
    product: str
    image: str
    description: str
    price: int
    currency: Currency

    def __post_init__(self):
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError(f"Price must be a whole number, got {self.price!r}")
        if self.price < 0:
            raise ValueError(f"Price must not be negative, got {self.price}")
        if not isinstance(self.currency, Currency):
            raise ValueError(f"Unsupported currency: {self.currency!r}")

    def __eq__(self, other):
        if not isinstance(other, InventoryItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def price_formatted(self) -> str:
        """Stored price in its origin currency, without conversion"""
        return f"{self.currency.symbol} {self.price}"
