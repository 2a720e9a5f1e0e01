"""
Currency conversion into the viewer's local currency
"""

import logging
import math
import threading
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Callable, Dict, Mapping, Optional, Union

from .models import Currency
from .exceptions import CurrencyLookupError, FormatError

logger = logging.getLogger(__name__)


# Rates are the published constants, not a reciprocal cross-rate table:
# rate(RUPEE, YUAN) * rate(YUAN, RUPEE) is close to 1 but not equal to it.
EXCHANGE_RATES: Dict[Currency, Dict[Currency, float]] = {
    Currency.USD: {Currency.USD: 1.0, Currency.RUPEE: 66.78, Currency.YUAN: 6.87},
    Currency.RUPEE: {Currency.USD: 1 / 66.78, Currency.RUPEE: 1.0, Currency.YUAN: 0.107},
    Currency.YUAN: {Currency.USD: 1 / 6.87, Currency.RUPEE: 9.35, Currency.YUAN: 1.0},
}

_CENTS = Decimal("0.01")


def round_amount(amount: Union[float, int, Decimal]) -> Decimal:
    """
    Round an amount to 2 decimal places, halves away from zero
    Raises FormatError for non-finite or non-numeric amounts
    """
    if isinstance(amount, float) and not math.isfinite(amount):
        raise FormatError(f"Cannot format non-finite amount: {amount}")
    try:
        # str() gives the shortest repr of a float
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        if not value.is_finite():
            raise FormatError(f"Cannot format non-finite amount: {amount}")
        with localcontext() as ctx:
            # Room for every integer digit plus the two decimal places
            ctx.prec = max(28, value.adjusted() + 3)
            return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise FormatError(f"Cannot format amount {amount!r}: {e}") from e


def format_amount(amount: Union[float, int, Decimal], currency: Currency) -> str:
    """Format an amount as '<symbol><amount to 2 dp>' in the given currency"""
    return f"{currency.symbol}{round_amount(amount)}"


class CurrencyConverter:
    """
    Converts item prices into the currently selected local currency

    All amounts are shown with the local currency's symbol, whatever the
    origin currency of the price was.
    """

    def __init__(
        self,
        local_currency: Currency = Currency.USD,
        rates: Optional[Mapping[Currency, Mapping[Currency, float]]] = None
    ):
        """
        Initialize the converter
        Args:
            local_currency: currency used for display
            rates: exchange-rate table (uses EXCHANGE_RATES if None)
        """
        self.rates = rates if rates is not None else EXCHANGE_RATES
        self._local_currency = local_currency
        self._lock = threading.Lock()

    @property
    def local_currency(self) -> Currency:
        with self._lock:
            return self._local_currency

    def set_local_currency(self, currency: Currency) -> None:
        """Select the display currency; the last write wins"""
        with self._lock:
            self._local_currency = currency
        logger.debug(f"Local currency set to {currency.display_name}")

    def rate(self, from_currency: Currency, to_currency: Currency) -> float:
        """
        Look up the multiplier from one currency to another
        Raises CurrencyLookupError if the pair is not in the table
        """
        try:
            return self.rates[from_currency][to_currency]
        except KeyError as e:
            raise CurrencyLookupError(
                f"No exchange rate from {from_currency} to {to_currency}"
            ) from e

    def convert_amount(self, price: int, from_currency: Currency) -> Decimal:
        """
        Convert a price into the local currency
        Returns the amount rounded to 2 decimal places
        """
        return self._convert(price, from_currency, self.local_currency)

    def convert(self, price: int, from_currency: Currency) -> str:
        """
        Convert a price into the local currency and format it for display
        Returns a string such as '$7.49'
        """
        local = self.local_currency
        amount = self._convert(price, from_currency, local)
        return f"{local.symbol}{amount}"

    def follow(self, state) -> Callable[[], None]:
        """
        Keep the local currency in step with a CentralState's selection
        Returns a callable that stops following
        """
        self.set_local_currency(state.local_currency)

        def on_change(change) -> None:
            # Re-read the state so a late notification cannot restore a stale selection
            if change.field == "local_currency":
                self.set_local_currency(state.local_currency)

        return state.subscribe(on_change)

    def _convert(self, price: int, from_currency: Currency, to_currency: Currency) -> Decimal:
        if price < 0:
            raise ValueError(f"Price must not be negative, got {price}")

        multiplier = self.rate(from_currency, to_currency)
        with localcontext() as ctx:
            # Exact product for any whole-number price, no float on the way
            ctx.prec = max(28, price.bit_length() // 3 + 20)
            product = Decimal(price) * Decimal(str(multiplier))
        amount = round_amount(product)
        logger.debug(
            f"Converted {price} {from_currency.display_name} -> "
            f"{amount} {to_currency.display_name} (rate={multiplier})"
        )
        return amount
