__version__ = "0.1.0"

# Package metadata
__description__ = "Inventory and cart state with local-currency price conversion"

# Public API
from .models import Currency, InventoryItem
from .catalog import SAMPLE_INVENTORY, find_item
from .converter import CurrencyConverter, EXCHANGE_RATES, format_amount
from .state import CentralState, StateChange
from .formatter import StorefrontFormatter
from .exceptions import (
    StorefrontError,
    CurrencyLookupError,
    FormatError,
    ItemNotFoundError
)

__all__ = [
    # Version
    "__version__",

    # Main classes
    "CurrencyConverter",
    "CentralState",
    "StorefrontFormatter",

    # Data classes
    "Currency",
    "InventoryItem",
    "StateChange",

    # Sample data and helpers
    "SAMPLE_INVENTORY",
    "EXCHANGE_RATES",
    "find_item",
    "format_amount",

    # Exceptions
    "StorefrontError",
    "CurrencyLookupError",
    "FormatError",
    "ItemNotFoundError"
]
