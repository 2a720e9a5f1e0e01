"""
Shared, observable storefront state: cart, inventory and selected currency
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Tuple

from .models import Currency, InventoryItem
from .catalog import SAMPLE_INVENTORY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChange:
    """
    Notification sent to observers after a mutation

    Attributes:
        field: name of the field that changed ("cart", "inventory" or "local_currency")
        value: snapshot of the field's new value
    """
    field: str
    value: Any


Observer = Callable[[StateChange], None]


class CentralState:
    """
    Single source of truth for the cart and inventory

    One instance is created per app run and handed to every consumer.
    Observers are notified synchronously after each mutation.
    """

    def __init__(
        self,
        inventory: Iterable[InventoryItem] = (),
        local_currency: Currency = Currency.USD
    ):
        self._cart: List[InventoryItem] = []
        self._inventory: Tuple[InventoryItem, ...] = tuple(inventory)
        self._local_currency = local_currency
        self._observers: List[Observer] = []
        self._lock = threading.RLock()

    @classmethod
    def with_sample_inventory(cls) -> "CentralState":
        """Create a fresh state seeded with the sample inventory"""
        state = cls()
        state.set_inventory(SAMPLE_INVENTORY)
        return state

    @property
    def cart(self) -> Tuple[InventoryItem, ...]:
        with self._lock:
            return tuple(self._cart)

    @property
    def inventory(self) -> Tuple[InventoryItem, ...]:
        with self._lock:
            return self._inventory

    @property
    def local_currency(self) -> Currency:
        with self._lock:
            return self._local_currency

    @property
    def cart_count(self) -> int:
        with self._lock:
            return len(self._cart)

    def add_to_cart(self, item: InventoryItem) -> None:
        """Append an item to the cart; duplicates are kept"""
        with self._lock:
            self._cart.append(item)
            snapshot = tuple(self._cart)
        logger.debug(f"Added {item.product} (id={item.id}) to cart, {len(snapshot)} item(s)")
        self._notify(StateChange("cart", snapshot))

    def set_inventory(self, items: Iterable[InventoryItem]) -> None:
        """Replace the whole inventory with the given items"""
        with self._lock:
            self._inventory = tuple(items)
            snapshot = self._inventory
        logger.debug(f"Inventory replaced with {len(snapshot)} item(s)")
        self._notify(StateChange("inventory", snapshot))

    def set_local_currency(self, currency: Currency) -> None:
        """Select the currency used for display"""
        with self._lock:
            self._local_currency = currency
        logger.debug(f"Local currency set to {currency.display_name}")
        self._notify(StateChange("local_currency", currency))

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer for state changes

        Args:
            observer: callable receiving a StateChange after every mutation

        Returns a callable that removes the observer
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, change: StateChange) -> None:
        """
        Call every observer with the change

        Observers run outside the lock so they can read or mutate the state.
        A failing observer is logged and skipped; the mutation has already
        happened and the remaining observers still run.
        """
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                observer(change)
            except Exception as e:
                logger.error(f"Observer {observer!r} failed on {change.field} change: {e}")
