"""
Sample inventory used to seed a fresh storefront
"""

from typing import Iterable

from .models import Currency, InventoryItem
from .exceptions import ItemNotFoundError


SAMPLE_INVENTORY = (
    InventoryItem(
        id=0,
        product="Flashlight",
        image="placeholder",
        description="A really great flashlight",
        price=100,
        currency=Currency.USD
    ),
    InventoryItem(
        id=1,
        product="Tin can",
        image="placeholder",
        description="Pretty much what you would expect from a tin can",
        price=32,
        currency=Currency.USD
    ),
    InventoryItem(
        id=2,
        product="Cardboard Box",
        image="placeholder",
        description="It holds things",
        price=5,
        currency=Currency.USD
    ),
)


def find_item(items: Iterable[InventoryItem], item_id: int) -> InventoryItem:
    """
    Return the first item with the given id

    Raises ItemNotFoundError if no item matches
    """
    for item in items:
        if item.id == item_id:
            return item
    raise ItemNotFoundError(f"No inventory item with id {item_id}")
