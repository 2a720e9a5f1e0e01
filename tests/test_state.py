"""
Tests for the shared storefront state
"""

import threading
from unittest.mock import Mock

from storefront.models import Currency, InventoryItem
from storefront.catalog import SAMPLE_INVENTORY
from storefront.state import CentralState, StateChange


def make_item(item_id, product="Flashlight", price=100):
    return InventoryItem(
        id=item_id,
        product=product,
        image="placeholder",
        description="A really great flashlight",
        price=price,
        currency=Currency.USD
    )


class TestCentralState:
    """Test cases for CentralState mutations"""

    def setup_method(self):
        """Set up test fixtures"""
        self.state = CentralState.with_sample_inventory()

    def test_initial_state(self):
        """Test a fresh state: empty cart, USD selected"""
        state = CentralState()
        assert state.cart == ()
        assert state.inventory == ()
        assert state.local_currency is Currency.USD
        assert state.cart_count == 0

    def test_sample_inventory(self):
        """Test that the sample state is seeded with the sample items"""
        assert self.state.inventory == SAMPLE_INVENTORY

    def test_independent_instances(self):
        """Test that two states do not share data"""
        other = CentralState.with_sample_inventory()
        self.state.add_to_cart(make_item(0))
        assert other.cart == ()

    def test_add_to_cart(self):
        """Test adding a single item"""
        item = make_item(0)
        self.state.add_to_cart(item)

        assert self.state.cart_count == 1
        assert self.state.cart[0] == item

    def test_add_to_cart_preserves_order(self):
        """Test that N additions give N entries in call order"""
        items = [make_item(i, product=f"Item {i}") for i in range(10)]
        for item in items:
            self.state.add_to_cart(item)

        assert len(self.state.cart) == 10
        assert [item.product for item in self.state.cart] == [item.product for item in items]

    def test_add_to_cart_keeps_duplicates(self):
        """Test that the same item added twice appears twice"""
        item = make_item(3)
        self.state.add_to_cart(item)
        self.state.add_to_cart(item)

        assert self.state.cart == (item, item)

    def test_cart_item_need_not_be_in_inventory(self):
        """Test that cart entries are not checked against the inventory"""
        self.state.set_inventory([])
        self.state.add_to_cart(make_item(42))
        assert self.state.cart_count == 1

    def test_set_inventory(self):
        """Test replacing the inventory"""
        items = [make_item(0), make_item(1, "Tin can", 32), make_item(2, "Cardboard Box", 5)]
        self.state.set_inventory(items)
        assert self.state.inventory == tuple(items)

    def test_set_inventory_replaces_wholesale(self):
        """Test that a second inventory leaves no residue of the first"""
        first = [make_item(0), make_item(1)]
        second = [make_item(5, "Lamp")]

        self.state.set_inventory(first)
        self.state.set_inventory(second)

        assert self.state.inventory == (second[0],)
        assert [item.product for item in self.state.inventory] == ["Lamp"]

    def test_set_inventory_copies_input(self):
        """Test that mutating the caller's list does not change the inventory"""
        items = [make_item(0)]
        self.state.set_inventory(items)
        items.append(make_item(1))

        assert len(self.state.inventory) == 1

    def test_cart_snapshot_is_read_only(self):
        """Test that the exposed cart cannot be mutated in place"""
        cart = self.state.cart
        assert isinstance(cart, tuple)

        self.state.add_to_cart(make_item(0))
        assert cart == ()

    def test_set_local_currency(self):
        """Test selecting a currency"""
        self.state.set_local_currency(Currency.YUAN)
        assert self.state.local_currency is Currency.YUAN

    def test_set_local_currency_idempotent(self):
        """Test that selecting the same currency twice equals selecting it once"""
        once = CentralState.with_sample_inventory()
        once.set_local_currency(Currency.RUPEE)

        self.state.set_local_currency(Currency.RUPEE)
        self.state.set_local_currency(Currency.RUPEE)

        assert self.state.local_currency == once.local_currency
        assert self.state.cart == once.cart
        assert self.state.inventory == once.inventory


class TestStateObservers:
    """Test cases for change notification"""

    def setup_method(self):
        """Set up test fixtures"""
        self.state = CentralState()
        self.observer = Mock()
        self.unsubscribe = self.state.subscribe(self.observer)

    def test_add_to_cart_notifies(self):
        """Test that a cart change is pushed immediately"""
        item = make_item(0)
        self.state.add_to_cart(item)

        self.observer.assert_called_once_with(StateChange("cart", (item,)))

    def test_set_inventory_notifies(self):
        """Test that an inventory change is pushed immediately"""
        self.state.set_inventory(SAMPLE_INVENTORY)

        self.observer.assert_called_once_with(StateChange("inventory", SAMPLE_INVENTORY))

    def test_set_local_currency_notifies(self):
        """Test that a currency change is pushed immediately"""
        self.state.set_local_currency(Currency.RUPEE)

        self.observer.assert_called_once_with(StateChange("local_currency", Currency.RUPEE))

    def test_observer_sees_new_state(self):
        """Test that the state already holds the new value when observers run"""
        seen = []
        self.state.subscribe(lambda change: seen.append(self.state.cart_count))

        self.state.add_to_cart(make_item(0))
        self.state.add_to_cart(make_item(1))

        assert seen == [1, 2]

    def test_unsubscribe(self):
        """Test that an unsubscribed observer is no longer called"""
        self.unsubscribe()
        self.state.add_to_cart(make_item(0))

        self.observer.assert_not_called()

    def test_unsubscribe_twice(self):
        """Test that unsubscribing again is harmless"""
        self.unsubscribe()
        self.unsubscribe()

    def test_observer_may_mutate_state(self):
        """Test that an observer can trigger a further mutation"""
        def follow_up(change):
            if change.field == "inventory":
                self.state.set_local_currency(Currency.YUAN)

        self.state.subscribe(follow_up)
        self.state.set_inventory([make_item(0)])

        assert self.state.local_currency is Currency.YUAN

    def test_failing_observer(self):
        """Test that a failing observer neither fails the mutation nor stops the others"""
        failing = Mock(side_effect=RuntimeError("boom"))
        later = Mock()
        self.state.subscribe(failing)
        self.state.subscribe(later)

        self.state.add_to_cart(make_item(0))

        failing.assert_called_once()

        later.assert_called_once()
        assert self.state.cart_count == 1

    def test_concurrent_add_to_cart(self):
        """Test that concurrent additions are all kept"""
        changes = []
        self.state.subscribe(changes.append)

        def add_many(offset):
            for i in range(100):
                self.state.add_to_cart(make_item(offset + i))

        threads = [threading.Thread(target=add_many, args=(n * 100,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert self.state.cart_count == 400
        assert len(changes) == 400
