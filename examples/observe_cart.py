"""
Example: a cart view that re-renders whenever the shared state changes
"""

from rich.console import Console

from storefront import CentralState, Currency, CurrencyConverter, StorefrontFormatter


def main():
    console = Console()
    state = CentralState.with_sample_inventory()
    converter = CurrencyConverter()
    converter.follow(state)
    formatter = StorefrontFormatter(converter, console=console)

    # Re-render the cart on every change
    def render(change):
        if change.field in ("cart", "local_currency"):
            console.print(formatter.format_cart(state.cart))

    state.subscribe(render)

    flashlight, tin_can, _ = state.inventory
    state.add_to_cart(flashlight)
    state.add_to_cart(tin_can)
    state.set_local_currency(Currency.RUPEE)


if __name__ == "__main__":
    main()
