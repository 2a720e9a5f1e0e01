"""
Rich text formatter for displaying the inventory, the cart and exchange rates
"""

from typing import Mapping, Optional, Sequence
from rich.text import Text
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from .models import Currency, InventoryItem
from .converter import CurrencyConverter
from .exceptions import FormatError, StorefrontError


class StorefrontFormatter:
    """
    Formatter for storefront output with rich text features
    """

    def __init__(self, converter: CurrencyConverter, console: Optional[Console] = None):
        """
        Initialize the formatter
        Args:
            converter: converter used for every displayed price
            console: console to render to (a new one if None)
        """
        self.converter = converter
        self.console = console or Console()

        self.styles = {
            "title": "bold",
            "product": "bold",
            "description": "dim",
            "price": "bold blue",
            "selected": "bold reverse",
        }

    def format_inventory(self, items: Sequence[InventoryItem]) -> Table:
        """
        Format the inventory as a table with prices in the local currency
        Returns a Rich Table
        """
        try:
            table = Table(
                title=f"[{self.styles['title']}]Inventory[/{self.styles['title']}]",
                show_header=True,
                header_style="bold"
            )
            table.add_column("ID", justify="right", style="dim")
            table.add_column("Product", style=self.styles["product"])
            table.add_column("Description", style=self.styles["description"])
            table.add_column("Price", justify="right", style=self.styles["price"])

            for item in items:
                table.add_row(
                    str(item.id),
                    item.product,
                    item.description,
                    self.converter.convert(item.price, item.currency)
                )

            return table

        except StorefrontError as e:
            raise FormatError(f"Failed to format inventory: {e}") from e

    def format_cart(self, items: Sequence[InventoryItem]) -> Panel:
        """
        Format the cart contents
        Returns a Rich Panel, with a placeholder line when the cart is empty
        """
        try:
            if not items:
                return Panel(
                    Text("Nothing in the cart", style="dim"),
                    title="[bold]Cart[/bold]",
                    border_style="blue"
                )

            cart_table = Table.grid(padding=(0, 2))
            cart_table.add_column(style=self.styles["product"])
            cart_table.add_column(justify="right", style=self.styles["price"])

            for item in items:
                cart_table.add_row(
                    item.product,
                    self.converter.convert(item.price, item.currency)
                )

            footer = Text(f"Total in cart {len(items)}", style="bold")

            return Panel(
                Group(cart_table, footer),
                title="[bold]Cart[/bold]",
                border_style="blue"
            )

        except StorefrontError as e:
            raise FormatError(f"Failed to format cart: {e}") from e

    def format_rates(self, rates: Mapping[Currency, Mapping[Currency, float]]) -> Table:
        """
        Format the exchange-rate table, one row per source currency
        """
        table = Table(title="[bold]Exchange Rates[/bold]", show_header=True, header_style="bold")
        table.add_column("From \\ To")
        for currency in Currency:
            table.add_column(currency.display_name, justify="right")

        for source in Currency:
            row = [source.display_name]
            for target in Currency:
                multiplier = rates.get(source, {}).get(target)
                row.append("-" if multiplier is None else f"{multiplier:.4f}")
            table.add_row(*row)

        return table

    def format_currency_selector(self, selected: Currency) -> Text:
        """
        Format a segmented currency selector with the selected entry highlighted
        """
        selector = Text()
        for i, currency in enumerate(Currency):
            if i > 0:
                selector.append(" | ", style="dim")
            label = f" {currency.display_name} "
            if currency == selected:
                selector.append(label, style=self.styles["selected"])
            else:
                selector.append(label)
        return selector

    def format_plain_inventory(self, items: Sequence[InventoryItem]) -> str:
        """
        Format the inventory as plain text, one item per line
        """
        lines = []

        for item in items:
            price = self.converter.convert(item.price, item.currency)
            lines.append(f"{item.id}  {item.product}  {price}")

        return "\n".join(lines)
