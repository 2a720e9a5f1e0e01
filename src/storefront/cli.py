"""
Command Line Interface for Storefront
"""

import logging
from contextlib import contextmanager
from typing import Optional, List, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler

from .models import Currency
from .catalog import find_item
from .converter import CurrencyConverter
from .formatter import StorefrontFormatter
from .state import CentralState
from .exceptions import StorefrontError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("storefront")

app = typer.Typer(
    name="storefront",
    help="Browse a sample inventory and cart in your local currency",
    no_args_is_help=True,
)
console = Console()

CURRENCY_ENVVAR = "STOREFRONT_CURRENCY"


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        from . import __version__
        console.print(f"Storefront version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information"
    ),
) -> None:
    """Browse a sample inventory and cart in your local currency"""
    if verbose:
        logger.setLevel(logging.DEBUG)
        logger.debug("Verbose mode enabled")


@app.command()
def inventory(
    currency: str = typer.Option(
        Currency.USD.value,
        "--currency",
        "-c",
        envvar=CURRENCY_ENVVAR,
        help="Currency to display prices in (usd, rupee or yuan)"
    ),
) -> None:
    """Show the inventory with prices in the chosen currency."""
    with _handle_errors():
        state, _, formatter = _build_storefront(Currency.parse(currency))

        console.print(formatter.format_currency_selector(state.local_currency))
        console.print(formatter.format_inventory(state.inventory))
        console.print(f"[bold]Total in cart {state.cart_count}[/bold]")


@app.command()
def cart(
    add: Optional[List[int]] = typer.Option(
        None,
        "--add",
        "-a",
        help="Inventory id to add to the cart (can be used multiple times)"
    ),
    currency: str = typer.Option(
        Currency.USD.value,
        "--currency",
        "-c",
        envvar=CURRENCY_ENVVAR,
        help="Currency to display prices in (usd, rupee or yuan)"
    ),
) -> None:
    """Add items to the cart by id and show the cart."""
    with _handle_errors():
        state, _, formatter = _build_storefront(Currency.parse(currency))

        def on_change(change) -> None:
            if change.field == "cart":
                logger.debug(f"Cart now holds {len(change.value)} item(s)")

        state.subscribe(on_change)

        for item_id in add or []:
            state.add_to_cart(find_item(state.inventory, item_id))

        console.print(formatter.format_cart(state.cart))


@app.command()
def convert(
    price: int = typer.Argument(..., min=0, help="Whole-number price to convert"),
    from_currency: str = typer.Argument(
        ...,
        help="Currency the price is in (usd, rupee or yuan)"
    ),
    to: str = typer.Option(
        Currency.USD.value,
        "--to",
        "-t",
        envvar=CURRENCY_ENVVAR,
        help="Currency to convert into (usd, rupee or yuan)"
    ),
) -> None:
    """Convert a single price into another currency."""
    with _handle_errors():
        converter = CurrencyConverter(local_currency=Currency.parse(to))
        console.print(converter.convert(price, Currency.parse(from_currency)), highlight=False)


@app.command()
def rates() -> None:
    """Show the exchange-rate table."""
    with _handle_errors():
        converter = CurrencyConverter()
        formatter = StorefrontFormatter(converter, console=console)
        console.print(formatter.format_rates(converter.rates))


def _build_storefront(currency: Currency) -> Tuple[CentralState, CurrencyConverter, StorefrontFormatter]:
    """
    Create the state, converter and formatter for one run

    The converter follows the state's currency selection, so selecting the
    currency on the state is enough to re-price everything.
    """
    state = CentralState.with_sample_inventory()
    converter = CurrencyConverter()
    converter.follow(state)
    state.set_local_currency(currency)

    formatter = StorefrontFormatter(converter, console=console)
    return state, converter, formatter


@contextmanager
def _handle_errors():
    """
    Map errors raised by a command to an exit code of 1
    """
    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except StorefrontError as e:
        logger.error(f"Storefront error: {e}")
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.exception("Full traceback:")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
