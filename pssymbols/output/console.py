"""Console output formatters using Rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from .json_formatter import details_to_dict, print_json, symbol_to_dict, symbols_to_dict
from ..models import SymbolDetails, SymbolReference

console = Console()


def _location(symbol: SymbolReference) -> str:
    return symbol.extent.location_str


def print_symbol(symbol: SymbolReference, as_json: bool = False):
    """Print a single symbol."""
    if as_json:
        print_json(symbol_to_dict(symbol))
        return

    console.print(f"[bold]{symbol.kind.value}[/bold]: {escape(symbol.signature_name)}")
    console.print(f"  Location: {_location(symbol)}")
    if symbol.member is not None:
        static = "static " if symbol.member.is_static else ""
        console.print(f"  Owner: {static}{escape(symbol.member.owner_type_name)}")


def print_symbols(
    symbols: list[SymbolReference],
    as_json: bool = False,
    empty_message: str = "No symbols found",
    query: Optional[dict] = None,
):
    """Print a list of symbols, one per line, in document order."""
    if as_json:
        print_json(symbols_to_dict(symbols, query))
        return

    if not symbols:
        console.print(f"[dim]{empty_message}[/dim]")
        return

    for symbol in symbols:
        console.print(
            f"{_location(symbol)} [cyan]{symbol.kind.value:<12}[/cyan] {escape(symbol.signature_name)}"
        )
    console.print(f"[dim]{len(symbols)} result(s)[/dim]")


def print_details(details: SymbolDetails, as_json: bool = False):
    """Print hover details for a symbol."""
    if as_json:
        print_json(details_to_dict(details))
        return

    if details.display_string is None:
        console.print(f"[dim]No details for {details.symbol.kind.value} {escape(details.symbol.name)}[/dim]")
        return
    console.print(f"[bold]{escape(details.display_string)}[/bold]")


def print_paths(paths: list[str], as_json: bool = False):
    """Print dot-sourced file paths."""
    if as_json:
        print_json({"count": len(paths), "paths": paths})
        return

    if not paths:
        console.print("[dim]No dot-sourced files[/dim]")
        return
    for path in paths:
        console.print(escape(path))
