"""Hover details for a symbol."""

from ..models import SymbolDetails, SymbolKind, SymbolReference


def build_details(symbol: SymbolReference) -> SymbolDetails:
    """Build the hover text for a symbol.

    Kinds without a meaningful one-line rendering (hashtable keys,
    workflows, configurations, unknown) get no display string.
    """
    if symbol is None:
        raise ValueError("A symbol is required to build its details")

    kind = symbol.kind
    if kind == SymbolKind.FUNCTION:
        display = f"function {symbol.name}"
    elif kind == SymbolKind.PARAMETER:
        display = f"(parameter) {symbol.name}"
    elif kind == SymbolKind.VARIABLE:
        display = symbol.name
    elif kind == SymbolKind.CLASS:
        display = f"(class) {symbol.name}"
    elif kind in (SymbolKind.METHOD, SymbolKind.CONSTRUCTOR, SymbolKind.PROPERTY):
        display = symbol.display_string
    else:
        display = None

    return SymbolDetails(symbol=symbol, display_string=display)
