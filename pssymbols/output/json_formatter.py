"""JSON output formatter."""

import json
from typing import Any, Optional

from ..models import SymbolDetails, SymbolReference


def print_json(data: Any):
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def symbol_to_dict(symbol: SymbolReference) -> dict:
    """Convert a symbol reference to a JSON-serializable dict."""
    extent = symbol.extent
    data = {
        "kind": symbol.kind.value,
        "name": symbol.name,
        "file": extent.file,
        "line": extent.start_line,
        "column": extent.start_column,
        "end_line": extent.end_line,
        "end_column": extent.end_column,
    }
    if symbol.member is not None:
        member = symbol.member
        data["member"] = {
            "owner": member.owner_type_name,
            "static": member.is_static,
            "parameter_types": list(member.parameter_type_names),
            "return_type": member.return_type_name or None,
            "constructor": member.is_constructor,
        }
    return data


def symbols_to_dict(symbols: list[SymbolReference], query: Optional[dict] = None) -> dict:
    """Wrap a symbol list with the query that produced it."""
    data = {"count": len(symbols), "symbols": [symbol_to_dict(s) for s in symbols]}
    if query:
        data = {"query": query, **data}
    return data


def details_to_dict(details: SymbolDetails) -> dict:
    return {
        "symbol": symbol_to_dict(details.symbol),
        "display": details.display_string,
    }
