"""Output formatting module."""

from .json_formatter import print_json, symbol_to_dict, symbols_to_dict, details_to_dict
from .console import print_symbol, print_symbols, print_details, print_paths
from .tree import print_outline, outline_to_dict

__all__ = [
    "print_json",
    "symbol_to_dict",
    "symbols_to_dict",
    "details_to_dict",
    "print_symbol",
    "print_symbols",
    "print_details",
    "print_paths",
    "print_outline",
    "outline_to_dict",
]
