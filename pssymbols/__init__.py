"""pssymbols - Resolve symbols in parsed PowerShell syntax trees."""

from .syntax import ScriptTree, load_tree, parse_tree
from .models import AliasTable, SymbolKind, SymbolReference, load_alias_table
from .queries import (
    LocateSymbolQuery,
    LocateCommandQuery,
    DeclarationQuery,
    ReferencesQuery,
    DocumentSymbolsQuery,
    HashtableKeysQuery,
    DotSourcedIncludesQuery,
)

__version__ = "0.1.0"

__all__ = [
    "ScriptTree",
    "load_tree",
    "parse_tree",
    "AliasTable",
    "SymbolKind",
    "SymbolReference",
    "load_alias_table",
    "LocateSymbolQuery",
    "LocateCommandQuery",
    "DeclarationQuery",
    "ReferencesQuery",
    "DocumentSymbolsQuery",
    "HashtableKeysQuery",
    "DotSourcedIncludesQuery",
]
