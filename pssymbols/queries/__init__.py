"""Query classes for pssymbols."""

from .base import Query
from .locate import LocateCommandQuery, LocateSymbolQuery
from .declaration import DeclarationQuery
from .references import ReferencesQuery
from .document_symbols import DocumentSymbolsQuery, HashtableKeysQuery
from .includes import DotSourcedIncludesQuery, is_data_file
from .details import build_details
from .matching import symbols_match

__all__ = [
    "Query",
    "LocateSymbolQuery",
    "LocateCommandQuery",
    "DeclarationQuery",
    "ReferencesQuery",
    "DocumentSymbolsQuery",
    "HashtableKeysQuery",
    "DotSourcedIncludesQuery",
    "is_data_file",
    "build_details",
    "symbols_match",
]
