"""Data models for pssymbols."""

from .symbol import MEMBER_KINDS, MemberInfo, SymbolKind, SymbolReference
from .details import SymbolDetails
from .aliases import AliasTable, load_alias_table

__all__ = [
    "MEMBER_KINDS",
    "MemberInfo",
    "SymbolKind",
    "SymbolReference",
    "SymbolDetails",
    "AliasTable",
    "load_alias_table",
]
