"""Hover details model."""

from dataclasses import dataclass
from typing import Optional

from .symbol import SymbolReference


@dataclass(frozen=True)
class SymbolDetails:
    """Display information for a symbol, as shown on hover."""

    symbol: SymbolReference
    display_string: Optional[str] = None
