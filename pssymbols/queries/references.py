"""Find-references query."""

import logging
from typing import Callable, Iterable, Optional

from ..models import AliasTable, SymbolKind, SymbolReference
from ..syntax.nodes import Node, NodeKind
from ..syntax.walker import collect_all
from . import builders
from .matching import kind_family, symbols_match
from .base import Query

logger = logging.getLogger(__name__)


class ReferencesQuery(Query[list[SymbolReference]]):
    """Find every occurrence of a symbol: declarations and usages alike."""

    def execute(
        self, symbol: SymbolReference, aliases: Optional[AliasTable] = None
    ) -> list[SymbolReference]:
        """Execute reference search.

        Args:
            symbol: Reference to search for.
            aliases: Optional alias table. Only consulted for function-like
                symbols, so that ``gci`` and ``Get-ChildItem`` are one symbol.

        Returns:
            Matching references in document order. Empty if none.
        """
        if symbol is None:
            raise ValueError("A symbol is required to find its references")

        handlers = self._handlers(symbol, aliases)
        results = collect_all(self.tree.root, handlers, self.cancellation) if handlers else []
        logger.debug(f"Found {len(results)} references to {symbol.kind.value} {symbol.name}")
        return results

    def _handlers(
        self, symbol: SymbolReference, aliases: Optional[AliasTable]
    ) -> dict[NodeKind, Callable[[Node], Iterable[SymbolReference]]]:
        inferer = self.inferer

        def matching(build):
            def visit(node):
                candidate = build(node)
                if candidate is not None and symbols_match(symbol, candidate, aliases):
                    return [candidate]
                return []
            return visit

        family = kind_family(symbol.kind)
        if family == SymbolKind.FUNCTION:
            return {
                NodeKind.COMMAND: matching(builders.command_symbol),
                NodeKind.FUNCTION_DEFINITION: matching(builders.function_symbol),
            }
        if family == SymbolKind.VARIABLE:
            return {NodeKind.VARIABLE_EXPRESSION: matching(builders.variable_symbol)}
        if family == SymbolKind.PARAMETER:
            return {NodeKind.COMMAND_PARAMETER: matching(builders.parameter_symbol)}
        if family == SymbolKind.CLASS:
            return {
                NodeKind.TYPE_DEFINITION: matching(builders.class_symbol),
                NodeKind.TYPE_EXPRESSION: matching(builders.type_name_symbol),
                NodeKind.TYPE_CONSTRAINT: matching(builders.type_name_symbol),
            }
        if family == SymbolKind.METHOD:
            return {
                NodeKind.FUNCTION_MEMBER: matching(builders.method_symbol),
                NodeKind.INVOKE_MEMBER_EXPRESSION: matching(
                    lambda node: builders.method_call_symbol(node, inferer)
                ),
            }
        if family == SymbolKind.PROPERTY:
            return {
                NodeKind.PROPERTY_MEMBER: matching(builders.property_symbol),
                NodeKind.MEMBER_EXPRESSION: matching(
                    lambda node: builders.property_access_symbol(node, inferer)
                ),
            }
        if family == SymbolKind.HASHTABLE_KEY:
            return {
                NodeKind.HASHTABLE: lambda node: [
                    key for key in builders.hashtable_key_symbols(node) if symbols_match(symbol, key)
                ]
            }
        if family == SymbolKind.CONFIGURATION:
            return {NodeKind.CONFIGURATION_DEFINITION: matching(builders.configuration_symbol)}
        return {}
