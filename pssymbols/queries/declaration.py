"""Find-declaration query."""

import logging
from typing import Callable, Optional

from ..models import SymbolKind, SymbolReference
from ..syntax.nodes import (
    Assignment,
    ConvertExpression,
    Node,
    NodeKind,
    VariableExpression,
)
from ..syntax.walker import find_first
from . import builders
from .matching import kind_family, symbols_match
from .base import Query

logger = logging.getLogger(__name__)


def assignment_target(node: Assignment) -> Optional[VariableExpression]:
    """The variable an assignment writes to, looking through ``[Type]$x = ...``."""
    left = node.left
    if isinstance(left, ConvertExpression):
        left = left.child
    if isinstance(left, VariableExpression):
        return left
    return None


class DeclarationQuery(Query[Optional[SymbolReference]]):
    """Find where a symbol is declared.

    Only declaration-shaped nodes are considered: function and configuration
    definitions, assignment targets, class declarations and member
    declarations. The first match in document order wins.
    """

    def execute(self, symbol: SymbolReference) -> Optional[SymbolReference]:
        """Execute declaration lookup.

        Args:
            symbol: Reference to resolve, usually a result of
                LocateSymbolQuery.

        Returns:
            The declaring symbol, or None when the tree holds no declaration
            for it (parameters, hashtable keys and external commands never
            have one here).
        """
        if symbol is None:
            raise ValueError("A symbol is required to find its declaration")

        handlers = self._handlers(symbol)
        if not handlers:
            logger.debug(f"No declaration shape for {symbol.kind.value} symbols")
            return None

        result = find_first(self.tree.root, handlers, self.cancellation)
        logger.debug(f"Declaration of {symbol.name}: {result.extent.location_str if result else 'not found'}")
        return result

    def _handlers(self, symbol: SymbolReference) -> dict[NodeKind, Callable[[Node], Optional[SymbolReference]]]:
        def matching(build):
            def visit(node):
                candidate = build(node)
                if candidate is not None and symbols_match(symbol, candidate):
                    return candidate
                return None
            return visit

        def assignment(node: Assignment):
            target = assignment_target(node)
            return builders.variable_symbol(target) if target is not None else None

        family = kind_family(symbol.kind)
        if family == SymbolKind.FUNCTION:
            return {NodeKind.FUNCTION_DEFINITION: matching(builders.function_symbol)}
        if family == SymbolKind.VARIABLE:
            return {NodeKind.ASSIGNMENT: matching(assignment)}
        if family == SymbolKind.CLASS:
            return {NodeKind.TYPE_DEFINITION: matching(builders.class_symbol)}
        if family == SymbolKind.METHOD:
            return {NodeKind.FUNCTION_MEMBER: matching(builders.method_symbol)}
        if family == SymbolKind.PROPERTY:
            return {NodeKind.PROPERTY_MEMBER: matching(builders.property_symbol)}
        if family == SymbolKind.CONFIGURATION:
            return {NodeKind.CONFIGURATION_DEFINITION: matching(builders.configuration_symbol)}
        return {}
