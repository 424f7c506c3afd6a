"""Document outline queries: top-level symbols and hashtable keys."""

import logging

from ..models import SymbolReference
from ..syntax.nodes import (
    Assignment,
    ConfigurationDefinition,
    FunctionDefinition,
    FunctionMember,
    NodeKind,
    PropertyMember,
    TypeDefinition,
)
from ..syntax.walker import collect_all
from . import builders
from .base import Query
from .declaration import assignment_target

logger = logging.getLogger(__name__)


def is_assigned_at_script_scope(node: Assignment) -> bool:
    """Return True if an assignment sits directly in the script's top-level block.

    Purely structural: the assignment's block must be the root script
    block's named block (or the root itself). Anything deeper, such as a
    loop body or a function, is not script scope.
    """
    block = node.parent
    return block is None or block.parent is None or block.parent.parent is None


class DocumentSymbolsQuery(Query[list[SymbolReference]]):
    """List the symbols shown in a document outline.

    Reports function, workflow and configuration definitions, classes, class
    members and variables assigned at script scope, in document order.
    Functions and configurations are reported with their whole definition
    extent.
    """

    def execute(self) -> list[SymbolReference]:
        def function(node: FunctionDefinition):
            if isinstance(node.parent, FunctionMember):
                return []
            return [builders.function_symbol(node, full_extent=True)]

        def configuration(node: ConfigurationDefinition):
            return [builders.configuration_symbol(node, full_extent=True)]

        def assignment(node: Assignment):
            target = assignment_target(node)
            if target is None or not is_assigned_at_script_scope(node):
                return []
            return [builders.variable_symbol(target)]

        def type_definition(node: TypeDefinition):
            return [builders.class_symbol(node)]

        def method(node: FunctionMember):
            return [builders.method_symbol(node)]

        def prop(node: PropertyMember):
            return [builders.property_symbol(node)]

        handlers = {
            NodeKind.FUNCTION_DEFINITION: function,
            NodeKind.CONFIGURATION_DEFINITION: configuration,
            NodeKind.ASSIGNMENT: assignment,
            NodeKind.TYPE_DEFINITION: type_definition,
            NodeKind.FUNCTION_MEMBER: method,
            NodeKind.PROPERTY_MEMBER: prop,
        }
        results = collect_all(self.tree.root, handlers, self.cancellation)
        logger.debug(f"Document has {len(results)} outline symbols")
        return results


class HashtableKeysQuery(Query[list[SymbolReference]]):
    """List the literal keys of every hashtable in the document."""

    def execute(self) -> list[SymbolReference]:
        return collect_all(
            self.tree.root,
            {NodeKind.HASHTABLE: builders.hashtable_key_symbols},
            self.cancellation,
        )
