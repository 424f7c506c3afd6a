"""Symbol-at-position queries."""

import logging
from typing import Optional

from ..models import SymbolReference
from ..syntax.nodes import (
    Command,
    CommandParameter,
    ConfigurationDefinition,
    FunctionDefinition,
    FunctionMember,
    InvokeMemberExpression,
    MemberExpression,
    NodeKind,
    Pipeline,
    PropertyMember,
    TypeConstraint,
    TypeDefinition,
    TypeExpression,
    VariableExpression,
)
from ..syntax.walker import find_first
from . import builders
from .base import Query, check_position

logger = logging.getLogger(__name__)


class _PositionMatcher:
    """Dispatch table for one locate request.

    Declarations are hit-tested on their name (or on the whole declaration
    when ``full`` is set); usages on their own extent.
    """

    def __init__(self, query: "LocateSymbolQuery", line: int, column: int, full: bool):
        self.inferer = query.inferer
        self.line = line
        self.column = column
        self.full = full

    def handlers(self):
        return {
            NodeKind.COMMAND: self.command,
            NodeKind.FUNCTION_DEFINITION: self.function_definition,
            NodeKind.CONFIGURATION_DEFINITION: self.configuration_definition,
            NodeKind.COMMAND_PARAMETER: self.command_parameter,
            NodeKind.VARIABLE_EXPRESSION: self.variable,
            NodeKind.TYPE_DEFINITION: self.type_definition,
            NodeKind.TYPE_EXPRESSION: self.type_name,
            NodeKind.TYPE_CONSTRAINT: self.type_name,
            NodeKind.PROPERTY_MEMBER: self.property_member,
            NodeKind.FUNCTION_MEMBER: self.function_member,
            NodeKind.MEMBER_EXPRESSION: self.member_access,
            NodeKind.INVOKE_MEMBER_EXPRESSION: self.member_invocation,
        }

    def _hit(self, symbol: Optional[SymbolReference]) -> Optional[SymbolReference]:
        if symbol is not None and symbol.extent.contains(self.line, self.column):
            return symbol
        return None

    def command(self, node: Command):
        return self._hit(builders.command_symbol(node))

    def function_definition(self, node: FunctionDefinition):
        return self._hit(builders.function_symbol(node, full_extent=self.full))

    def configuration_definition(self, node: ConfigurationDefinition):
        return self._hit(builders.configuration_symbol(node, full_extent=self.full))

    def command_parameter(self, node: CommandParameter):
        return self._hit(builders.parameter_symbol(node))

    def variable(self, node: VariableExpression):
        return self._hit(builders.variable_symbol(node))

    def type_definition(self, node: TypeDefinition):
        return self._hit(builders.class_symbol(node, full_extent=self.full))

    def type_name(self, node: TypeExpression | TypeConstraint):
        return self._hit(builders.type_name_symbol(node))

    def property_member(self, node: PropertyMember):
        return self._hit(builders.property_symbol(node, full_extent=self.full))

    def function_member(self, node: FunctionMember):
        if not self.full:
            return self._hit(builders.method_symbol(node))
        if node.body is not None and node.body.extent.contains(self.line, self.column):
            return None
        return self._hit(builders.method_symbol(node, full_extent=True))

    def member_access(self, node: MemberExpression):
        if node.member is None or not node.extent.contains(self.line, self.column):
            return None
        return self._hit(builders.property_access_symbol(node, self.inferer))

    def member_invocation(self, node: InvokeMemberExpression):
        if not node.extent.contains(self.line, self.column):
            return None

        if node.member is not None and node.member.extent.contains(self.line, self.column):
            return builders.method_call_symbol(node, self.inferer)

        receiver = node.expression
        if isinstance(receiver, TypeExpression):
            return self._hit(builders.type_name_symbol(receiver))
        return None


class LocateSymbolQuery(Query[Optional[SymbolReference]]):
    """Find the symbol under a cursor position."""

    def execute(
        self, line: int, column: int, include_declarations_fully: bool = False
    ) -> Optional[SymbolReference]:
        """Execute symbol lookup.

        Args:
            line: 1-based line of the cursor.
            column: 1-based column of the cursor.
            include_declarations_fully: Hit-test declarations on their whole
                extent instead of on their name.

        Returns:
            The first symbol in pre-order whose extent contains the position,
            or None.
        """
        check_position(line, column)
        matcher = _PositionMatcher(self, line, column, include_declarations_fully)
        result = find_first(self.tree.root, matcher.handlers(), self.cancellation)
        if result is not None:
            logger.debug(f"Symbol at {line}:{column}: {result.kind.value} {result.name}")
        return result


class LocateCommandQuery(Query[Optional[SymbolReference]]):
    """Find the command a cursor is in, including the whitespace after it."""

    def execute(self, line: int, column: int) -> Optional[SymbolReference]:
        """Execute command lookup.

        Each command on the pipeline that starts on ``line`` owns the span
        from its first column up to the next non-whitespace character (or the
        end of the line).

        Returns:
            A Function symbol for the command's name token, or None.
        """
        check_position(line, column)

        def pipeline(node: Pipeline) -> Optional[SymbolReference]:
            if node.extent.start_line != line:
                return None
            for element in node.elements:
                if not isinstance(element, Command):
                    continue
                symbol = builders.command_symbol(element)
                if symbol is None:
                    continue
                if element.extent.start_column <= column <= self._true_end_column(element):
                    return symbol
            return None

        return find_first(self.tree.root, {NodeKind.PIPELINE: pipeline}, self.cancellation)

    def _true_end_column(self, command: Command) -> int:
        extent = command.extent
        if extent.end_line != extent.start_line:
            return extent.end_column

        remaining = self.tree.line_text(extent.start_line)[extent.end_column - 1:]
        return extent.end_column + len(remaining) - len(remaining.lstrip())
