"""Best-effort static type inference.

Only used to guess the owning type of a member access when the receiver is
not a literal ``[Type]``. Anything it cannot work out is reported as the
wildcard type, which matches every owner.
"""

from typing import Optional, Protocol

from .nodes import (
    ArrayLiteral,
    Assignment,
    CommandExpression,
    Constant,
    ConvertExpression,
    ExpandableString,
    FunctionDefinition,
    FunctionMember,
    Hashtable,
    InvokeMemberExpression,
    MemberExpression,
    Node,
    Parameter,
    ParenExpression,
    Pipeline,
    PropertyMember,
    ScriptBlockExpression,
    StringConstant,
    TypeDefinition,
    TypeExpression,
    VariableExpression,
)
from .tree import ScriptTree

WILDCARD_TYPE = "object"

_WILDCARD_NAMES = frozenset({"", "object", "unknown", "system.object"})

MAX_INFERENCE_DEPTH = 8


def is_wildcard_type(type_name: Optional[str]) -> bool:
    """Return True for a type name that stands for 'could be anything'."""
    return type_name is None or type_name.casefold() in _WILDCARD_NAMES


def enclosing_type_name(node: Node) -> str:
    """Name of the class that contains ``node``, or '' outside any class."""
    for ancestor in node.ancestors():
        if isinstance(ancestor, TypeDefinition):
            return ancestor.name
    return ""


class TypeInferer(Protocol):
    def infer(self, node: Node) -> str:
        """Return a type name for ``node`` or the wildcard type."""
        ...


class WildcardTypeInferer:
    """Inferer that never knows anything."""

    def infer(self, node: Node) -> str:
        return WILDCARD_TYPE


class DefaultTypeInferer:
    """Syntactic inference over a single tree."""

    def __init__(self, tree: ScriptTree):
        self.tree = tree
        self._assignments: Optional[list[Assignment]] = None
        self._members: Optional[list[Node]] = None

    def infer(self, node: Node) -> str:
        result = self._infer(node, 0)
        return WILDCARD_TYPE if is_wildcard_type(result) else result

    def _infer(self, node: Optional[Node], depth: int) -> str:
        if node is None or depth > MAX_INFERENCE_DEPTH:
            return WILDCARD_TYPE

        if isinstance(node, InvokeMemberExpression):
            if node.is_constructor_call:
                return node.expression.type_name
            return self._member_type(node, depth)
        if isinstance(node, MemberExpression):
            return self._member_type(node, depth)
        if isinstance(node, ConvertExpression):
            if node.type_constraint is not None:
                return node.type_constraint.type_name
            return WILDCARD_TYPE
        if isinstance(node, (StringConstant, ExpandableString)):
            return "string"
        if isinstance(node, Constant):
            return node.static_type
        if isinstance(node, Hashtable):
            return "hashtable"
        if isinstance(node, ArrayLiteral):
            return "object[]"
        if isinstance(node, ScriptBlockExpression):
            return "scriptblock"
        if isinstance(node, TypeExpression):
            return "type"
        if isinstance(node, VariableExpression):
            return self._variable_type(node, depth)
        if isinstance(node, ParenExpression):
            return self._infer(node.pipeline, depth + 1)
        if isinstance(node, Pipeline) and len(node.elements) == 1:
            return self._infer(node.elements[0], depth + 1)
        if isinstance(node, CommandExpression):
            return self._infer(node.expression, depth + 1)
        return WILDCARD_TYPE

    def _variable_type(self, node: VariableExpression, depth: int) -> str:
        name = node.name.casefold()
        if name == "this":
            return enclosing_type_name(node) or WILDCARD_TYPE

        # A typed parameter of the enclosing function or method wins.
        for ancestor in node.ancestors():
            if isinstance(ancestor, (FunctionDefinition, FunctionMember)):
                for param in _parameters_of(ancestor):
                    if param.name is not None and param.name.name.casefold() == name:
                        if param.type_constraint is not None:
                            return param.type_constraint.type_name
                        return WILDCARD_TYPE
                break

        # Only the last assignment before the use decides; its value is inferred once.
        position = (node.extent.start_line, node.extent.start_column)
        enclosing = {id(ancestor) for ancestor in node.ancestors()}
        latest: Optional[Assignment] = None
        for assignment in self._all_assignments():
            left = assignment.left
            typed = isinstance(left, ConvertExpression)
            target = left.child if typed else left
            if not isinstance(target, VariableExpression) or target.name.casefold() != name:
                continue
            if target is node:
                latest = assignment
                break
            if id(assignment) in enclosing:
                continue
            if (left.extent.start_line, left.extent.start_column) >= position:
                break
            latest = assignment

        if latest is None:
            return WILDCARD_TYPE
        if isinstance(latest.left, ConvertExpression):
            if latest.left.type_constraint is not None:
                return latest.left.type_constraint.type_name
            return WILDCARD_TYPE
        return self._infer(latest.right, depth + 1)

    def _member_type(self, node: MemberExpression, depth: int) -> str:
        if isinstance(node.expression, TypeExpression):
            owner = node.expression.type_name
        else:
            owner = self._infer(node.expression, depth + 1)
        if is_wildcard_type(owner):
            return WILDCARD_TYPE

        name = node.member_name.casefold()
        wants_method = isinstance(node, InvokeMemberExpression)
        for member in self._all_members():
            if enclosing_type_name(member).casefold() != owner.casefold():
                continue
            if wants_method and isinstance(member, FunctionMember) and member.name.casefold() == name:
                if len(member.parameters) == len(node.arguments) and member.return_type is not None:
                    return member.return_type.type_name
            if not wants_method and isinstance(member, PropertyMember) and member.name.casefold() == name:
                if member.property_type is not None:
                    return member.property_type.type_name
        return WILDCARD_TYPE

    def _all_assignments(self) -> list[Assignment]:
        if self._assignments is None:
            self._assignments = [n for n in self.tree.walk() if isinstance(n, Assignment)]
        return self._assignments

    def _all_members(self) -> list[Node]:
        if self._members is None:
            self._members = [
                n for n in self.tree.walk() if isinstance(n, (FunctionMember, PropertyMember))
            ]
        return self._members


def _parameters_of(node: Node) -> list[Parameter]:
    params = list(getattr(node, "parameters", []))
    body = getattr(node, "body", None)
    if body is not None and getattr(body, "param_block", None) is not None:
        params.extend(body.param_block.parameters)
    return params
