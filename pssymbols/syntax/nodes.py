"""Syntax node model for parsed PowerShell scripts.

Nodes are produced by an external parser and loaded from JSON (see
``loader.py``). Every node class carries a ``NodeKind`` discriminant; the
traversal engine dispatches on it instead of on the Python class.

Child fields are declared in source order so that ``children()`` yields a
pre-order, document-ordered walk. Optional children default to ``None`` and
lists default to empty, so a node missing a child is still walkable.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Iterator, Optional

from .extent import EMPTY_EXTENT, Extent


class NodeKind(str, Enum):
    SCRIPT_BLOCK = "ScriptBlock"
    PARAM_BLOCK = "ParamBlock"
    NAMED_BLOCK = "NamedBlock"
    STATEMENT_BLOCK = "StatementBlock"
    PARAMETER = "Parameter"
    FUNCTION_DEFINITION = "FunctionDefinition"
    CONFIGURATION_DEFINITION = "ConfigurationDefinition"
    TYPE_DEFINITION = "TypeDefinition"
    FUNCTION_MEMBER = "FunctionMember"
    PROPERTY_MEMBER = "PropertyMember"
    PIPELINE = "Pipeline"
    COMMAND = "Command"
    COMMAND_PARAMETER = "CommandParameter"
    COMMAND_EXPRESSION = "CommandExpression"
    ASSIGNMENT = "Assignment"
    VARIABLE_EXPRESSION = "VariableExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    INVOKE_MEMBER_EXPRESSION = "InvokeMemberExpression"
    TYPE_EXPRESSION = "TypeExpression"
    TYPE_CONSTRAINT = "TypeConstraint"
    CONVERT_EXPRESSION = "ConvertExpression"
    STRING_CONSTANT = "StringConstant"
    EXPANDABLE_STRING = "ExpandableString"
    CONSTANT = "Constant"
    HASHTABLE = "Hashtable"
    ARRAY_LITERAL = "ArrayLiteral"
    SCRIPT_BLOCK_EXPRESSION = "ScriptBlockExpression"
    PAREN_EXPRESSION = "ParenExpression"
    BINARY_EXPRESSION = "BinaryExpression"
    IF = "If"
    LOOP = "Loop"
    RETURN = "Return"
    GENERIC = "Generic"


@dataclass(eq=False)
class Node:
    """Base syntax node. Compared by identity."""

    kind: ClassVar[NodeKind] = NodeKind.GENERIC

    extent: Extent = EMPTY_EXTENT
    parent: Optional["Node"] = field(default=None, repr=False)

    def children(self) -> Iterator["Node"]:
        """Yield direct child nodes in source order."""
        for f in fields(self):
            if f.name in ("extent", "parent"):
                continue
            yield from _iter_nodes(getattr(self, f.name))

    def ancestors(self) -> Iterator["Node"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent


def _iter_nodes(value) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_nodes(item)


# -- Blocks ------------------------------------------------------------------


@dataclass(eq=False)
class ScriptBlock(Node):
    kind: ClassVar[NodeKind] = NodeKind.SCRIPT_BLOCK

    param_block: Optional["ParamBlock"] = None
    blocks: list["NamedBlock"] = field(default_factory=list)


@dataclass(eq=False)
class ParamBlock(Node):
    kind: ClassVar[NodeKind] = NodeKind.PARAM_BLOCK

    parameters: list["Parameter"] = field(default_factory=list)


@dataclass(eq=False)
class NamedBlock(Node):
    """begin/process/end block of a script block (unnamed blocks are ``end``)."""

    kind: ClassVar[NodeKind] = NodeKind.NAMED_BLOCK

    block_kind: str = "end"
    statements: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class StatementBlock(Node):
    kind: ClassVar[NodeKind] = NodeKind.STATEMENT_BLOCK

    statements: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Parameter(Node):
    """A declared parameter: ``[int] $Count = 1``."""

    kind: ClassVar[NodeKind] = NodeKind.PARAMETER

    type_constraint: Optional["TypeConstraint"] = None
    name: Optional["VariableExpression"] = None
    default_value: Optional[Node] = None

    @property
    def static_type_name(self) -> str:
        if self.type_constraint is not None and self.type_constraint.type_name:
            return self.type_constraint.type_name
        return "Object"


# -- Declarations --------------------------------------------------------------


@dataclass(eq=False)
class FunctionDefinition(Node):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_DEFINITION

    name: str = ""
    is_workflow: bool = False
    is_filter: bool = False
    parameters: list[Parameter] = field(default_factory=list)
    body: Optional[ScriptBlock] = None


@dataclass(eq=False)
class ConfigurationDefinition(Node):
    kind: ClassVar[NodeKind] = NodeKind.CONFIGURATION_DEFINITION

    name: str = ""
    body: Optional[Node] = None


@dataclass(eq=False)
class TypeDefinition(Node):
    """``class``/``enum``/``interface`` declaration."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE_DEFINITION

    name: str = ""
    type_kind: str = "class"
    base_types: list["TypeConstraint"] = field(default_factory=list)
    members: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class FunctionMember(Node):
    """Method or constructor declared inside a class."""

    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_MEMBER

    name: str = ""
    is_static: bool = False
    is_constructor: bool = False
    return_type: Optional["TypeConstraint"] = None
    parameters: list[Parameter] = field(default_factory=list)
    body: Optional[ScriptBlock] = None


@dataclass(eq=False)
class PropertyMember(Node):
    kind: ClassVar[NodeKind] = NodeKind.PROPERTY_MEMBER

    name: str = ""
    is_static: bool = False
    property_type: Optional["TypeConstraint"] = None
    initial_value: Optional[Node] = None


# -- Statements ---------------------------------------------------------------


@dataclass(eq=False)
class Pipeline(Node):
    kind: ClassVar[NodeKind] = NodeKind.PIPELINE

    elements: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Command(Node):
    """A command invocation. The first element is the command name."""

    kind: ClassVar[NodeKind] = NodeKind.COMMAND

    invocation_operator: str = ""
    elements: list[Node] = field(default_factory=list)

    @property
    def name_element(self) -> Optional[Node]:
        return self.elements[0] if self.elements else None


@dataclass(eq=False)
class CommandParameter(Node):
    """``-Name`` style parameter passed to a command."""

    kind: ClassVar[NodeKind] = NodeKind.COMMAND_PARAMETER

    parameter_name: str = ""
    argument: Optional[Node] = None


@dataclass(eq=False)
class CommandExpression(Node):
    kind: ClassVar[NodeKind] = NodeKind.COMMAND_EXPRESSION

    expression: Optional[Node] = None


@dataclass(eq=False)
class Assignment(Node):
    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT

    left: Optional[Node] = None
    operator: str = "="
    right: Optional[Node] = None


@dataclass(eq=False)
class If(Node):
    kind: ClassVar[NodeKind] = NodeKind.IF

    clauses: list[tuple[Node, StatementBlock]] = field(default_factory=list)
    else_clause: Optional[StatementBlock] = None


@dataclass(eq=False)
class Loop(Node):
    """foreach/for/while/do loops share one shape."""

    kind: ClassVar[NodeKind] = NodeKind.LOOP

    loop_kind: str = "while"
    variable: Optional["VariableExpression"] = None
    condition: Optional[Node] = None
    body: Optional[StatementBlock] = None


@dataclass(eq=False)
class Return(Node):
    kind: ClassVar[NodeKind] = NodeKind.RETURN

    pipeline: Optional[Node] = None


# -- Expressions --------------------------------------------------------------


@dataclass(eq=False)
class VariableExpression(Node):
    """``$name``; ``name`` holds the user path without the sigil."""

    kind: ClassVar[NodeKind] = NodeKind.VARIABLE_EXPRESSION

    name: str = ""
    splatted: bool = False


@dataclass(eq=False)
class MemberExpression(Node):
    """Property access: ``$obj.Name`` or ``[Type]::Name``."""

    kind: ClassVar[NodeKind] = NodeKind.MEMBER_EXPRESSION

    expression: Optional[Node] = None
    member: Optional[Node] = None
    static: bool = False

    @property
    def member_name(self) -> str:
        if isinstance(self.member, StringConstant):
            return self.member.value
        return ""


@dataclass(eq=False)
class InvokeMemberExpression(MemberExpression):
    """Method call: ``$obj.Name(1, 2)`` or ``[Type]::new()``."""

    kind: ClassVar[NodeKind] = NodeKind.INVOKE_MEMBER_EXPRESSION

    arguments: list[Node] = field(default_factory=list)

    @property
    def is_constructor_call(self) -> bool:
        return (
            isinstance(self.expression, TypeExpression)
            and self.member_name.casefold() == "new"
        )


@dataclass(eq=False)
class TypeExpression(Node):
    """``[Type]`` used as a value."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE_EXPRESSION

    type_name: str = ""


@dataclass(eq=False)
class TypeConstraint(Node):
    """``[Type]`` attached to a parameter, property or return type."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE_CONSTRAINT

    type_name: str = ""


@dataclass(eq=False)
class ConvertExpression(Node):
    """``[Type]$value`` cast."""

    kind: ClassVar[NodeKind] = NodeKind.CONVERT_EXPRESSION

    type_constraint: Optional[TypeConstraint] = None
    child: Optional[Node] = None


@dataclass(eq=False)
class StringConstant(Node):
    kind: ClassVar[NodeKind] = NodeKind.STRING_CONSTANT

    value: str = ""
    string_kind: str = "BareWord"


@dataclass(eq=False)
class ExpandableString(Node):
    kind: ClassVar[NodeKind] = NodeKind.EXPANDABLE_STRING

    value: str = ""
    nested: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Constant(Node):
    kind: ClassVar[NodeKind] = NodeKind.CONSTANT

    value: object = None
    static_type: str = "int"


@dataclass(eq=False)
class Hashtable(Node):
    """``@{ Key = Value }``; ``pairs`` holds (key, value) tuples."""

    kind: ClassVar[NodeKind] = NodeKind.HASHTABLE

    pairs: list[tuple[Node, Node]] = field(default_factory=list)


@dataclass(eq=False)
class ArrayLiteral(Node):
    kind: ClassVar[NodeKind] = NodeKind.ARRAY_LITERAL

    elements: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class ScriptBlockExpression(Node):
    kind: ClassVar[NodeKind] = NodeKind.SCRIPT_BLOCK_EXPRESSION

    script_block: Optional[ScriptBlock] = None


@dataclass(eq=False)
class ParenExpression(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAREN_EXPRESSION

    pipeline: Optional[Node] = None


@dataclass(eq=False)
class BinaryExpression(Node):
    kind: ClassVar[NodeKind] = NodeKind.BINARY_EXPRESSION

    left: Optional[Node] = None
    operator: str = ""
    right: Optional[Node] = None


@dataclass(eq=False)
class GenericNode(Node):
    """Any node kind this model does not know about.

    ``original_kind`` keeps the parser's name for it; nested nodes are still
    walked so unfamiliar AST shapes do not hide the symbols beneath them.
    """

    kind: ClassVar[NodeKind] = NodeKind.GENERIC

    original_kind: str = ""
    nested: list[Node] = field(default_factory=list)


NODE_CLASSES: dict[str, type[Node]] = {
    cls.kind.value: cls
    for cls in (
        ScriptBlock,
        ParamBlock,
        NamedBlock,
        StatementBlock,
        Parameter,
        FunctionDefinition,
        ConfigurationDefinition,
        TypeDefinition,
        FunctionMember,
        PropertyMember,
        Pipeline,
        Command,
        CommandParameter,
        CommandExpression,
        Assignment,
        If,
        Loop,
        Return,
        VariableExpression,
        MemberExpression,
        InvokeMemberExpression,
        TypeExpression,
        TypeConstraint,
        ConvertExpression,
        StringConstant,
        ExpandableString,
        Constant,
        Hashtable,
        ArrayLiteral,
        ScriptBlockExpression,
        ParenExpression,
        BinaryExpression,
        GenericNode,
    )
}
