"""Symbol reference builders.

All functions are standalone and turn one syntax node into the symbol
reference it stands for. Member builders take a TypeInferer to resolve the
owning type of a call site.
"""

import logging
from typing import Iterator, Optional

from ..models import MemberInfo, SymbolKind, SymbolReference
from ..syntax.extent import Extent, name_extent
from ..syntax.inference import WILDCARD_TYPE, TypeInferer, enclosing_type_name, is_wildcard_type
from ..syntax.nodes import (
    Command,
    CommandParameter,
    ConfigurationDefinition,
    FunctionDefinition,
    FunctionMember,
    Hashtable,
    InvokeMemberExpression,
    MemberExpression,
    Node,
    PropertyMember,
    StringConstant,
    TypeConstraint,
    TypeDefinition,
    TypeExpression,
    VariableExpression,
)

logger = logging.getLogger(__name__)


def owner_type_of(node: Node, inferer: TypeInferer) -> str:
    """Resolve the type a member declaration or member access belongs to.

    ``[Type]::Member`` names its owner directly. Any other receiver except
    ``$this`` goes through type inference. Declarations and ``$this``
    accesses belong to the enclosing class. Unresolved owners come back as
    the wildcard type.
    """
    if isinstance(node, MemberExpression):
        receiver = node.expression
        if isinstance(receiver, TypeExpression):
            return receiver.type_name or WILDCARD_TYPE
        if receiver is not None and receiver.extent.text.casefold() != "$this":
            owner = inferer.infer(receiver)
            return WILDCARD_TYPE if is_wildcard_type(owner) else owner

    return enclosing_type_name(node) or WILDCARD_TYPE


def function_symbol(node: FunctionDefinition, full_extent: bool = False) -> SymbolReference:
    """Function (or Workflow) symbol for a definition, at its name."""
    kind = SymbolKind.WORKFLOW if node.is_workflow else SymbolKind.FUNCTION
    extent = node.extent if full_extent else name_extent(node.extent, node.name)
    return SymbolReference(kind=kind, name=node.name, extent=extent)


def configuration_symbol(node: ConfigurationDefinition, full_extent: bool = False) -> SymbolReference:
    extent = node.extent if full_extent else name_extent(node.extent, node.name)
    return SymbolReference(kind=SymbolKind.CONFIGURATION, name=node.name, extent=extent)


def command_symbol(node: Command) -> Optional[SymbolReference]:
    """Function symbol for the name token of a command, None for an empty command."""
    name_element = node.name_element
    if name_element is None:
        logger.debug(f"Skipping command without elements at {node.extent.location_str}")
        return None
    return SymbolReference(
        kind=SymbolKind.FUNCTION,
        name=name_element.extent.text,
        extent=name_element.extent,
    )


def parameter_symbol(node: CommandParameter) -> SymbolReference:
    return SymbolReference(kind=SymbolKind.PARAMETER, name=node.extent.text, extent=node.extent)


def variable_symbol(node: VariableExpression) -> SymbolReference:
    return SymbolReference(kind=SymbolKind.VARIABLE, name=node.extent.text, extent=node.extent)


def class_symbol(node: TypeDefinition, full_extent: bool = False) -> SymbolReference:
    extent = node.extent if full_extent else name_extent(node.extent, node.name)
    return SymbolReference(kind=SymbolKind.CLASS, name=node.name, extent=extent)


def type_name_symbol(node: TypeExpression | TypeConstraint) -> SymbolReference:
    """Class symbol for a ``[Type]`` expression or constraint, at the type name."""
    return SymbolReference(
        kind=SymbolKind.CLASS,
        name=node.type_name,
        extent=name_extent(node.extent, node.type_name),
    )


def method_symbol(node: FunctionMember, full_extent: bool = False) -> SymbolReference:
    """Method or Constructor symbol for a member declaration."""
    extent = node.extent if full_extent else name_extent(node.extent, node.name)
    return SymbolReference(
        kind=SymbolKind.CONSTRUCTOR if node.is_constructor else SymbolKind.METHOD,
        name=node.name,
        extent=extent,
        member=MemberInfo(
            owner_type_name=enclosing_type_name(node) or WILDCARD_TYPE,
            is_static=node.is_static,
            parameter_type_names=tuple(p.static_type_name for p in node.parameters),
            return_type_name=node.return_type.type_name if node.return_type is not None else "",
            is_constructor=node.is_constructor,
        ),
    )


def method_call_symbol(node: InvokeMemberExpression, inferer: TypeInferer) -> SymbolReference:
    """Method or Constructor symbol for a call site, at the invoked member.

    ``[Type]::new(...)`` is a constructor call named after the type.
    """
    is_constructor = node.is_constructor_call
    name = node.expression.type_name if is_constructor else node.member_name
    if not name and node.member is not None:
        name = node.member.extent.text

    return SymbolReference(
        kind=SymbolKind.CONSTRUCTOR if is_constructor else SymbolKind.METHOD,
        name=name,
        extent=_member_extent(node),
        member=MemberInfo(
            owner_type_name=owner_type_of(node, inferer),
            is_static=node.static,
            parameter_type_names=tuple(inferer.infer(arg) for arg in node.arguments),
            is_constructor=is_constructor,
        ),
    )


def property_symbol(node: PropertyMember, full_extent: bool = False) -> SymbolReference:
    """Property symbol for a declaration, at the name after the ``$`` sigil."""
    if full_extent:
        extent = node.extent
    else:
        with_sigil = name_extent(node.extent, f"${node.name}")
        if with_sigil is node.extent:
            extent = name_extent(node.extent, node.name)
        else:
            extent = Extent(
                start_line=with_sigil.start_line,
                start_column=with_sigil.start_column + 1,
                end_line=with_sigil.end_line,
                end_column=with_sigil.end_column,
                text=node.name,
                file=with_sigil.file,
            )

    return SymbolReference(
        kind=SymbolKind.PROPERTY,
        name=node.name,
        extent=extent,
        member=MemberInfo(
            owner_type_name=enclosing_type_name(node) or WILDCARD_TYPE,
            is_static=node.is_static,
            return_type_name=node.property_type.type_name if node.property_type is not None else "object",
        ),
    )


def property_access_symbol(node: MemberExpression, inferer: TypeInferer) -> SymbolReference:
    """Property symbol for ``$obj.Name`` / ``[Type]::Name``, at the member name."""
    name = node.member_name
    if not name and node.member is not None:
        name = node.member.extent.text
    return SymbolReference(
        kind=SymbolKind.PROPERTY,
        name=name,
        extent=_member_extent(node),
        member=MemberInfo(
            owner_type_name=owner_type_of(node, inferer),
            is_static=node.static,
        ),
    )


def hashtable_key_symbols(node: Hashtable) -> Iterator[SymbolReference]:
    """HashtableKey symbols for each literal key, spanning key to end of value.

    Computed keys are skipped.
    """
    for pair in node.pairs:
        if len(pair) != 2:
            continue
        key, value = pair
        if not isinstance(key, StringConstant):
            continue
        end = value.extent if value is not None else key.extent
        yield SymbolReference(
            kind=SymbolKind.HASHTABLE_KEY,
            name=key.value,
            extent=Extent(
                start_line=key.extent.start_line,
                start_column=key.extent.start_column,
                end_line=end.end_line,
                end_column=end.end_column,
                text=key.value,
                file=key.extent.file,
            ),
        )


def _member_extent(node: MemberExpression) -> Extent:
    if node.member is not None:
        return node.member.extent
    return name_extent(node.extent, node.member_name)
