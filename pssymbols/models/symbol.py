"""Symbol reference model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..syntax.extent import Extent


class SymbolKind(str, Enum):
    FUNCTION = "Function"
    VARIABLE = "Variable"
    PARAMETER = "Parameter"
    CLASS = "Class"
    CONSTRUCTOR = "Constructor"
    METHOD = "Method"
    PROPERTY = "Property"
    HASHTABLE_KEY = "HashtableKey"
    WORKFLOW = "Workflow"
    CONFIGURATION = "Configuration"
    UNKNOWN = "Unknown"


MEMBER_KINDS = frozenset({SymbolKind.CONSTRUCTOR, SymbolKind.METHOD, SymbolKind.PROPERTY})


@dataclass(frozen=True)
class MemberInfo:
    """Metadata carried by method, constructor and property symbols."""

    owner_type_name: str
    is_static: bool = False
    parameter_type_names: tuple[str, ...] = ()
    return_type_name: str = ""
    is_constructor: bool = False

    @property
    def arity(self) -> int:
        return len(self.parameter_type_names)


@dataclass(frozen=True)
class SymbolReference:
    """A named construct found in a script: what it is, what it's called, where it is.

    Two references denote the same logical symbol when the matching rules
    say so, never because their extents are equal: a declaration and a use
    of one symbol sit at different places.
    """

    kind: SymbolKind
    name: str
    extent: Extent
    member: Optional[MemberInfo] = None

    @property
    def is_constructor(self) -> bool:
        return self.member is not None and self.member.is_constructor

    @property
    def arity(self) -> int:
        return self.member.arity if self.member else 0

    @property
    def start_line(self) -> int:
        return self.extent.start_line

    @property
    def start_column(self) -> int:
        return self.extent.start_column

    @property
    def signature_name(self) -> str:
        """``Name(Type1, Type2)`` for methods and constructors, the name otherwise."""
        if self.member is None or self.kind not in (SymbolKind.METHOD, SymbolKind.CONSTRUCTOR):
            return self.name
        return f"{self.name}({', '.join(self.member.parameter_type_names)})"

    @property
    def display_string(self) -> str:
        if self.kind == SymbolKind.PROPERTY and self.member is not None:
            return_type = self.member.return_type_name or "object"
            return f"{return_type} {self.member.owner_type_name}.{self.name}"
        return self.signature_name
