"""Syntax tree model, loading and traversal."""

from .extent import Extent, name_extent
from .inference import (
    WILDCARD_TYPE,
    DefaultTypeInferer,
    TypeInferer,
    WildcardTypeInferer,
    is_wildcard_type,
)
from .loader import load_tree, parse_tree
from .nodes import Node, NodeKind
from .tree import ScriptTree
from .walker import (
    CancellationToken,
    QueryCancelledError,
    VisitAction,
    collect_all,
    find_first,
    walk,
)

__all__ = [
    "Extent",
    "name_extent",
    "WILDCARD_TYPE",
    "DefaultTypeInferer",
    "TypeInferer",
    "WildcardTypeInferer",
    "is_wildcard_type",
    "load_tree",
    "parse_tree",
    "Node",
    "NodeKind",
    "ScriptTree",
    "CancellationToken",
    "QueryCancelledError",
    "VisitAction",
    "collect_all",
    "find_first",
    "walk",
]
