"""Dot-sourcing and data-file queries."""

import logging

from ..syntax.nodes import (
    Command,
    CommandExpression,
    Hashtable,
    NamedBlock,
    Node,
    NodeKind,
    Pipeline,
    ScriptBlock,
    StringConstant,
)
from ..syntax.tree import ScriptTree
from ..syntax.walker import collect_all
from .base import Query

logger = logging.getLogger(__name__)

# Node shape of a ``.psd1`` document, from the root down.
_DATA_FILE_SHAPE = (ScriptBlock, NamedBlock, Pipeline, CommandExpression, Hashtable)


class DotSourcedIncludesQuery(Query[list[str]]):
    """List the paths of files dot-sourced with a literal path (``. ./lib.ps1``)."""

    def execute(self) -> list[str]:
        def command(node: Command):
            if node.invocation_operator != ".":
                return []
            first = node.name_element
            if isinstance(first, StringConstant):
                return [first.value]
            return []

        paths = collect_all(self.tree.root, {NodeKind.COMMAND: command}, self.cancellation)
        logger.debug(f"Found {len(paths)} dot-sourced files")
        return paths


def is_data_file(tree: ScriptTree) -> bool:
    """Return True if the tree looks like a PowerShell data file.

    A data file is a script whose body is a single hashtable expression,
    so the check walks ScriptBlock, NamedBlock, Pipeline, CommandExpression
    and Hashtable one level at a time. File names are not consulted.
    """
    if tree is None:
        raise ValueError("A parsed script tree is required")
    return _matches_shape(tree.root, 0)


def _matches_shape(node: Node, level: int) -> bool:
    if not isinstance(node, _DATA_FILE_SHAPE[level]):
        return False
    if level == len(_DATA_FILE_SHAPE) - 1:
        return True
    return any(_matches_shape(child, level + 1) for child in node.children())
