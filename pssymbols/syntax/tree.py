"""Parsed script tree handle."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .nodes import Node

logger = logging.getLogger(__name__)


class ScriptTree:
    """A parsed script: root node, source text and parent links.

    The tree is treated as read-only once built. Queries only read it, so
    one tree can serve concurrent queries from several threads.
    """

    def __init__(self, root: Node, source: Optional[str] = None, file: Optional[str | Path] = None):
        """Initialize the tree and link every node to its parent.

        Args:
            root: Root node, normally a ScriptBlock.
            source: Full script text. Defaults to the root extent text.
            file: Path of the script the tree was parsed from, if known.
        """
        if root is None:
            raise ValueError("A syntax tree requires a root node")

        self.root = root
        self.source = source if source is not None else root.extent.text
        self.file = str(file) if file is not None else None
        self._lines = self.source.splitlines()
        self.node_count = self._link_parents()

    def _link_parents(self) -> int:
        self.root.parent = None
        count = 1
        stack = [self.root]
        while stack:
            node = stack.pop()
            for child in node.children():
                child.parent = node
                count += 1
                stack.append(child)
        logger.debug(f"Linked {count} nodes for {self.file or '<memory>'}")
        return count

    def line_text(self, line: int) -> str:
        """Return the text of a 1-based source line, or '' when out of range."""
        if 1 <= line <= len(self._lines):
            return self._lines[line - 1]
        return ""

    def walk(self) -> Iterator[Node]:
        """Yield every node in pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))
