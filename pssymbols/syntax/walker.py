"""Traversal engine: a depth-first, pre-order walk driven by a dispatch table.

Each handler receives a node and answers with a ``VisitAction``. ``CONTINUE``
descends into the node's children, ``STOP_VISIT`` aborts the whole walk.
Node kinds without a handler are walked through.

Two modes are built on top of ``walk``:

- ``find_first``: handlers return a result or None; the first non-None
  result in pre-order stops the walk.
- ``collect_all``: handlers return an iterable of results; everything is
  gathered in visit order and the walk always runs to the end.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from .nodes import Node, NodeKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VisitAction(Enum):
    CONTINUE = "continue"
    STOP_VISIT = "stop"


class QueryCancelledError(RuntimeError):
    """Raised after a walk was stopped by its cancellation token."""


class CancellationToken:
    """Cooperative cancellation flag, checked between node visits."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


Handler = Callable[[Node], VisitAction]


def walk(
    root: Node,
    handlers: Mapping[NodeKind, Handler],
    cancellation: Optional[CancellationToken] = None,
) -> bool:
    """Walk the tree under ``root`` in pre-order.

    Args:
        root: Node to start from.
        handlers: Dispatch table keyed on node kind.
        cancellation: Optional token checked before each node visit.

    Returns:
        True if a handler stopped the walk, False if it ran to the end.

    Raises:
        QueryCancelledError: If the token was cancelled during the walk.
    """
    if root is None:
        raise ValueError("Cannot walk a missing tree")

    stack = [root]
    visited = 0
    while stack:
        if cancellation is not None and cancellation.cancelled:
            logger.debug(f"Walk cancelled after {visited} nodes")
            raise QueryCancelledError(f"Query cancelled after visiting {visited} nodes")

        node = stack.pop()
        visited += 1
        handler = handlers.get(node.kind)
        if handler is not None and handler(node) is VisitAction.STOP_VISIT:
            return True

        stack.extend(reversed(list(node.children())))

    return False


def find_first(
    root: Node,
    handlers: Mapping[NodeKind, Callable[[Node], Optional[T]]],
    cancellation: Optional[CancellationToken] = None,
) -> Optional[T]:
    """Return the first handler result in pre-order, or None."""
    found: list[T] = []

    def wrap(handler):
        def visit(node: Node) -> VisitAction:
            result = handler(node)
            if result is None:
                return VisitAction.CONTINUE
            found.append(result)
            return VisitAction.STOP_VISIT
        return visit

    walk(root, {kind: wrap(h) for kind, h in handlers.items()}, cancellation)
    return found[0] if found else None


def collect_all(
    root: Node,
    handlers: Mapping[NodeKind, Callable[[Node], Iterable[T]]],
    cancellation: Optional[CancellationToken] = None,
) -> list[T]:
    """Return every handler result, in visit order."""
    results: list[T] = []

    def wrap(handler):
        def visit(node: Node) -> VisitAction:
            results.extend(handler(node))
            return VisitAction.CONTINUE
        return visit

    walk(root, {kind: wrap(h) for kind, h in handlers.items()}, cancellation)
    return results
