"""Base query interface."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from ..syntax import CancellationToken, DefaultTypeInferer, ScriptTree, TypeInferer

T = TypeVar("T")


class Query(ABC, Generic[T]):
    """Base query interface.

    All queries take a parsed tree and execute against it. A query keeps no
    state between executions, so one instance may be shared across threads.
    """

    def __init__(
        self,
        tree: ScriptTree,
        inferer: Optional[TypeInferer] = None,
        cancellation: Optional[CancellationToken] = None,
    ):
        if tree is None:
            raise ValueError("A query requires a parsed script tree")
        self.tree = tree
        self.inferer = inferer if inferer is not None else DefaultTypeInferer(tree)
        self.cancellation = cancellation

    @abstractmethod
    def execute(self, **params) -> T:
        """Execute the query and return typed result."""
        pass


def check_position(line: int, column: int):
    """Reject positions that cannot exist in a 1-based document."""
    if line < 1 or column < 1:
        raise ValueError(f"Positions are 1-based, got line {line}, column {column}")
