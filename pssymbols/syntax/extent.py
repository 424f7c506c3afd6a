"""Source extents and the position helpers built on them."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Extent:
    """A 1-based source span plus the literal text it covers.

    Columns follow the PowerShell parser convention: ``end_column`` is the
    column just after the last character of the span.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    text: str = ""
    file: Optional[str] = None

    def __post_init__(self):
        if (self.start_line, self.start_column) > (self.end_line, self.end_column):
            raise ValueError(
                f"Extent start {self.start_line}:{self.start_column} is after "
                f"end {self.end_line}:{self.end_column}"
            )

    def contains(self, line: int, column: int) -> bool:
        """Return True if the position falls inside this extent.

        The test only accepts positions on the start line. It is meant for
        short name tokens; for a span covering several lines any column at or
        after the start column of the first line matches, and nothing on the
        following lines does.
        """
        return (
            self.start_line == line
            and self.start_column <= column
            and (self.end_line > line or self.end_column >= column)
        )

    @property
    def location_str(self) -> str:
        """Return file:line:column string."""
        if self.file:
            return f"{self.file}:{self.start_line}:{self.start_column}"
        return f"{self.start_line}:{self.start_column}"

    @classmethod
    def from_offsets(
        cls, source: str, start: int, end: int, file: Optional[str] = None
    ) -> "Extent":
        """Build an extent from 0-based character offsets into ``source``."""
        if start < 0 or end < start or end > len(source):
            raise ValueError(f"Invalid span [{start}, {end}] for source of length {len(source)}")
        start_line, start_column = _position_at(source, start)
        end_line, end_column = _position_at(source, end)
        return cls(
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            text=source[start:end],
            file=file,
        )


EMPTY_EXTENT = Extent(start_line=1, start_column=1, end_line=1, end_column=1)


def _position_at(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def name_extent(parent: Extent, name: str) -> Extent:
    """Carve the extent of ``name`` out of a larger declaration or usage extent.

    Uses the first case-sensitive occurrence of ``name`` in the parent text.
    If the name also appears earlier in that text (for instance inside a
    default value), that earlier occurrence is the one returned. Returns the
    parent extent when the name does not occur at all.
    """
    index = parent.text.find(name) if name else -1
    if index < 0:
        return parent

    start_column = parent.start_column + index
    return Extent(
        start_line=parent.start_line,
        start_column=start_column,
        end_line=parent.start_line,
        end_column=start_column + len(name),
        text=name,
        file=parent.file,
    )
