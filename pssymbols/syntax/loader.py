"""JSON loading utilities for parsed script trees.

The external parser dumps its AST as JSON:

    {
        "version": "1.0",
        "file": "Build.ps1",
        "source": "function Get-Foo { }\\nGet-Foo\\n",
        "root": {"kind": "ScriptBlock", "span": [0, 29], "blocks": [...]}
    }

Each node is an object with a ``kind`` and either an ``extent`` object
(1-based lines/columns plus text) or a ``span`` pair of 0-based offsets into
``source``. Remaining keys map onto the node class fields. Unknown kinds
load as GenericNode so the symbols beneath them stay reachable.

Uses msgspec for the envelope and extent decoding.
"""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

import msgspec

from .extent import EMPTY_EXTENT, Extent
from .nodes import NODE_CLASSES, GenericNode, Node
from .tree import ScriptTree

logger = logging.getLogger(__name__)


class ExtentSpec(msgspec.Struct, omit_defaults=True):
    """Extent specification in tree JSON."""

    start_line: Optional[int] = None
    start_column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    text: str = ""
    span: Optional[tuple[int, int]] = None


class TreeSpec(msgspec.Struct, omit_defaults=True):
    """Full tree JSON specification."""

    root: dict[str, Any]
    version: str = "1.0"
    file: Optional[str] = None
    source: Optional[str] = None


# Create reusable decoder for performance
_decoder = msgspec.json.Decoder(TreeSpec)


class _NodeBuilder:
    def __init__(self, source: Optional[str], file: Optional[str]):
        self.source = source
        self.file = file
        self.generic_count = 0

    def build(self, raw: dict[str, Any]) -> Node:
        kind = raw.get("kind")
        extent = self._extent(raw)
        cls = NODE_CLASSES.get(kind) if isinstance(kind, str) else None

        if cls is None or cls is GenericNode:
            self.generic_count += 1
            nested = [self.build(item) for item in _nested_node_dicts(raw)]
            return GenericNode(
                extent=extent,
                original_kind=str(raw.get("original_kind", kind)),
                nested=nested,
            )

        values = {}
        for f in fields(cls):
            if f.name in ("extent", "parent") or f.name not in raw:
                continue
            values[f.name] = self._convert(raw[f.name])
        return cls(extent=extent, **values)

    def _convert(self, value: Any) -> Any:
        if isinstance(value, dict) and "kind" in value:
            return self.build(value)
        if isinstance(value, list):
            return [
                tuple(self._convert(v) for v in item) if isinstance(item, list) else self._convert(item)
                for item in value
            ]
        return value

    def _extent(self, raw: dict[str, Any]) -> Extent:
        spec = msgspec.convert(raw.get("extent") or {}, ExtentSpec)
        span = raw.get("span") or spec.span
        if span is not None:
            if self.source is None:
                raise ValueError("Node uses 'span' but the tree has no 'source' text")
            start, end = span
            return Extent.from_offsets(self.source, start, end, file=self.file)

        if spec.start_line is None or spec.start_column is None:
            return EMPTY_EXTENT
        return Extent(
            start_line=spec.start_line,
            start_column=spec.start_column,
            end_line=spec.end_line if spec.end_line is not None else spec.start_line,
            end_column=spec.end_column if spec.end_column is not None else spec.start_column,
            text=spec.text,
            file=self.file,
        )


def _nested_node_dicts(value: Any):
    if isinstance(value, dict):
        for key, item in value.items():
            if key in ("extent", "span"):
                continue
            if isinstance(item, dict) and "kind" in item:
                yield item
            else:
                yield from _nested_node_dicts(item)
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, dict) and "kind" in item:
                yield item
            else:
                yield from _nested_node_dicts(item)


def build_tree(spec: TreeSpec, file: Optional[str | Path] = None) -> ScriptTree:
    """Materialize a decoded TreeSpec into a ScriptTree."""
    file_name = spec.file or (str(file) if file is not None else None)
    builder = _NodeBuilder(spec.source, file_name)
    root = builder.build(spec.root)
    if builder.generic_count:
        logger.debug(f"Loaded {builder.generic_count} nodes of unrecognized kind as Generic")
    return ScriptTree(root, source=spec.source, file=file_name)


def parse_tree(data: bytes | str, file: Optional[str | Path] = None) -> ScriptTree:
    """Parse tree JSON from bytes or a string.

    Raises:
        msgspec.DecodeError: If the data is not valid JSON.
        msgspec.ValidationError: If the envelope does not match TreeSpec.
    """
    return build_tree(_decoder.decode(data), file=file)


def load_tree(path: str | Path) -> ScriptTree:
    """Load a ScriptTree from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
    """
    with open(path, "rb") as f:
        tree = parse_tree(f.read(), file=path)
    logger.debug(f"Loaded tree from {path}: {tree.node_count} nodes")
    return tree
