"""Outline output: document symbols as a tree of classes and their members."""

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..models import MEMBER_KINDS, SymbolKind, SymbolReference
from .json_formatter import symbol_to_dict


def _group_members(symbols: list[SymbolReference]) -> list[tuple[SymbolReference, list[SymbolReference]]]:
    """Pair each top-level symbol with the members declared in it.

    Members are attached to the most recent class with their owner's name.
    Members without such a class stay at the top level.
    """
    groups: list[tuple[SymbolReference, list[SymbolReference]]] = []
    classes: dict[str, list[SymbolReference]] = {}

    for symbol in symbols:
        if symbol.kind in MEMBER_KINDS and symbol.member is not None:
            members = classes.get(symbol.member.owner_type_name.casefold())
            if members is not None:
                members.append(symbol)
                continue

        children: list[SymbolReference] = []
        if symbol.kind == SymbolKind.CLASS:
            classes[symbol.name.casefold()] = children
        groups.append((symbol, children))

    return groups


def print_outline(symbols: list[SymbolReference], console: Console, title: str = "Document"):
    """Print document symbols as a tree.

    Args:
        symbols: Result of DocumentSymbolsQuery, in document order.
        console: Rich console for output.
        title: Label of the tree root, usually the file name.
    """
    root = Tree(f"[bold]{escape(title)}[/bold]")

    for symbol, members in _group_members(symbols):
        label = f"[cyan]{symbol.kind.value}[/cyan] {escape(symbol.name)} [dim](line {symbol.start_line})[/dim]"
        branch = root.add(label)
        for member in members:
            branch.add(
                f"[cyan]{member.kind.value}[/cyan] {escape(member.display_string)} "
                f"[dim](line {member.start_line})[/dim]"
            )

    console.print(root)


def outline_to_dict(symbols: list[SymbolReference]) -> list[dict]:
    """Convert document symbols to a nested JSON-serializable list."""
    result = []
    for symbol, members in _group_members(symbols):
        entry = symbol_to_dict(symbol)
        if symbol.kind == SymbolKind.CLASS:
            entry["children"] = [symbol_to_dict(m) for m in members]
        result.append(entry)
    return result
