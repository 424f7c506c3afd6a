"""Main CLI application."""

import logging
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.console import Console
from rich.logging import RichHandler

from .models import AliasTable, SymbolReference, load_alias_table
from .syntax import ScriptTree, load_tree
from .queries import (
    LocateSymbolQuery,
    LocateCommandQuery,
    DeclarationQuery,
    ReferencesQuery,
    DocumentSymbolsQuery,
    HashtableKeysQuery,
    DotSourcedIncludesQuery,
    build_details,
    is_data_file,
)
from .output import (
    print_json,
    print_symbol,
    print_symbols,
    print_details,
    print_paths,
    print_outline,
    outline_to_dict,
)

app = typer.Typer(
    name="pssymbols",
    help="Resolve symbols in parsed PowerShell syntax trees",
    add_completion=False,
)
console = Console()

# Loaded trees, by resolved path
_trees: dict[Path, ScriptTree] = {}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log query details to stderr"),
):
    """Resolve symbols in parsed PowerShell syntax trees."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
            force=True,
        )


def get_tree(tree: str) -> ScriptTree:
    """Load or return cached tree."""
    tree_path = Path(tree).resolve()
    if tree_path not in _trees:
        if not tree_path.exists():
            console.print(f"[red]Error: Tree file not found: {tree}[/red]")
            raise typer.Exit(1)
        try:
            _trees[tree_path] = load_tree(tree_path)
        except (msgspec.DecodeError, msgspec.ValidationError, ValueError) as e:
            console.print(f"[red]Error: Invalid tree file {tree}: {e}[/red]")
            raise typer.Exit(1)
    return _trees[tree_path]


def get_aliases(aliases: Optional[Path]) -> Optional[AliasTable]:
    if aliases is None:
        return None
    if not aliases.exists():
        console.print(f"[red]Error: Alias file not found: {aliases}[/red]")
        raise typer.Exit(1)
    try:
        return load_alias_table(aliases)
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        console.print(f"[red]Error: Invalid alias file {aliases}: {e}[/red]")
        raise typer.Exit(1)


def not_found(message: str, query: dict, json_output: bool):
    if json_output:
        print_json({"error": message, "query": query})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def symbol_at(script: ScriptTree, line: int, column: int, json_output: bool) -> SymbolReference:
    """Locate the symbol under a position or exit."""
    try:
        symbol = LocateSymbolQuery(script).execute(line, column)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if symbol is None:
        not_found(f"No symbol at {line}:{column}", {"line": line, "column": column}, json_output)
    return symbol


# =============================================================================
# Position Commands
# =============================================================================


@app.command()
def locate(
    line: int = typer.Argument(..., help="1-based line"),
    column: int = typer.Argument(..., help="1-based column"),
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    full: bool = typer.Option(False, "--full", help="Match declarations on their whole extent"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Find the symbol at a position."""
    script = get_tree(tree)
    try:
        symbol = LocateSymbolQuery(script).execute(line, column, include_declarations_fully=full)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if symbol is None:
        not_found(f"No symbol at {line}:{column}", {"line": line, "column": column}, json_output)
    print_symbol(symbol, as_json=json_output)


@app.command()
def command(
    line: int = typer.Argument(..., help="1-based line"),
    column: int = typer.Argument(..., help="1-based column"),
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Find the command a position belongs to, including trailing whitespace."""
    script = get_tree(tree)
    try:
        symbol = LocateCommandQuery(script).execute(line, column)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if symbol is None:
        not_found(f"No command at {line}:{column}", {"line": line, "column": column}, json_output)
    print_symbol(symbol, as_json=json_output)


@app.command()
def definition(
    line: int = typer.Argument(..., help="1-based line"),
    column: int = typer.Argument(..., help="1-based column"),
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Find the declaration of the symbol at a position."""
    script = get_tree(tree)
    symbol = symbol_at(script, line, column, json_output)

    declaration = DeclarationQuery(script).execute(symbol)
    if declaration is None:
        not_found(
            f"No declaration found for {symbol.kind.value} {symbol.name}",
            {"line": line, "column": column, "symbol": symbol.name},
            json_output,
        )
    print_symbol(declaration, as_json=json_output)


@app.command()
def references(
    line: int = typer.Argument(..., help="1-based line"),
    column: int = typer.Argument(..., help="1-based column"),
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    aliases: Optional[Path] = typer.Option(None, "--aliases", "-a", help="Path to alias table JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Find every reference to the symbol at a position."""
    script = get_tree(tree)
    alias_table = get_aliases(aliases)
    symbol = symbol_at(script, line, column, json_output)

    results = ReferencesQuery(script).execute(symbol, aliases=alias_table)
    if not json_output:
        console.print(f"[bold]References to {symbol.kind.value} {symbol.name}:[/bold]")
    print_symbols(
        results,
        as_json=json_output,
        empty_message="No references found",
        query={"line": line, "column": column, "symbol": symbol.name},
    )


@app.command()
def details(
    line: int = typer.Argument(..., help="1-based line"),
    column: int = typer.Argument(..., help="1-based column"),
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show hover details for the symbol at a position."""
    script = get_tree(tree)
    symbol = symbol_at(script, line, column, json_output)
    print_details(build_details(symbol), as_json=json_output)


# =============================================================================
# Document Commands
# =============================================================================


@app.command()
def symbols(
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    tree_view: bool = typer.Option(False, "--tree-view", help="Group members under their class"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List the symbols of the document outline."""
    script = get_tree(tree)
    results = DocumentSymbolsQuery(script).execute()

    if tree_view:
        if json_output:
            print_json(outline_to_dict(results))
        else:
            print_outline(results, console, title=script.file or tree)
        return

    print_symbols(results, as_json=json_output)


@app.command()
def keys(
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List the literal keys of every hashtable."""
    script = get_tree(tree)
    results = HashtableKeysQuery(script).execute()

    if not json_output and is_data_file(script):
        console.print("[dim]Data file[/dim]")
    print_symbols(results, as_json=json_output, empty_message="No hashtable keys found")


@app.command()
def includes(
    tree: str = typer.Option(..., "--tree", "-t", help="Path to tree JSON"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List files dot-sourced with a literal path."""
    script = get_tree(tree)
    print_paths(DotSourcedIncludesQuery(script).execute(), as_json=json_output)


if __name__ == "__main__":
    app()
