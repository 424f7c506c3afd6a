"""Matching rules: when two symbol references denote the same logical symbol.

Names are compared with ``str.casefold`` for every kind. Member kinds also
compare static-ness, arity and owning type; an unresolved (wildcard) owner on
either side matches any owner. Overloads are told apart by parameter count
only, not by parameter types.
"""

from typing import Optional

from ..models import AliasTable, SymbolKind, SymbolReference
from ..syntax.inference import is_wildcard_type

# Kinds that are matched with the same predicate as their key.
_KIND_FAMILY = {
    SymbolKind.WORKFLOW: SymbolKind.FUNCTION,
    SymbolKind.CONSTRUCTOR: SymbolKind.METHOD,
}


def kind_family(kind: SymbolKind) -> SymbolKind:
    return _KIND_FAMILY.get(kind, kind)


def names_equal(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return a.casefold() == b.casefold()


def normalize_variable_name(name: str) -> str:
    """``$foo``, ``@foo`` and ``${foo}`` all become ``foo``."""
    return name.lstrip("$@").strip("{}")


def owners_match(a: Optional[str], b: Optional[str]) -> bool:
    return is_wildcard_type(a) or is_wildcard_type(b) or names_equal(a, b)


def function_names_match(
    reference_name: str, candidate_name: str, aliases: Optional[AliasTable] = None
) -> bool:
    """Command/function name match, optionally through an alias table.

    With a table, two names also match when one is an alias of the other or
    both are aliases of the same command.
    """
    if names_equal(reference_name, candidate_name):
        return True
    if aliases is None:
        return False

    candidate_command = aliases.canonical(candidate_name)
    reference_command = aliases.canonical(reference_name)
    return (
        aliases.is_alias_of(reference_name, candidate_name)
        or names_equal(candidate_command, reference_name)
        or (bool(candidate_command) and names_equal(candidate_command, reference_command))
    )


def methods_match(reference: SymbolReference, candidate: SymbolReference) -> bool:
    ref, cand = reference.member, candidate.member
    if ref is None or cand is None:
        return False

    if ref.is_constructor or cand.is_constructor:
        return (
            ref.is_constructor
            and cand.is_constructor
            and ref.arity == cand.arity
            and names_equal(reference.name, cand.owner_type_name)
        )

    return (
        ref.is_static == cand.is_static
        and names_equal(reference.name, candidate.name)
        and ref.arity == cand.arity
        and owners_match(ref.owner_type_name, cand.owner_type_name)
    )


def properties_match(reference: SymbolReference, candidate: SymbolReference) -> bool:
    ref, cand = reference.member, candidate.member
    if ref is None or cand is None:
        return False
    return (
        ref.is_static == cand.is_static
        and names_equal(reference.name, candidate.name)
        and owners_match(ref.owner_type_name, cand.owner_type_name)
    )


def symbols_match(
    reference: SymbolReference,
    candidate: SymbolReference,
    aliases: Optional[AliasTable] = None,
) -> bool:
    """Return True if ``candidate`` refers to the same symbol as ``reference``."""
    family = kind_family(reference.kind)
    if family != kind_family(candidate.kind):
        return False

    if family == SymbolKind.FUNCTION:
        return function_names_match(reference.name, candidate.name, aliases)
    if family == SymbolKind.VARIABLE:
        return names_equal(
            normalize_variable_name(reference.name), normalize_variable_name(candidate.name)
        )
    if family == SymbolKind.METHOD:
        return methods_match(reference, candidate)
    if family == SymbolKind.PROPERTY:
        return properties_match(reference, candidate)
    if family == SymbolKind.UNKNOWN:
        return False
    # Parameter, Class, HashtableKey, Configuration: by name.
    return names_equal(reference.name, candidate.name)
