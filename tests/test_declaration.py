"""Tests for finding declarations."""

import pytest

from pssymbols.models import SymbolKind, SymbolReference
from pssymbols.queries import DeclarationQuery, LocateCommandQuery, LocateSymbolQuery
from pssymbols.syntax import Extent
from pssymbols.syntax.nodes import (
    Assignment,
    Constant,
    ConvertExpression,
    FunctionMember,
    Parameter,
    ScriptBlock,
    TypeConstraint,
    TypeDefinition,
    VariableExpression,
)


class TestFunctionDeclaration:
    def test_scenario_command_to_definition(self, function_tree):
        command = LocateCommandQuery(function_tree).execute(2, 1)
        declaration = DeclarationQuery(function_tree).execute(command)
        assert declaration.kind == SymbolKind.FUNCTION
        assert declaration.start_line == 1
        assert declaration.extent.text == "Get-Foo"

    def test_case_insensitive(self, function_tree):
        symbol = SymbolReference(SymbolKind.FUNCTION, "GET-FOO", Extent(2, 1, 2, 8))
        assert DeclarationQuery(function_tree).execute(symbol).start_line == 1

    def test_external_command_has_none(self, alias_tree):
        symbol = LocateCommandQuery(alias_tree).execute(1, 1)
        assert DeclarationQuery(alias_tree).execute(symbol) is None


class TestMemberDeclaration:
    def test_method(self, class_tree):
        call = LocateSymbolQuery(class_tree).execute(5, 17)
        declaration = DeclarationQuery(class_tree).execute(call)
        assert declaration.kind == SymbolKind.METHOD
        assert declaration.start_line == 3

    def test_constructor(self, class_tree):
        call = LocateSymbolQuery(class_tree).execute(5, 11)
        declaration = DeclarationQuery(class_tree).execute(call)
        assert declaration.kind == SymbolKind.CONSTRUCTOR
        assert declaration.start_line == 2

    def test_class(self, class_tree):
        receiver = LocateSymbolQuery(class_tree).execute(5, 2)
        declaration = DeclarationQuery(class_tree).execute(receiver)
        assert declaration.kind == SymbolKind.CLASS
        assert (declaration.start_line, declaration.start_column) == (1, 7)

    def test_property(self, property_class_tree):
        access = LocateSymbolQuery(property_class_tree).execute(5, 4)
        declaration = DeclarationQuery(property_class_tree).execute(access)
        assert declaration.kind == SymbolKind.PROPERTY
        assert declaration.start_line == 2

    def test_overload_by_arity(self, source):
        text = "class C {\n    [void] M() { }\n    [void] M($a) { }\n}\n"
        src = source(text)
        no_args = FunctionMember(
            extent=src.extent("[void] M() { }"),
            name="M",
            return_type=TypeConstraint(extent=src.extent("[void]"), type_name="void"),
            body=ScriptBlock(extent=src.extent("{ }")),
        )
        one_arg = FunctionMember(
            extent=src.extent("[void] M($a) { }"),
            name="M",
            return_type=TypeConstraint(extent=src.extent("[void]", 2), type_name="void"),
            parameters=[Parameter(extent=src.extent("$a"), name=VariableExpression(extent=src.extent("$a"), name="a"))],
            body=ScriptBlock(extent=src.extent("{ }", 2)),
        )
        tree = src.tree(TypeDefinition(extent=src.extent(text.rstrip("\n")), name="C", members=[no_args, one_arg]))

        query = LocateSymbolQuery(tree)
        declaration_query = DeclarationQuery(tree)
        first = query.execute(2, 12)
        second = query.execute(3, 12)
        assert first.arity == 0 and second.arity == 1
        assert declaration_query.execute(second).start_line == 3
        assert declaration_query.execute(first).start_line == 2


class TestVariableDeclaration:
    def test_first_assignment(self, scope_tree):
        use = LocateSymbolQuery(scope_tree).execute(3, 5)
        declaration = DeclarationQuery(scope_tree).execute(use)
        assert declaration.kind == SymbolKind.VARIABLE
        assert declaration.start_line == 1

    @pytest.mark.parametrize("name", ["x", "$x", "${x}", "$X"])
    def test_name_normalized(self, scope_tree, name):
        symbol = SymbolReference(SymbolKind.VARIABLE, name, Extent(9, 1, 9, 3))
        assert DeclarationQuery(scope_tree).execute(symbol).start_line == 1

    def test_typed_assignment(self, source):
        src = source("[int]$n = 5\n")
        assignment = Assignment(
            extent=src.extent("[int]$n = 5"),
            left=ConvertExpression(
                extent=src.extent("[int]$n"),
                type_constraint=TypeConstraint(extent=src.extent("[int]"), type_name="int"),
                child=VariableExpression(extent=src.extent("$n"), name="n"),
            ),
            right=Constant(extent=src.extent("5"), value=5),
        )
        tree = src.tree(assignment)
        symbol = SymbolReference(SymbolKind.VARIABLE, "$n", Extent(2, 1, 2, 3))
        declaration = DeclarationQuery(tree).execute(symbol)
        assert (declaration.start_line, declaration.start_column) == (1, 6)


class TestNoDeclaration:
    @pytest.mark.parametrize("kind", [SymbolKind.PARAMETER, SymbolKind.HASHTABLE_KEY, SymbolKind.UNKNOWN])
    def test_kinds_without_declarations(self, hashtable_tree, kind):
        symbol = SymbolReference(kind, "Key1", Extent(1, 4, 1, 8))
        assert DeclarationQuery(hashtable_tree).execute(symbol) is None

    def test_missing_symbol(self, function_tree):
        with pytest.raises(ValueError):
            DeclarationQuery(function_tree).execute(None)
