"""Shared fixtures: small scripts built node by node with real extents."""

import json

import pytest

from pssymbols.models import AliasTable
from pssymbols.syntax import Extent, ScriptTree
from pssymbols.syntax.nodes import (
    Assignment,
    Command,
    CommandExpression,
    Constant,
    FunctionDefinition,
    FunctionMember,
    Hashtable,
    If,
    InvokeMemberExpression,
    MemberExpression,
    NamedBlock,
    Pipeline,
    PropertyMember,
    ScriptBlock,
    StatementBlock,
    StringConstant,
    TypeConstraint,
    TypeDefinition,
    TypeExpression,
    VariableExpression,
)


class Source:
    """Script text plus helpers to carve node extents out of it."""

    def __init__(self, text: str):
        self.text = text

    def extent(self, snippet: str, occurrence: int = 1) -> Extent:
        """Extent of the n-th occurrence of ``snippet``."""
        index = -1
        for _ in range(occurrence):
            index = self.text.index(snippet, index + 1)
        return Extent.from_offsets(self.text, index, index + len(snippet))

    def whole(self) -> Extent:
        return Extent.from_offsets(self.text, 0, len(self.text))

    def command(self, name: str, occurrence: int = 1) -> Pipeline:
        """A one-command pipeline invoking ``name`` with no arguments."""
        ext = self.extent(name, occurrence)
        return Pipeline(
            extent=ext,
            elements=[Command(extent=ext, elements=[StringConstant(extent=ext, value=name)])],
        )

    def tree(self, *statements) -> ScriptTree:
        """Wrap statements in a script block's end block."""
        root = ScriptBlock(
            extent=self.whole(),
            blocks=[NamedBlock(extent=self.whole(), statements=list(statements))],
        )
        return ScriptTree(root, source=self.text)


@pytest.fixture
def source():
    """Factory for Source helpers."""
    return Source


# --- Scenario: function declared then called ---

FUNCTION_SCRIPT = "function Get-Foo { }\nGet-Foo\n"


@pytest.fixture
def function_tree():
    src = Source(FUNCTION_SCRIPT)
    definition = FunctionDefinition(
        extent=src.extent("function Get-Foo { }"),
        name="Get-Foo",
        body=ScriptBlock(extent=src.extent("{ }")),
    )
    return src.tree(definition, src.command("Get-Foo", 2))


# --- Scenario: class with constructor and method ---

CLASS_SCRIPT = (
    "class Widget {\n"
    "    Widget() { }\n"
    '    [string] Bar() { return "bar" }\n'
    "}\n"
    "[Widget]::new().Bar()\n"
)


@pytest.fixture
def class_tree():
    src = Source(CLASS_SCRIPT)
    constructor = FunctionMember(
        extent=src.extent("Widget() { }"),
        name="Widget",
        is_constructor=True,
        body=ScriptBlock(extent=src.extent("{ }")),
    )
    method = FunctionMember(
        extent=src.extent('[string] Bar() { return "bar" }'),
        name="Bar",
        return_type=TypeConstraint(extent=src.extent("[string]"), type_name="string"),
        body=ScriptBlock(extent=src.extent('{ return "bar" }')),
    )
    type_definition = TypeDefinition(
        extent=src.extent(CLASS_SCRIPT[: CLASS_SCRIPT.index("}\n[") + 1]),
        name="Widget",
        members=[constructor, method],
    )
    new_call = InvokeMemberExpression(
        extent=src.extent("[Widget]::new()"),
        expression=TypeExpression(extent=src.extent("[Widget]"), type_name="Widget"),
        member=StringConstant(extent=src.extent("new"), value="new"),
        static=True,
    )
    bar_call = InvokeMemberExpression(
        extent=src.extent("[Widget]::new().Bar()"),
        expression=new_call,
        member=StringConstant(extent=src.extent("Bar", 2), value="Bar"),
    )
    usage = Pipeline(
        extent=bar_call.extent,
        elements=[CommandExpression(extent=bar_call.extent, expression=bar_call)],
    )
    return src.tree(type_definition, usage)


# --- Scenario: command and its alias ---

ALIAS_SCRIPT = "gci\nGet-ChildItem\n"


@pytest.fixture
def alias_tree():
    src = Source(ALIAS_SCRIPT)
    return src.tree(src.command("gci"), src.command("Get-ChildItem"))


@pytest.fixture
def aliases():
    return AliasTable.from_mapping(
        aliases_of={"Get-ChildItem": ["gci"]},
        canonical_of={"gci": "Get-ChildItem"},
    )


# --- Scenario: hashtable literal ---

HASHTABLE_SCRIPT = "@{ Key1 = 1; Key2 = 2 }\n"


@pytest.fixture
def hashtable_tree():
    src = Source(HASHTABLE_SCRIPT)
    table = Hashtable(
        extent=src.extent("@{ Key1 = 1; Key2 = 2 }"),
        pairs=[
            (
                StringConstant(extent=src.extent("Key1"), value="Key1"),
                Constant(extent=src.extent("1", 2), value=1),
            ),
            (
                StringConstant(extent=src.extent("Key2"), value="Key2"),
                Constant(extent=src.extent("2", 2), value=2),
            ),
        ],
    )
    statement = Pipeline(
        extent=table.extent,
        elements=[CommandExpression(extent=table.extent, expression=table)],
    )
    return src.tree(statement)


# --- Scenario: variable assigned at two depths ---

SCOPE_SCRIPT = "$x = 1\nif ($true) {\n    $x = 2\n}\n"


@pytest.fixture
def scope_tree():
    src = Source(SCOPE_SCRIPT)
    top = Assignment(
        extent=src.extent("$x = 1"),
        left=VariableExpression(extent=src.extent("$x"), name="x"),
        right=Constant(extent=src.extent("1"), value=1),
    )
    nested = Assignment(
        extent=src.extent("$x = 2"),
        left=VariableExpression(extent=src.extent("$x", 2), name="x"),
        right=Constant(extent=src.extent("2"), value=2),
    )
    condition = VariableExpression(extent=src.extent("$true"), name="true")
    body = StatementBlock(extent=src.extent("{\n    $x = 2\n}"), statements=[nested])
    statement = If(extent=src.extent("if ($true) {\n    $x = 2\n}"), clauses=[(condition, body)])
    return src.tree(top, statement)


@pytest.fixture
def property_class_tree():
    """A class with a typed property, read back through a variable."""
    text = (
        "class Box {\n"
        "    [int] $Size\n"
        "}\n"
        "$b = [Box]::new()\n"
        "$b.Size\n"
    )
    src = Source(text)
    prop = PropertyMember(
        extent=src.extent("[int] $Size"),
        name="Size",
        property_type=TypeConstraint(extent=src.extent("[int]"), type_name="int"),
    )
    box = TypeDefinition(extent=src.extent(text[: text.index("}") + 1]), name="Box", members=[prop])
    assignment = Assignment(
        extent=src.extent("$b = [Box]::new()"),
        left=VariableExpression(extent=src.extent("$b"), name="b"),
        right=InvokeMemberExpression(
            extent=src.extent("[Box]::new()"),
            expression=TypeExpression(extent=src.extent("[Box]"), type_name="Box"),
            member=StringConstant(extent=src.extent("new"), value="new"),
            static=True,
        ),
    )
    access = MemberExpression(
        extent=src.extent("$b.Size"),
        expression=VariableExpression(extent=src.extent("$b", 2), name="b"),
        member=StringConstant(extent=src.extent("Size", 2), value="Size"),
    )
    usage = Pipeline(extent=access.extent, elements=[CommandExpression(extent=access.extent, expression=access)])
    return src.tree(box, assignment, usage)


# --- Parser JSON on disk, for the CLI ---

CLI_SCRIPT = (
    "function Get-Foo { }\n"
    "Get-Foo\n"
    "$config = @{ Name = 'x' }\n"
    ". ./lib.ps1\n"
)


def _span(snippet: str, occurrence: int = 1) -> list[int]:
    index = -1
    for _ in range(occurrence):
        index = CLI_SCRIPT.index(snippet, index + 1)
    return [index, index + len(snippet)]


def _string(snippet: str, value: str, occurrence: int = 1) -> dict:
    return {"kind": "StringConstant", "span": _span(snippet, occurrence), "value": value}


@pytest.fixture
def tree_file(tmp_path):
    """Parser output for CLI_SCRIPT written to a temp file."""
    whole = [0, len(CLI_SCRIPT)]
    table = {
        "kind": "Hashtable",
        "span": _span("@{ Name = 'x' }"),
        "pairs": [[_string("Name", "Name"), _string("'x'", "x")]],
    }
    data = {
        "version": "1.0",
        "file": "build.ps1",
        "source": CLI_SCRIPT,
        "root": {
            "kind": "ScriptBlock",
            "span": whole,
            "blocks": [
                {
                    "kind": "NamedBlock",
                    "span": whole,
                    "statements": [
                        {
                            "kind": "FunctionDefinition",
                            "span": _span("function Get-Foo { }"),
                            "name": "Get-Foo",
                            "body": {"kind": "ScriptBlock", "span": _span("{ }")},
                        },
                        {
                            "kind": "Pipeline",
                            "span": _span("Get-Foo", 2),
                            "elements": [
                                {
                                    "kind": "Command",
                                    "span": _span("Get-Foo", 2),
                                    "elements": [_string("Get-Foo", "Get-Foo", 2)],
                                }
                            ],
                        },
                        {
                            "kind": "Assignment",
                            "span": _span("$config = @{ Name = 'x' }"),
                            "left": {"kind": "VariableExpression", "span": _span("$config"), "name": "config"},
                            "right": {
                                "kind": "CommandExpression",
                                "span": _span("@{ Name = 'x' }"),
                                "expression": table,
                            },
                        },
                        {
                            "kind": "Pipeline",
                            "span": _span(". ./lib.ps1"),
                            "elements": [
                                {
                                    "kind": "Command",
                                    "span": _span(". ./lib.ps1"),
                                    "invocation_operator": ".",
                                    "elements": [_string("./lib.ps1", "./lib.ps1")],
                                }
                            ],
                        },
                    ],
                }
            ],
        },
    }
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(data))
    return str(path)


@pytest.fixture
def alias_file(tmp_path):
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"aliases_of": {"Get-Foo": ["gf"]}}))
    return str(path)
