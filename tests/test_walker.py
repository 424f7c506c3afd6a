"""Tests for the traversal engine."""

import pytest

from pssymbols.syntax import CancellationToken, NodeKind, QueryCancelledError, VisitAction, collect_all, find_first, walk
from pssymbols.syntax.nodes import Command, GenericNode, Pipeline, StringConstant


class TestWalk:
    def test_pre_order(self, function_tree):
        kinds = [node.kind for node in function_tree.walk()]
        assert kinds[:3] == [NodeKind.SCRIPT_BLOCK, NodeKind.NAMED_BLOCK, NodeKind.FUNCTION_DEFINITION]
        assert kinds.index(NodeKind.FUNCTION_DEFINITION) < kinds.index(NodeKind.COMMAND)

    def test_stop_visit_aborts_walk(self, function_tree):
        seen = []

        def visit(node):
            seen.append(node)
            return VisitAction.STOP_VISIT

        stopped = walk(function_tree.root, {NodeKind.NAMED_BLOCK: visit})
        assert stopped is True
        assert len(seen) == 1

    def test_runs_to_end(self, function_tree):
        assert walk(function_tree.root, {}) is False

    def test_missing_root_rejected(self):
        with pytest.raises(ValueError):
            walk(None, {})

    def test_generic_nodes_are_walked_through(self, source):
        src = source("Get-Foo\n")
        ext = src.extent("Get-Foo")
        command = Command(extent=ext, elements=[StringConstant(extent=ext, value="Get-Foo")])
        wrapper = GenericNode(extent=ext, original_kind="FutureAst", nested=[Pipeline(extent=ext, elements=[command])])
        tree = src.tree(wrapper)

        found = find_first(tree.root, {NodeKind.COMMAND: lambda node: node})
        assert found is command

    def test_empty_command_is_tolerated(self, source):
        src = source("x\n")
        tree = src.tree(Pipeline(extent=src.extent("x"), elements=[Command(extent=src.extent("x"))]))
        assert len(collect_all(tree.root, {NodeKind.COMMAND: lambda node: [node]})) == 1


class TestFindFirst:
    def test_earliest_in_pre_order_wins(self, alias_tree):
        found = find_first(alias_tree.root, {NodeKind.COMMAND: lambda node: node.name_element.value})
        assert found == "gci"

    def test_none_when_nothing_matches(self, alias_tree):
        assert find_first(alias_tree.root, {NodeKind.HASHTABLE: lambda node: node}) is None


class TestCollectAll:
    def test_document_order(self, alias_tree):
        names = collect_all(alias_tree.root, {NodeKind.COMMAND: lambda node: [node.name_element.value]})
        assert names == ["gci", "Get-ChildItem"]

    def test_handlers_may_yield_nothing(self, alias_tree):
        assert collect_all(alias_tree.root, {NodeKind.COMMAND: lambda node: []}) == []


class TestCancellation:
    def test_cancelled_before_walk(self, function_tree):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(QueryCancelledError):
            collect_all(function_tree.root, {}, token)

    def test_cancelled_during_walk(self, alias_tree):
        token = CancellationToken()
        seen = []

        def visit(node):
            seen.append(node)
            token.cancel()
            return [node]

        with pytest.raises(QueryCancelledError):
            collect_all(alias_tree.root, {NodeKind.COMMAND: visit}, token)
        assert len(seen) == 1

    def test_uncancelled_token(self, alias_tree):
        token = CancellationToken()
        assert not token.cancelled
        assert len(collect_all(alias_tree.root, {NodeKind.COMMAND: lambda n: [n]}, token)) == 2
