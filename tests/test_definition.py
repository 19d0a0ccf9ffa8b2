"""
Go-to-definition tests.

Import targets are looked up under the primary root first and next to the
current file second.
"""

import pytest

from dzn_assist.query.definition import get_definition
from dzn_assist.scope_graph.build_scopes import build_scope_graph
from dzn_assist.syntax import Point

from conftest import build_model_tree


class TestIdentifierDefinition:
    def test_reference_jumps_to_declaration_name(self, tree, service):
        target = get_definition(tree, Point(14, 40), service)
        assert target.file_path == "main.dzn"
        assert target.position == Point(12, 11)

    def test_event_through_port(self, tree, service):
        assert get_definition(tree, Point(14, 12), service).position == Point(3, 10)

    def test_enum_member(self, tree, service):
        assert get_definition(tree, Point(12, 27), service).position == Point(1, 14)

    def test_not_an_identifier(self, tree, service):
        assert get_definition(tree, Point(10, 1), service) is None

    def test_unresolved(self, tree, service):
        assert get_definition(tree, Point(99, 0), service) is None


class TestImportDefinition:
    @pytest.fixture
    def workspace(self, tmp_path):
        (tmp_path / "root").mkdir()
        (tmp_path / "src").mkdir()
        tree, _ = build_model_tree(str(tmp_path / "src" / "main.dzn"))
        return tmp_path, tree

    def test_primary_root_wins(self, workspace):
        tmp_path, tree = workspace
        (tmp_path / "root" / "lib.dzn").write_text("interface ILib {}\n")
        (tmp_path / "src" / "lib.dzn").write_text("interface ILib {}\n")

        target = get_definition(tree, Point(0, 5), build_scope_graph(tree), primary_root=str(tmp_path / "root"))
        assert target.file_path == str(tmp_path / "root" / "lib.dzn")
        assert target.position == Point(0, 0)

    def test_falls_back_to_file_directory(self, workspace):
        tmp_path, tree = workspace
        (tmp_path / "src" / "lib.dzn").write_text("interface ILib {}\n")

        target = get_definition(tree, Point(0, 5), build_scope_graph(tree), primary_root=str(tmp_path / "root"))
        assert target.file_path == str(tmp_path / "src" / "lib.dzn")

    def test_without_primary_root(self, workspace):
        tmp_path, tree = workspace
        (tmp_path / "src" / "lib.dzn").write_text("interface ILib {}\n")

        target = get_definition(tree, Point(0, 5), build_scope_graph(tree))
        assert target.file_path == str(tmp_path / "src" / "lib.dzn")

    def test_missing_file(self, workspace):
        tmp_path, tree = workspace
        assert get_definition(tree, Point(0, 5), build_scope_graph(tree), primary_root=str(tmp_path / "root")) is None
