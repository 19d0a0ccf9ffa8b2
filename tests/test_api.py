"""
Hosting surface tests: the api facade, the parsed-file cache and the MCP tools.
"""

import asyncio
import json

from dzn_assist.cache import ParsedFileCache
from dzn_assist.common.exceptions import DocumentNotOpenError
from dzn_assist.entrypoint import api
from dzn_assist.entrypoint import mcp_server
from dzn_assist.scope_graph.build_scopes import build_scope_graph
from dzn_assist.syntax import NodeKind, TreeBuilder

from conftest import build_model_tree, names


def lib_tree(file_path):
    b = TreeBuilder(file_path)
    root = b.add(NodeKind.FILE, (0, 0), (2, 0))
    iface = b.add(NodeKind.INTERFACE, (0, 0), (1, 1), parent=root, slot="declarations")
    b.add(NodeKind.IDENTIFIER, (0, 10), (0, 14), parent=iface, slot="name", text="ILib")
    return b.build()


class TestLoadTree:
    def test_from_json_string(self, tree):
        loaded = api.load_tree(tree.model_dump_json())
        assert names(api.get_completions(loaded, 12, 28)) == ["Ok", "Fail"]

    def test_from_dict(self, tree):
        loaded = api.load_tree(json.loads(tree.model_dump_json()))
        assert loaded.root.kind == NodeKind.FILE

    def test_from_file(self, tree, tmp_path):
        path = tmp_path / "main.json"
        path.write_text(tree.model_dump_json(), encoding="utf-8")
        assert len(api.load_tree(path).nodes) == len(tree.nodes)
        assert len(api.load_tree(str(path)).nodes) == len(tree.nodes)


class TestFacade:
    def test_builds_service_when_missing(self, tree):
        assert api.get_hover(tree, 14, 40) == "Result state;"
        assert api.get_signature_help(tree, 14, 40).active_parameter_index == 2

    def test_uses_given_service(self, tree, service):
        assert api.get_hover(tree, 14, 40, service) == "Result state;"

    def test_definition_uses_primary_root(self, tmp_path):
        (tmp_path / "lib.dzn").write_text("interface ILib {}\n")
        tree, _ = build_model_tree(str(tmp_path / "elsewhere" / "main.dzn"))
        target = api.get_definition(tree, 0, 5, primary_root=str(tmp_path))
        assert target.file_path == str(tmp_path / "lib.dzn")


class TestScopeGraphFor:
    def test_links_open_imports(self, tmp_path):
        lib_path = tmp_path / "lib.dzn"
        lib_path.write_text("interface ILib {}\n")
        tree, _ = build_model_tree(str(tmp_path / "main.dzn"))

        cache = ParsedFileCache()
        cache.put(lib_tree(str(lib_path)))
        graph = api.scope_graph_for(tree, cache)

        assert graph.linked_files == [str(lib_path)]
        assert "ILib" in graph.declared_variables_at(tree.root)

    def test_skips_imports_that_are_not_open(self, tmp_path):
        (tmp_path / "lib.dzn").write_text("interface ILib {}\n")
        tree, _ = build_model_tree(str(tmp_path / "main.dzn"))
        assert api.scope_graph_for(tree, ParsedFileCache()).linked_files == []


class TestParsedFileCache:
    def test_put_get_invalidate(self, tree):
        cache = ParsedFileCache()
        cache.put(tree, build_scope_graph(tree))

        assert "main.dzn" in cache
        assert cache.get("main.dzn").tree is tree
        assert cache.invalidate("main.dzn")
        assert cache.get("main.dzn") is None
        assert not cache.invalidate("main.dzn")

    def test_put_replaces_snapshot(self, tree):
        cache = ParsedFileCache()
        cache.put(tree, build_scope_graph(tree))
        newer, _ = build_model_tree()
        parsed = cache.put(newer)

        assert cache.get("main.dzn") is parsed
        assert parsed.scope_graph is None

    def test_drop_scope_graphs(self, tree):
        cache = ParsedFileCache()
        cache.put(tree, build_scope_graph(tree))
        lib = lib_tree("lib.dzn")
        cache.put(lib, build_scope_graph(lib))

        cache.drop_scope_graphs(except_path="lib.dzn")
        assert cache.get("main.dzn").scope_graph is None
        assert cache.get("lib.dzn").scope_graph is not None

    def test_set_scope_graph(self, tree):
        cache = ParsedFileCache()
        cache.put(tree)
        graph = build_scope_graph(tree)

        parsed = cache.set_scope_graph(tree, graph)
        assert parsed is cache.get("main.dzn")
        assert parsed.scope_graph is graph

    def test_set_scope_graph_skips_replaced_snapshot(self, tree):
        cache = ParsedFileCache()
        cache.put(tree)
        newer, _ = build_model_tree()
        cache.put(newer)

        assert cache.set_scope_graph(tree, build_scope_graph(tree)) is None
        assert cache.get("main.dzn").scope_graph is None

    def test_set_scope_graph_after_close(self, tree):
        cache = ParsedFileCache()
        cache.put(tree)
        cache.invalidate("main.dzn")
        assert cache.set_scope_graph(tree, build_scope_graph(tree)) is None


class TestMcpTools:
    def call(self, tool, *args, **kwargs):
        return json.loads(asyncio.run(tool(*args, **kwargs)))

    def setup_method(self):
        mcp_server.documents = ParsedFileCache()

    def test_open_and_query(self, tree):
        opened = self.call(mcp_server.open_document, tree.model_dump_json())
        assert opened["success"]
        assert opened["file_path"] == "main.dzn"

        completions = self.call(mcp_server.completions, "main.dzn", 16, 8)
        assert [item["display_name"] for item in completions["items"]] == ["start", "ready"]
        assert completions["items"][0]["icon_tag"] == "event"

        hover = self.call(mcp_server.hover, "main.dzn", 14, 40)
        assert hover["signature"] == "Result state;"
        assert hover["markdown"].startswith("```dzn")

        help = self.call(mcp_server.signature_help, "main.dzn", 14, 40)
        assert help["signature_help"]["active_parameter_index"] == 2

        target = self.call(mcp_server.definition, "main.dzn", 14, 40)
        assert target["definition"] == {"file_path": "main.dzn", "position": [12, 11]}

    def test_no_result_is_null(self, tree):
        self.call(mcp_server.open_document, tree.model_dump_json())
        assert self.call(mcp_server.completions, "main.dzn", 12, 14)["items"] is None

    def test_query_attaches_scope_graph_to_cache(self, tree):
        self.call(mcp_server.open_document, tree.model_dump_json())
        assert mcp_server.documents.get("main.dzn").scope_graph is None

        self.call(mcp_server.hover, "main.dzn", 14, 40)
        assert mcp_server.documents.get("main.dzn").scope_graph is not None

    def test_document_not_open(self):
        result = self.call(mcp_server.hover, "missing.dzn", 0, 0)
        assert not result["success"]
        assert result["error_type"] == DocumentNotOpenError.__name__

    def test_close_document(self, tree):
        self.call(mcp_server.open_document, tree.model_dump_json())
        assert self.call(mcp_server.close_document, "main.dzn")["closed"]
        assert not self.call(mcp_server.completions, "main.dzn", 0, 0)["success"]

    def test_invalid_tree(self):
        result = self.call(mcp_server.open_document, "{not json")
        assert not result["success"]
