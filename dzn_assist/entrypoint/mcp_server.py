# dzn_assist/entrypoint/mcp_server.py
import sys
import json
import logging
import traceback
from typing import Optional

from mcp.server.fastmcp import FastMCP

from dzn_assist.cache import ParsedFile, ParsedFileCache
from dzn_assist.common.exceptions import DocumentNotOpenError
from dzn_assist.config import LOG_LEVEL, MCP_HOST, MCP_PORT
from dzn_assist.entrypoint.api import (
    get_completions, get_definition, get_hover, get_signature_help, load_tree, scope_graph_for
)
from dzn_assist.query.hover import dzn_highlighted

# ------------------------------------------------------------
# MCP 服务实例
# ------------------------------------------------------------
# 说明：
# - host / port 通过构造器注入，run() 时只需指定 transport
mcp = FastMCP("dzn-assist", host=MCP_HOST, port=MCP_PORT)

# ------------------------------------------------------------
# 已打开文档
# ------------------------------------------------------------
# 宿主在每次编辑后重新 open_document，查询总是基于最新快照
documents = ParsedFileCache()


def _document(file_path: str):
    parsed = documents.get(file_path)
    if parsed is None:
        raise DocumentNotOpenError(file_path)
    if parsed.scope_graph is None:
        scope_graph = scope_graph_for(parsed.tree, documents)
        # 构建期间快照被替换时，本次查询仍使用与语法树一致的图
        parsed = documents.set_scope_graph(parsed.tree, scope_graph) \
            or ParsedFile(tree=parsed.tree, scope_graph=scope_graph)
    return parsed


# ------------------------------------------------------------
# 成功 / 错误返回统一封装
# ------------------------------------------------------------
# MCP Tool 约定返回 string，这里统一 JSON 序列化
def _ok(payload: dict) -> str:
    payload.setdefault("success", True)
    return json.dumps(payload, ensure_ascii=False)


def _err(e: Exception) -> str:
    return json.dumps({
        "success": False,
        "error_type": type(e).__name__,
        "error": str(e),
        "traceback": traceback.format_exc(),
    }, ensure_ascii=False)


# ============================================================
# MCP Tool: open_document / close_document
# ============================================================
@mcp.tool("open_document")
async def open_document(tree_json: str) -> str:
    """Open or refresh a document from its serialized syntax tree."""
    try:
        tree = load_tree(tree_json)
        documents.put(tree)
        documents.drop_scope_graphs(except_path=tree.file_path)
        return _ok({"file_path": tree.file_path, "nodes": len(tree.nodes)})
    except Exception as e:
        return _err(e)


@mcp.tool("close_document")
async def close_document(file_path: str) -> str:
    """Drop a document from the cache."""
    try:
        closed = documents.invalidate(file_path)
        documents.drop_scope_graphs()
        return _ok({"closed": closed})
    except Exception as e:
        return _err(e)


# ============================================================
# MCP Tool: 查询
# ============================================================
@mcp.tool("completions")
async def completions(file_path: str, line: int, column: int) -> str:
    """Completion candidates at a 0-based cursor position."""
    try:
        parsed = _document(file_path)
        items = get_completions(parsed.tree, line, column, parsed.scope_graph)
        return _ok({"items": None if items is None else [i.model_dump(mode="json") for i in items]})
    except Exception as e:
        return _err(e)


@mcp.tool("hover")
async def hover(file_path: str, line: int, column: int) -> str:
    """Signature tooltip of the symbol under the cursor."""
    try:
        parsed = _document(file_path)
        signature = get_hover(parsed.tree, line, column, parsed.scope_graph)
        return _ok({
            "signature": signature,
            "markdown": dzn_highlighted(signature) if signature is not None else None,
        })
    except Exception as e:
        return _err(e)


@mcp.tool("signature_help")
async def signature_help(file_path: str, line: int, column: int) -> str:
    """Parameter list and active parameter of the enclosing call."""
    try:
        parsed = _document(file_path)
        result = get_signature_help(parsed.tree, line, column, parsed.scope_graph)
        return _ok({"signature_help": None if result is None else result.model_dump(mode="json")})
    except Exception as e:
        return _err(e)


@mcp.tool("definition")
async def definition(file_path: str, line: int, column: int, primary_root: Optional[str] = None) -> str:
    """Definition target of the symbol or import under the cursor."""
    try:
        parsed = _document(file_path)
        target = get_definition(parsed.tree, line, column, parsed.scope_graph, primary_root=primary_root)
        return _ok({"definition": None if target is None else target.model_dump(mode="json")})
    except Exception as e:
        return _err(e)


# ============================================================
# 服务启动入口
# ============================================================
def main():
    logging.basicConfig(stream=sys.stderr, level=LOG_LEVEL)
    logging.info("Starting dzn-assist MCP SSE server")
    mcp.run(transport="sse")


if __name__ == "__main__":
    main()
