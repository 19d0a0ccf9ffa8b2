"""
本模块是 dzn_assist 的对外入口，负责：
1. 从 JSON（文件路径、字符串或字典）加载语法树快照
2. 构建参考语义服务（ScopeGraph），并链接已打开的 import 文件
3. 以 (tree, line, column) 的形式暴露补全、悬停、签名帮助与跳转定义

未显式传入语言服务时，每次查询都会基于当前语法树新建一个 ScopeGraph。
"""

import json
import os
from pathlib import Path
from typing import List, Optional, Union

from dzn_assist import logger
from dzn_assist.cache import ParsedFileCache
from dzn_assist.config import DZN_IMPORT_ROOT
from dzn_assist.query.completion import get_completions as _get_completions
from dzn_assist.query.completion_items import CompletionItem
from dzn_assist.query.definition import DefinitionTarget, get_definition as _get_definition
from dzn_assist.query.hover import get_hover as _get_hover
from dzn_assist.query.signature_help import SignatureHelp, get_signature_help as _get_signature_help
from dzn_assist.scope_graph.build_scopes import build_scope_graph
from dzn_assist.scope_graph.scope_resolution import resolve_import_target
from dzn_assist.scope_graph.scope_resolution.graph import ScopeGraph
from dzn_assist.service import LanguageService
from dzn_assist.syntax import Point, SyntaxTree


def load_tree(source: Union[str, Path, dict]) -> SyntaxTree:
    """
    加载语法树快照。

    :param source: JSON 文件路径、JSON 字符串，或已解码的字典
    """
    if isinstance(source, dict):
        return SyntaxTree.model_validate(source)
    if isinstance(source, Path) or (isinstance(source, str) and os.path.isfile(source)):
        with open(source, "r", encoding="utf-8") as f:
            return SyntaxTree.model_validate(json.load(f))
    return SyntaxTree.model_validate_json(source)


def scope_graph_for(tree: SyntaxTree, cache: Optional[ParsedFileCache] = None) -> ScopeGraph:
    """
    为语法树构建 ScopeGraph。

    若提供了缓存，则把当前文件 import 的、且已在缓存中的文件链接进来（单跳）。
    """
    scope_graph = build_scope_graph(tree)
    if cache is None:
        return scope_graph

    roots = [DZN_IMPORT_ROOT, os.path.dirname(os.path.abspath(tree.file_path))]
    for import_node in scope_graph.get_all_imports():
        target = resolve_import_target(import_node, roots)
        parsed = cache.get(target) if target is not None else None
        if parsed is not None:
            scope_graph.link_import(parsed.tree)
        else:
            logger.debug(f"Import {import_node.text} of {tree.file_path} is not open, skipped")
    return scope_graph


def get_completions(
    tree: SyntaxTree, line: int, column: int, service: Optional[LanguageService] = None
) -> Optional[List[CompletionItem]]:
    return _get_completions(tree, Point(line, column), service or build_scope_graph(tree))


def get_hover(
    tree: SyntaxTree, line: int, column: int, service: Optional[LanguageService] = None
) -> Optional[str]:
    return _get_hover(tree, Point(line, column), service or build_scope_graph(tree))


def get_signature_help(
    tree: SyntaxTree, line: int, column: int, service: Optional[LanguageService] = None
) -> Optional[SignatureHelp]:
    return _get_signature_help(tree, Point(line, column), service or build_scope_graph(tree))


def get_definition(
    tree: SyntaxTree,
    line: int,
    column: int,
    service: Optional[LanguageService] = None,
    primary_root: Optional[str] = None,
) -> Optional[DefinitionTarget]:
    return _get_definition(
        tree,
        Point(line, column),
        service or build_scope_graph(tree),
        primary_root=primary_root or DZN_IMPORT_ROOT,
    )
