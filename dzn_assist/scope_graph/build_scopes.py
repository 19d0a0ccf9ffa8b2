# ============================================================
# ScopeGraph 构建器
# ------------------------------------------------------------
# 本模块负责：
#   - 遍历 SyntaxTree，收集作用域块、声明与 import 语句
#   - 将其插入 ScopeGraph（作用域关系图）
#   - 链接单跳 import 的语法树
# ============================================================

import logging
from typing import Iterable

from dzn_assist.scope_graph.scope_resolution.graph import ScopeGraph
from dzn_assist.syntax import SyntaxTree

logger = logging.getLogger(__name__)


def build_scope_graph(tree: SyntaxTree, imports: Iterable[SyntaxTree] = ()) -> ScopeGraph:
    """
    从语法树构建 ScopeGraph。

    构建流程概览：
    1. 以文件根节点创建根作用域
    2. 先序遍历插入作用域、定义与 import
    3. 把 imports 中的语法树链接到根作用域

    :param tree: 当前文件的语法树
    :param imports: 当前文件 import 的文件的语法树（只链接一跳）
    """
    if tree.root is None:
        raise ValueError(f"Syntax tree of {tree.file_path} has no root node")

    scope_graph = ScopeGraph(tree)
    scope_graph.add_tree(tree)

    for imported in imports:
        scope_graph.link_import(imported)

    logger.debug(f"Scope graph built for {tree.file_path}")
    return scope_graph
