"""
本模块定义了与 import 语句相关的结构与解析函数。

Dezyne 的 import 语句形如 `import foo.dzn;`，只导入整个文件。
主要用途：
- 从 import 节点中取出被导入的文件名
- 按给定的根目录顺序，把文件名解析为磁盘上实际存在的路径
"""

from pathlib import Path
from typing import List, Optional

import logging

from dzn_assist.syntax import SyntaxNode

logger = logging.getLogger(__name__)


def parse_file_name(import_node: SyntaxNode) -> str:
    # 兼容解析器保留引号或分号的情况
    return (import_node.text or "").strip().strip(";").strip().strip('"')


class LocalImportStmt:
    """
    表示一条本地 import 语句。

    :param syntax: import 语句对应的语法树节点
    """

    def __init__(self, syntax: SyntaxNode):
        self.syntax = syntax
        self.file_name = parse_file_name(syntax)


def resolve_import_target(import_node: SyntaxNode, roots: List[Optional[str]]) -> Optional[str]:
    """
    按 roots 的顺序解析 import 指向的文件。

    只有前一个根目录下的路径不存在时，才会尝试下一个根目录。

    :param import_node: import 语句节点
    :param roots: 候选根目录（首选根目录在前，当前文件所在目录在后）
    :return: 第一个存在的文件路径；都不存在时返回 None
    """
    file_name = parse_file_name(import_node)
    if not file_name:
        return None

    for root in roots:
        if not root:
            continue
        candidate = Path(root) / file_name
        if candidate.exists():
            return str(candidate)
        logger.debug(f"Import {file_name} not found under {root}")

    return None
