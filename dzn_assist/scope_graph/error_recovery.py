"""
错误节点（error node）中的名字恢复。

解析器无法匹配语法时会把原始文本包进错误节点，例如用户正在输入
`api.` 或 `on api.ev(` 这类不完整的语句。这里基于错误节点的原文做启发式恢复：
- 截取光标之前的文本
- 若结尾是 "a.b." 或 "a.b.x" 形式，则把 "a.b" 解析为所属对象
- 否则视为输入一个普通名字，没有所属对象
"""

import re
from typing import Optional

import logging

from dzn_assist.service import ErrorNodeName
from dzn_assist.syntax import SyntaxNode, SyntaxTree, is_scoped_block

logger = logging.getLogger(__name__)

# 光标前的成员访问：owner 链 + "." + 正在输入的成员名（可为空）
_MEMBER_ACCESS = re.compile(r"([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\.(\w*)$")


def cursor_offset(node: SyntaxNode, line: int, column: int) -> Optional[int]:
    """
    把 (line, column) 换算为错误节点原文中的字符偏移。

    :return: 偏移量；光标不在原文范围内时返回 None
    """
    text = node.text or ""
    start = node.range.start_point
    relative_line = line - start.line
    lines = text.split("\n")
    if relative_line < 0 or relative_line >= len(lines):
        return None

    relative_column = column - start.column if relative_line == 0 else column
    if relative_column < 0 or relative_column > len(lines[relative_line]):
        return None

    return sum(len(l) + 1 for l in lines[:relative_line]) + relative_column


def find_name_and_owner(graph, node: SyntaxNode, line: int, column: int) -> Optional[ErrorNodeName]:
    """
    在错误节点中定位光标处的名字及其所属对象。

    :param graph: 用于解析所属对象的 ScopeGraph
    :param node: 错误节点
    :return: ErrorNodeName；光标不在原文内、找不到作用域或所属对象无法解析时返回 None
    """
    scope = node if is_scoped_block(node) else SyntaxTree.find_first_parent(node, is_scoped_block)
    if scope is None:
        return None

    offset = cursor_offset(node, line, column)
    if offset is None:
        logger.debug(f"Cursor ({line}, {column}) is outside of error node text")
        return None

    prefix = (node.text or "")[:offset]
    member_access = _MEMBER_ACCESS.search(prefix)
    if member_access is None:
        return ErrorNodeName(scope=scope)

    owner = graph.resolve_dotted_name(member_access.group(1), scope)
    if owner is None:
        # 所属对象无法解析时不能退化为普通名字补全
        logger.debug(f"Unable to resolve owner {member_access.group(1)} in error node")
        return None
    return ErrorNodeName(scope=scope, owning_object=owner)
