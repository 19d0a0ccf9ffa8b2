"""
位置解析：把 (文件, 行, 列) 映射到覆盖该位置的最深语法节点。

遍历本身委托给语言服务的 resolve_leaf_at；
“什么样的叶子可以用于补全 / 悬停”由各调用方自行判断。
"""

from typing import Optional

from dzn_assist.service import LanguageService
from dzn_assist.syntax import Point, SyntaxNode, SyntaxTree, is_scoped_block


def find_leaf_at_position(
    service: LanguageService, tree: SyntaxTree, position: Point
) -> Optional[SyntaxNode]:
    """
    :param service: 语言服务
    :param tree: 语法树快照
    :param position: 光标位置（从 0 开始）
    :return: 最深的覆盖节点（可能是错误节点）；位置不在任何节点内时返回 None
    """
    if position.line < 0 or position.column < 0:
        return None
    return service.resolve_leaf_at(tree, position.line, position.column)


def nearest_scope(node: SyntaxNode) -> Optional[SyntaxNode]:
    # 不含自身的最近作用域块
    return SyntaxTree.find_first_parent(node, is_scoped_block)
