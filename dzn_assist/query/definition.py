"""
跳转定义。

- 光标位于 import 语句上：依次在首选根目录、当前文件所在目录下查找被导入的文件
- 光标位于标识符上：跳转到其符号的声明名字处
"""

import os
from typing import Optional

from pydantic import BaseModel

from dzn_assist.service import LanguageService
from dzn_assist.syntax import NodeKind, Point, SyntaxTree

from .position import find_leaf_at_position


class DefinitionTarget(BaseModel):
    file_path: str
    position: Point


def get_definition(
    tree: SyntaxTree,
    position: Point,
    service: LanguageService,
    primary_root: Optional[str] = None,
) -> Optional[DefinitionTarget]:
    """
    :param primary_root: import 的首选查找根目录（通常为工作区根目录）
    :return: 定义位置；无法解析时返回 None
    """
    leaf = find_leaf_at_position(service, tree, position)
    if leaf is None:
        return None

    import_node = leaf if leaf.kind == NodeKind.IMPORT else \
        SyntaxTree.find_first_parent(leaf, lambda p: p.kind == NodeKind.IMPORT)
    if import_node is not None:
        roots = [primary_root, os.path.dirname(os.path.abspath(tree.file_path))]
        target = service.resolve_import_target(import_node, roots)
        if target is None:
            return None
        return DefinitionTarget(file_path=target, position=Point(0, 0))

    if leaf.kind != NodeKind.IDENTIFIER:
        return None
    symbol = service.symbol_of(leaf)
    if symbol is None or symbol.file_path is None:
        return None

    declaration = symbol.declaration
    # 枚举值的声明即标识符本身，没有 name 槽位
    name = declaration.child("name")
    anchor = name if name is not None else declaration
    return DefinitionTarget(file_path=symbol.file_path, position=anchor.range.start_point)
