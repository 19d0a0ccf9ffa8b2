"""
补全入口：get_completions。

处理流程：
1. 位置解析得到叶子节点，过滤掉声明自身名字的位置
2. 作用域分类
3. 有所属对象：列出其类型的成员
   成员访问但所属对象未解析：不给出任何结果
   非成员访问：作用域链上可见的名字 + 当前结构上下文合法的关键字
"""

from typing import List, Optional

from dzn_assist import logger
from dzn_assist.service import ERROR_TYPE, LanguageService
from dzn_assist.syntax import Point, SyntaxTree

from .completion_items import CompletionItem, completion_item_for_node
from .completion_scope import get_completion_scope, should_complete_node
from .keywords import keywords_in_scope
from .position import find_leaf_at_position
from .scope_walker import find_all_variables_known_in_scope


def get_completions(
    tree: SyntaxTree, position: Point, service: LanguageService
) -> Optional[List[CompletionItem]]:
    """
    :return: 补全条目列表；位置不可补全或成员访问无法确定时返回 None
    """
    leaf = find_leaf_at_position(service, tree, position)
    if leaf is None or not should_complete_node(leaf):
        return None

    completion_scope = get_completion_scope(leaf, position, service)
    if completion_scope is None:
        return None

    range = completion_scope.replacement_range
    items: List[CompletionItem] = []

    if completion_scope.owning_symbol is not None:
        owner_type = service.type_of(completion_scope.owning_symbol)
        if owner_type is ERROR_TYPE:
            logger.debug(f"Owner {completion_scope.owning_symbol.name} has no resolvable type")
            return None
        for name, symbol in service.members_of(owner_type).items():
            items.append(completion_item_for_node(name, symbol.declaration, range))
    elif completion_scope.is_member:
        # 成员访问但所属对象未解析，不能猜测
        return None
    elif completion_scope.is_global:
        for name, declaration in service.declared_variables_at(completion_scope.scope).items():
            items.append(completion_item_for_node(name, declaration, range))
    else:
        for name, declaration in find_all_variables_known_in_scope(completion_scope.scope, service):
            items.append(completion_item_for_node(name, declaration, range))
        items.extend(keywords_in_scope(completion_scope.scope))

    return items
