"""
本模块提供基于作用域图的作用域链遍历工具。

ScopeStack 模拟名字查找时“从当前作用域逐层向外”的过程：
每次迭代返回当前作用域节点，并沿 ScopeToScope 边移动到父作用域。
"""

from typing import Optional, Iterator
from networkx import DiGraph

from .graph_types import EdgeKind


class ScopeStack(Iterator):
    """
    作用域栈（Scope Stack）迭代器。

    每次迭代：
    - 返回当前作用域节点
    - 将内部指针移动到父作用域
    """

    def __init__(self, scope_graph: DiGraph, start: Optional[int]):
        """
        :param scope_graph: 表示作用域关系的有向图
        :param start: 起始作用域节点 ID（None 表示空栈）
        """
        self.scope_graph = scope_graph
        self.start = start

    def __iter__(self) -> "ScopeStack":
        return self

    def __next__(self) -> int:
        """
        返回当前作用域节点，并推进到其父作用域。

        :raises StopIteration: 到达根作用域之后
        """
        if self.start is not None:
            original = self.start
            parent = None
            for _, target, attrs in self.scope_graph.out_edges(self.start, data=True):
                if attrs.get("type") == EdgeKind.ScopeToScope:
                    parent = target
                    break
            self.start = parent
            return original
        else:
            raise StopIteration
