"""
本模块定义了用于表示“局部定义（Local Definition）”的结构。

LocalDef 是语法树声明节点在作用域图中的投影：
只保留名字以及指回语法树节点的引用。
"""

from dataclasses import dataclass

from dzn_assist.syntax import SyntaxNode, name_to_string

from .graph_types import GraphNodeKind


@dataclass
class LocalDef:
    """
    表示一次局部符号定义。

    属性说明：
    - syntax：声明对应的语法树节点
    - name：声明的名字
    """

    syntax: SyntaxNode
    name: str

    def __init__(self, syntax: SyntaxNode):
        self.syntax = syntax
        self.name = name_to_string(syntax.child("name"))

    def to_node(self):
        """
        将当前 LocalDef 转换为作用域图节点的属性字典。

        :return: 可直接传给 DiGraph.add_node 的属性
        """
        return {
            "name": self.name,
            "type": GraphNodeKind.DEFINITION,
            "syntax": self.syntax,
        }
