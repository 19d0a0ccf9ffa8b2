"""
语言服务（Language Service）契约。

本核心把解析、符号表、类型解析视为一个黑盒协作者，
只通过本模块定义的接口与之交互：
- LanguageService：需要外部实现的查询接口
- Symbol / Type：语义服务返回的符号与类型
- ErrorNodeName：错误节点恢复的结果

语义服务被视为可同步查询的共享资源；调用方保证同一次查询内
语法树快照与符号/类型快照一致。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from dzn_assist.syntax import NodeKind, SyntaxNode, SyntaxTree, name_to_string


@dataclass(eq=False)
class Symbol:
    """
    声明的语义身份。

    多个引用位置可以解析到同一个 Symbol；Symbol 只引用声明节点，
    声明节点本身归语法树所有。
    """

    declaration: SyntaxNode

    @property
    def name(self) -> str:
        # 枚举值的声明就是标识符本身
        if self.declaration.kind == NodeKind.IDENTIFIER:
            return self.declaration.text or ""
        return name_to_string(self.declaration.child("name"))

    @property
    def file_path(self) -> Optional[str]:
        tree = self.declaration.tree
        return tree.file_path if tree is not None else None

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.declaration == other.declaration

    def __hash__(self):
        return hash(self.declaration)


@dataclass(frozen=True)
class Type:
    """
    符号或表达式的静态类型。

    - declaration：定义该类型的声明节点（interface / component / enum / event 等）
    - 内建类型（bool / void）没有声明节点
    """

    name: str
    declaration: Optional[SyntaxNode] = None


# 类型解析失败时返回的哨兵
ERROR_TYPE = Type(name="<error>")


@dataclass
class ErrorNodeName:
    """
    错误节点恢复结果。

    - scope：光标所在的作用域块
    - owning_object：若光标前是 "a.b." 这样的成员访问，则为被访问对象的符号
    """

    scope: SyntaxNode
    owning_object: Optional[Symbol] = None


class LanguageService(ABC):
    """
    本核心所消费的语言服务接口。

    实现方负责解析、符号绑定、类型解析以及对畸形子树的启发式恢复；
    本核心只做基于位置的分派与结果格式化。
    """

    @abstractmethod
    def resolve_leaf_at(self, tree: SyntaxTree, line: int, column: int) -> Optional[SyntaxNode]:
        """返回覆盖该位置的最深节点"""

    @abstractmethod
    def symbol_of(self, node: SyntaxNode) -> Optional[Symbol]:
        """把引用位置或声明位置解析为 Symbol"""

    @abstractmethod
    def type_of(self, symbol_or_node: Union[Symbol, SyntaxNode]) -> Type:
        """解析静态类型，失败时返回 ERROR_TYPE"""

    @abstractmethod
    def members_of(self, type: Type) -> Dict[str, Symbol]:
        """类型的成员，按语义服务定义的顺序返回"""

    @abstractmethod
    def declared_variables_at(self, scope: SyntaxNode) -> Dict[str, SyntaxNode]:
        """作用域块中直接声明的名字（不含外层作用域）"""

    @abstractmethod
    def find_name_and_owner_in_error_node(
        self, node: SyntaxNode, line: int, column: int
    ) -> Optional[ErrorNodeName]:
        """在错误节点中启发式定位可命名片段及其所属对象，无法定位时返回 None"""

    @abstractmethod
    def resolve_import_target(self, import_node: SyntaxNode, roots: List[str]) -> Optional[str]:
        """按 roots 的顺序解析 import 语句指向的文件，返回第一个存在的路径"""
