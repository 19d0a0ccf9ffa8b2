"""
补全作用域分类器。

给定光标处的叶子节点，判断：
- 补全发生在哪个作用域块中（scope）
- 是否为成员访问（is_member），以及被访问的对象（owning_symbol）
- 接受补全时要替换的范围（replacement_range）

分类是按节点种类的 match 分派，每个分支对应一种语言相关的消歧规则，
而不是简单地“取最近的父作用域”。
"""

from dataclasses import dataclass
from typing import Optional

from dzn_assist.common.exceptions import StructuralInvariantError
from dzn_assist.service import LanguageService, Symbol
from dzn_assist.syntax import (
    NodeKind,
    Point,
    SyntaxNode,
    TextRange,
    is_scoped_block,
)

from .position import nearest_scope

# 声明位置：标识符是这些声明的名字时，不做补全
_NAMED_DECLARATIONS = frozenset({
    NodeKind.VARIABLE,
    NodeKind.FUNCTION_PARAMETER,
    NodeKind.ON_PARAMETER,
    NodeKind.EVENT_PARAMETER,
    NodeKind.PORT,
    NodeKind.EVENT,
    NodeKind.INSTANCE,
    NodeKind.FUNCTION,
    NodeKind.COMPONENT,
    NodeKind.INTERFACE,
})

# 这些声明下的任何标识符都不做补全
_OPAQUE_DECLARATIONS = frozenset({
    NodeKind.ENUM,
    NodeKind.EXTERN,
    NodeKind.INT,
})


@dataclass
class CompletionScope:
    """
    一次补全查询的作用域分类结果。

    约定：is_member 为 True 而 owning_symbol 为空时结果不确定，补全必须被抑制
    （无法安全地猜测一个未解析类型的成员）。
    is_global 表示 ".<cursor>" 这种全局限定形式，候选为整个文件作用域。
    """

    scope: SyntaxNode
    is_member: bool
    owning_symbol: Optional[Symbol] = None
    replacement_range: Optional[TextRange] = None
    is_global: bool = False

    @property
    def suppressed(self) -> bool:
        return self.is_member and self.owning_symbol is None


def should_complete_node(node: SyntaxNode) -> bool:
    """声明自身的名字（正在定义的东西）不能被补全"""
    parent = node.parent_node
    if node.kind != NodeKind.IDENTIFIER or parent is None:
        return True
    if parent.kind in _OPAQUE_DECLARATIONS:
        return False
    if parent.kind in _NAMED_DECLARATIONS and parent.in_slot("name", node):
        return False
    return True


def _enclosing_scope(node: SyntaxNode) -> SyntaxNode:
    scope = nearest_scope(node)
    if scope is None:
        raise StructuralInvariantError(f"Node {node.id} ({node.kind.value}) has no enclosing scoped block")
    return scope


def _symbol(service: LanguageService, node: Optional[SyntaxNode]) -> Optional[Symbol]:
    return service.symbol_of(node) if node is not None else None


def get_completion_scope(
    node: SyntaxNode, position: Point, service: LanguageService
) -> Optional[CompletionScope]:
    """
    :param node: 光标处的叶子节点
    :param position: 光标位置
    :param service: 语言服务
    :return: 分类结果；错误节点无法恢复出名字时返回 None
    """
    parent = node.parent_node

    match node.kind:
        case NodeKind.IDENTIFIER:
            scope = _enclosing_scope(node)
            if parent is not None and parent.kind in (
                NodeKind.COMPOUND_NAME, NodeKind.COMPOUND_BINDING_EXPRESSION
            ) and parent.in_slot("name", node):
                if parent.child("compound") is None:
                    # .Y<cursor>：与 .<cursor> 相同，只列文件作用域
                    return CompletionScope(
                        scope=node.tree.root,
                        is_member=False,
                        is_global=True,
                        replacement_range=node.range,
                    )
                # X.Y<cursor>：X 为所属对象
                return CompletionScope(
                    scope=scope,
                    is_member=True,
                    owning_symbol=_symbol(service, parent.child("compound")),
                    replacement_range=node.range,
                )
            # X<cursor>.Y 或普通名字
            return CompletionScope(scope=scope, is_member=False, replacement_range=node.range)

        case NodeKind.COMPOUND_NAME | NodeKind.COMPOUND_BINDING_EXPRESSION:
            compound = node.child("compound")
            if compound is not None:
                # X.<cursor>
                return CompletionScope(
                    scope=_enclosing_scope(node),
                    is_member=True,
                    owning_symbol=service.symbol_of(compound),
                )
            # .<cursor>：显式的全局限定
            return CompletionScope(scope=node.tree.root, is_member=False, is_global=True)

        case NodeKind.REPLY:
            port = node.child("port")
            return CompletionScope(
                scope=_enclosing_scope(node),
                is_member=True,
                owning_symbol=_symbol(service, port),
                replacement_range=port.range if port is not None else None,
            )

        case NodeKind.GUARD:
            return CompletionScope(
                scope=node,
                is_member=True,
                owning_symbol=_symbol(service, node.child("condition")),
            )

        case NodeKind.ERROR:
            recovered = service.find_name_and_owner_in_error_node(node, position.line, position.column)
            if recovered is None:
                return None
            return CompletionScope(
                scope=recovered.scope,
                is_member=recovered.owning_object is not None,
                owning_symbol=recovered.owning_object,
            )

        case _ if is_scoped_block(node):
            return CompletionScope(scope=node, is_member=False)

        case _:
            return CompletionScope(scope=_enclosing_scope(node), is_member=False)
