# ============================================================
# ScopeGraph 模块
# ------------------------------------------------------------
# 本模块基于有向图（networkx.DiGraph）构建“作用域图（Scope Graph）”，
# 并以此实现 LanguageService，作为本核心的参考语义服务：
#   - 作用域（Scope）：file / namespace / interface / component / behavior / ...
#   - 定义（Definition）：port / event / variable / enum / ...
#   - 导入（Import）：import 语句
# 节点之间的关系由 EdgeKind 描述。
# ============================================================

from networkx import DiGraph
from typing import Dict, List, Optional, Union

import logging

from dzn_assist.service import ERROR_TYPE, ErrorNodeName, LanguageService, Symbol, Type
from dzn_assist.syntax import (
    NodeKind,
    SyntaxNode,
    SyntaxTree,
    is_declaration,
    is_scoped_block,
    name_to_string,
)

from dzn_assist.scope_graph.error_recovery import find_name_and_owner

from .definition import LocalDef
from .graph_types import EdgeKind, GraphNodeKind, ScopeID
from .imports import LocalImportStmt, resolve_import_target
from .scope import ScopeStack

logger = logging.getLogger(__name__)

# 内建类型，没有对应的声明节点
BUILTIN_TYPES = ("bool", "void")

# 可以出现在类型位置上的声明
TYPE_DECLARATION_KINDS = frozenset({
    NodeKind.INTERFACE,
    NodeKind.COMPONENT,
    NodeKind.ENUM,
    NodeKind.INT,
    NodeKind.EXTERN,
})

# 成员即其作用域内直接声明的名字
SCOPE_MEMBER_KINDS = frozenset({
    NodeKind.INTERFACE,
    NodeKind.COMPONENT,
    NodeKind.NAMESPACE,
})


class ScopeGraph(LanguageService):
    """
    ScopeGraph 表示单个文件（以及其单跳 import）的作用域关系图。

    核心设计思想：
    - 每一个作用域、定义、import 语句都作为图中的一个节点
    - 子作用域通过 ScopeToScope 边指向父作用域
    - 定义通过 DefToScope 边挂到其所在的最近作用域
    - 名字查找沿 ScopeStack 从内向外逐层进行，最近的定义优先
    """

    def __init__(self, tree: SyntaxTree):
        # 有向图，用于存储所有节点及其关系
        self._graph = DiGraph()
        # 节点自增 ID 计数器
        self._node_counter = 0
        # 作用域块语法节点 -> 作用域 ID
        self._scope_ids: Dict[SyntaxNode, ScopeID] = {}

        self.tree = tree
        # 已链接进来的 import 文件
        self.linked_files: List[str] = []

        # 创建根作用域节点（对应整个文件）
        self.root_idx = self.add_node(type=GraphNodeKind.SCOPE, name="", syntax=tree.root)
        self._scope_ids[tree.root] = self.root_idx

    # ------------------------------------------------------------
    # 构建
    # ------------------------------------------------------------
    def add_tree(self, tree: SyntaxTree) -> None:
        """
        把一棵语法树中的作用域、定义与 import 插入图中。

        被 import 的文件与当前文件共享根作用域，其顶层声明因此对当前文件可见。
        """
        self._scope_ids[tree.root] = self.root_idx
        # 先序遍历保证父作用域总是先于子节点插入
        for node in tree.walk():
            if node.kind == NodeKind.FILE:
                continue
            if is_scoped_block(node):
                self.insert_local_scope(node)
            if is_declaration(node) and node.kind != NodeKind.EVENT_PARAMETER:
                self.insert_local_def(LocalDef(node))
            if node.kind == NodeKind.IMPORT:
                self.insert_local_import(LocalImportStmt(node))

    def link_import(self, tree: SyntaxTree) -> None:
        # 单跳 import：只链接被导入文件本身，不递归处理它的 import
        if tree.file_path in self.linked_files or tree.file_path == self.tree.file_path:
            return
        self.add_tree(tree)
        self.linked_files.append(tree.file_path)
        logger.debug(f"Linked import {tree.file_path} into {self.tree.file_path}")

    def insert_local_scope(self, node: SyntaxNode) -> None:
        parent_scope = self.scope_of(node.parent_node) if node.parent_node is not None else None
        if parent_scope is not None:
            new_id = self.add_node(type=GraphNodeKind.SCOPE, name="", syntax=node)
            # 子作用域 -> 父作用域
            self._graph.add_edge(new_id, parent_scope, type=EdgeKind.ScopeToScope)
            self._scope_ids[node] = new_id

    def insert_local_def(self, new: LocalDef) -> None:
        # 名字尚未写出（正在输入）的声明无法被引用
        if not new.name:
            return
        # 作用域块本身也可能是声明（interface / function 等），应挂到外层作用域
        defining_scope = self.scope_of(new.syntax.parent_node)
        if defining_scope is not None:
            new_idx = self.add_node(**new.to_node())
            self._graph.add_edge(new_idx, defining_scope, type=EdgeKind.DefToScope)

    def insert_local_import(self, new: LocalImportStmt) -> None:
        parent_scope = self.scope_of(new.syntax.parent_node)
        if parent_scope is not None:
            new_id = self.add_node(
                type=GraphNodeKind.IMPORT,
                name=new.file_name,
                syntax=new.syntax,
            )
            self._graph.add_edge(new_id, parent_scope, type=EdgeKind.ImportToScope)

    def add_node(self, **attrs) -> int:
        # 向图中添加节点并返回其 ID
        id = self._node_counter
        self._graph.add_node(id, **attrs)
        self._node_counter += 1
        return id

    # ------------------------------------------------------------
    # 图查询
    # ------------------------------------------------------------
    def scope_of(self, node: Optional[SyntaxNode]) -> Optional[ScopeID]:
        """返回 node 所在（或 node 自身即为）的最近作用域 ID"""
        while node is not None:
            if is_scoped_block(node) and node in self._scope_ids:
                return self._scope_ids[node]
            node = node.parent_node
        return None

    def parent_scope_stack(self, start: ScopeID) -> ScopeStack:
        # 构造一个向上遍历的作用域栈
        return ScopeStack(self._graph, start)

    def definitions(self, start: ScopeID) -> List[int]:
        return [
            u
            for u, v, attrs in self._graph.in_edges(start, data=True)
            if attrs["type"] == EdgeKind.DefToScope
        ]

    def get_all_imports(self) -> List[SyntaxNode]:
        # 只返回当前文件自身的 import 语句
        return [
            attrs["syntax"]
            for _, attrs in self._graph.nodes(data=True)
            if attrs["type"] == GraphNodeKind.IMPORT and attrs["syntax"].tree is self.tree
        ]

    def lookup(self, name: str, scope: ScopeID) -> Optional[Symbol]:
        """从 scope 开始逐层向外查找名字，返回最近的定义"""
        for scope_id in self.parent_scope_stack(scope):
            for def_idx in self.definitions(scope_id):
                attrs = self._graph.nodes[def_idx]
                if attrs["name"] == name:
                    return Symbol(attrs["syntax"])
        return None

    def resolve_dotted_name(self, dotted: str, scope: SyntaxNode) -> Optional[Symbol]:
        """解析 "a.b.c" 形式的名字：首段按作用域链查找，其余各段按类型成员查找"""
        parts = [p for p in dotted.split(".") if p]
        scope_id = self.scope_of(scope)
        if not parts or scope_id is None:
            return None

        symbol = self.lookup(parts[0], scope_id)
        for part in parts[1:]:
            if symbol is None:
                return None
            symbol = self.members_of(self.type_of(symbol)).get(part)
        return symbol

    # ------------------------------------------------------------
    # LanguageService 实现
    # ------------------------------------------------------------
    def resolve_leaf_at(self, tree: SyntaxTree, line: int, column: int) -> Optional[SyntaxNode]:
        return tree.leaf_at(line, column)

    def symbol_of(self, node: SyntaxNode) -> Optional[Symbol]:
        match node.kind:
            case NodeKind.IDENTIFIER:
                return self._symbol_of_identifier(node)
            case NodeKind.COMPOUND_NAME | NodeKind.COMPOUND_BINDING_EXPRESSION:
                name = node.child("name")
                return self._symbol_of_identifier(name) if name is not None else None
            case NodeKind.TYPE_REFERENCE:
                type_name = node.child("type_name")
                return self.symbol_of(type_name) if type_name is not None else None
            case _ if is_declaration(node):
                return Symbol(node)
            case _:
                return None

    def _symbol_of_identifier(self, node: SyntaxNode) -> Optional[Symbol]:
        parent = node.parent_node
        if parent is not None:
            # 声明位置上的名字
            if is_declaration(parent) and parent.in_slot("name", node):
                return Symbol(parent)
            # 枚举值：声明即标识符本身
            if parent.kind == NodeKind.ENUM and parent.in_slot("fields", node):
                return Symbol(node)
            # X.Y 中的 Y：在 X 的类型成员中查找
            if parent.kind in (NodeKind.COMPOUND_NAME, NodeKind.COMPOUND_BINDING_EXPRESSION) \
                    and parent.in_slot("name", node):
                compound = parent.child("compound")
                if compound is None:
                    # .Y：全局限定，只在文件作用域中查找
                    return self.lookup(node.text, self.root_idx)
                owner = self.symbol_of(compound)
                if owner is None:
                    return None
                return self.members_of(self.type_of(owner)).get(node.text)

        scope = self.scope_of(node)
        if scope is None:
            return None
        return self.lookup(node.text, scope)

    def type_of(self, symbol_or_node: Union[Symbol, SyntaxNode]) -> Type:
        if isinstance(symbol_or_node, Symbol):
            symbol = symbol_or_node
        else:
            symbol = self.symbol_of(symbol_or_node)
        if symbol is None:
            return ERROR_TYPE

        decl = symbol.declaration
        match decl.kind:
            case NodeKind.PORT | NodeKind.VARIABLE | NodeKind.INSTANCE \
                    | NodeKind.FUNCTION_PARAMETER | NodeKind.EVENT_PARAMETER:
                return self._resolve_type_reference(decl.child("type"))
            case NodeKind.ON_PARAMETER:
                return self._on_parameter_type(decl)
            case NodeKind.IDENTIFIER:
                enum = decl.parent_node
                if enum is not None and enum.kind == NodeKind.ENUM:
                    return Type(name=name_to_string(enum.child("name")), declaration=enum)
                return ERROR_TYPE
            case _ if is_declaration(decl):
                return Type(name=symbol.name, declaration=decl)
            case _:
                return ERROR_TYPE

    def _resolve_type_reference(self, type_ref: Optional[SyntaxNode]) -> Type:
        if type_ref is None:
            return ERROR_TYPE
        name = name_to_string(type_ref)
        if name in BUILTIN_TYPES:
            return Type(name=name)

        target = self.symbol_of(type_ref)
        if target is None or target.declaration.kind not in TYPE_DECLARATION_KINDS:
            logger.debug(f"Unable to resolve type {name}")
            return ERROR_TYPE
        return Type(name=target.name, declaration=target.declaration)

    def _on_parameter_type(self, decl: SyntaxNode) -> Type:
        # on 参数的类型取自被触发事件在相同位置上的参数
        trigger = SyntaxTree.find_first_parent(decl, lambda p: p.kind == NodeKind.ON_TRIGGER)
        if trigger is None:
            return ERROR_TYPE
        trigger_name = trigger.child("name")
        event_type = self.type_of(trigger_name) if trigger_name is not None else ERROR_TYPE
        if event_type.declaration is None or event_type.declaration.kind != NodeKind.EVENT:
            return ERROR_TYPE

        index = [p.id for p in trigger.children_of("parameters")].index(decl.id)
        event_parameters = event_type.declaration.children_of("parameters")
        if index >= len(event_parameters):
            return ERROR_TYPE
        return self.type_of(Symbol(event_parameters[index]))

    def members_of(self, type: Type) -> Dict[str, Symbol]:
        decl = type.declaration
        if decl is None:
            return {}
        if decl.kind in SCOPE_MEMBER_KINDS:
            return {name: Symbol(node) for name, node in self.declared_variables_at(decl).items()}
        if decl.kind == NodeKind.ENUM:
            return {field.text: Symbol(field) for field in decl.children_of("fields") if field.text}
        return {}

    def declared_variables_at(self, scope: SyntaxNode) -> Dict[str, SyntaxNode]:
        scope_id = self._scope_ids.get(scope)
        if scope_id is None:
            return {}

        variables: Dict[str, SyntaxNode] = {}
        for def_idx in self.definitions(scope_id):
            attrs = self._graph.nodes[def_idx]
            # 同一作用域内重名时保留第一个
            variables.setdefault(attrs["name"], attrs["syntax"])
        return variables

    def find_name_and_owner_in_error_node(
        self, node: SyntaxNode, line: int, column: int
    ) -> Optional[ErrorNodeName]:
        return find_name_and_owner(self, node, line, column)

    def resolve_import_target(self, import_node: SyntaxNode, roots: List[str]) -> Optional[str]:
        return resolve_import_target(import_node, roots)

