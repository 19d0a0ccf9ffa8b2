"""
本模块定义了语法树节点的种类（NodeKind）以及与种类相关的分类集合。

主要内容包括：
1. NodeKind：封闭的节点种类枚举，查询逻辑全部基于它做 match 分派
2. 作用域块（scoped block）种类集合：会引入新词法作用域的节点
3. 声明（declaration）种类集合：能够被符号（Symbol）指向的节点
4. 列表型槽位名：在 slots 中保存子节点 ID 列表而非单个 ID
"""

from enum import Enum


class NodeKind(str, Enum):
    """
    语法树节点种类。

    - 结构类：FILE / NAMESPACE / INTERFACE / COMPONENT / BEHAVIOR / SYSTEM
    - 声明类：FUNCTION / EVENT / PORT / VARIABLE / ENUM / INT / EXTERN / INSTANCE 及各类参数
    - 语句类：ON_STATEMENT / ON_TRIGGER / GUARD / COMPOUND / REPLY / IMPORT
    - 表达式类：CALL_EXPRESSION / COMPOUND_NAME / COMPOUND_BINDING_EXPRESSION / EXPRESSION
    - 词法类：IDENTIFIER / KEYWORD
    - ERROR：解析器错误恢复产生的子树
    """
    FILE = "file"
    NAMESPACE = "namespace"
    INTERFACE = "interface"
    COMPONENT = "component"
    BEHAVIOR = "behavior"
    SYSTEM = "system"

    FUNCTION = "function"
    EVENT = "event"
    EVENT_PARAMETER = "event_parameter"
    FUNCTION_PARAMETER = "function_parameter"
    PORT = "port"
    VARIABLE = "variable"
    ENUM = "enum"
    INT = "int"
    EXTERN = "extern"
    INSTANCE = "instance"
    TYPE_REFERENCE = "type_reference"

    IMPORT = "import"
    ON_STATEMENT = "on_statement"
    ON_TRIGGER = "on_trigger"
    ON_PARAMETER = "on_parameter"
    GUARD = "guard"
    COMPOUND = "compound"
    REPLY = "reply"

    CALL_EXPRESSION = "call_expression"
    COMPOUND_NAME = "compound_name"
    COMPOUND_BINDING_EXPRESSION = "compound_binding_expression"
    EXPRESSION = "expression"

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    ERROR = "error"


# 引入新词法作用域的节点种类
SCOPED_BLOCK_KINDS = frozenset({
    NodeKind.FILE,
    NodeKind.NAMESPACE,
    NodeKind.INTERFACE,
    NodeKind.COMPONENT,
    NodeKind.BEHAVIOR,
    NodeKind.FUNCTION,
    NodeKind.GUARD,
    NodeKind.ON_STATEMENT,
    NodeKind.COMPOUND,
})

# 可以被符号指向的声明节点种类
DECLARATION_KINDS = frozenset({
    NodeKind.NAMESPACE,
    NodeKind.INTERFACE,
    NodeKind.COMPONENT,
    NodeKind.FUNCTION,
    NodeKind.EVENT,
    NodeKind.EVENT_PARAMETER,
    NodeKind.FUNCTION_PARAMETER,
    NodeKind.PORT,
    NodeKind.VARIABLE,
    NodeKind.ENUM,
    NodeKind.INT,
    NodeKind.EXTERN,
    NodeKind.INSTANCE,
    NodeKind.ON_PARAMETER,
})

# 保存子节点 ID 列表（而非单个 ID）的槽位
LIST_SLOTS = frozenset({
    "declarations",
    "parameters",
    "arguments",
    "fields",
    "triggers",
    "statements",
})


def is_scoped_block(node) -> bool:
    return node.kind in SCOPED_BLOCK_KINDS


def is_declaration(node) -> bool:
    return node.kind in DECLARATION_KINDS
