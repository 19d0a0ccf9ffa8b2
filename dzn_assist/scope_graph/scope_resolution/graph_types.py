"""
本模块定义了作用域图（Scope Graph）中使用的核心类型与枚举。

主要内容包括：
1. 图节点类型（GraphNodeKind）的枚举定义
2. 边类型（EdgeKind）的枚举定义
3. 作用域节点 ID 的类型别名（ScopeID）
"""

from typing import NewType
from enum import Enum


class GraphNodeKind(str, Enum):
    """
    Scope Graph 中节点类型的枚举定义。

    - SCOPE：作用域块（file / namespace / interface / behavior / ...）
    - DEFINITION：声明（port / event / variable / ...）
    - IMPORT：import 语句
    """
    SCOPE = "LocalScope"
    DEFINITION = "LocalDef"
    IMPORT = "Import"


class EdgeKind(str, Enum):
    """
    Scope Graph 中边类型的枚举定义。

    - ScopeToScope：子作用域 -> 父作用域
    - DefToScope：声明 -> 所属作用域
    - ImportToScope：import 语句 -> 所属作用域
    """
    ScopeToScope = "ScopeToScope"
    DefToScope = "DefToScope"
    ImportToScope = "ImportToScope"


# 作用域节点 ID 的强类型别名
ScopeID = NewType("ScopeID", int)
