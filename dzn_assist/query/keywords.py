"""
上下文相关的关键字表。

按作用域所处的结构上下文（behavior / component / interface / 顶层）
给出可以补全的语法关键字，各分支互斥，结果总是以 `enum` 开头。
"""

from typing import List

from dzn_assist.syntax import NodeKind, SyntaxNode, SyntaxTree

from .completion_items import CompletionItem, keyword_completion_item

BEHAVIOR_KEYWORDS = ("on", "if", "in", "out", "true", "false", "illegal", "void", "bool", "reply")
COMPONENT_KEYWORDS = ("behavior", "system", "requires", "provides")
INTERFACE_KEYWORDS = ("behavior", "in", "out", "void", "bool", "reply")
TOP_LEVEL_KEYWORDS = ("namespace", "extern", "subint", "component", "interface")


def _inside(scope: SyntaxNode, kind: NodeKind) -> bool:
    # 作用域本身或任一祖先为该种类
    return scope.kind == kind or SyntaxTree.find_first_parent(scope, lambda p: p.kind == kind) is not None


def keywords_in_scope(scope: SyntaxNode) -> List[CompletionItem]:
    keywords = ["enum"]

    if _inside(scope, NodeKind.BEHAVIOR):
        keywords.extend(BEHAVIOR_KEYWORDS)
        if _inside(scope, NodeKind.FUNCTION):
            # 只在函数体内提示 return
            keywords.append("return")
    elif _inside(scope, NodeKind.COMPONENT):
        keywords.extend(COMPONENT_KEYWORDS)
    elif _inside(scope, NodeKind.INTERFACE):
        keywords.extend(INTERFACE_KEYWORDS)
    else:
        if not _inside(scope, NodeKind.NAMESPACE):
            # import 只能出现在命名空间之外
            keywords.append("import")
        keywords.extend(TOP_LEVEL_KEYWORDS)

    return [keyword_completion_item(k) for k in keywords]
