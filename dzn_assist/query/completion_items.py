"""
补全条目格式化。

把 (名字, 声明节点) 渲染为结构化的补全条目：
- display_name：显示名
- category：简短的类别说明（"event"、"port"、"var" ...）
- icon_tag：由声明节点种类决定的图标分类
- replacement_range：接受补全时需要覆盖的源码范围
- parameter_preview：event / function 的参数预览 "(in a, out b)"
"""

from typing import Optional

from pydantic import BaseModel

from dzn_assist.common.enum_types import IconTag
from dzn_assist.syntax import NodeKind, SyntaxNode, TextRange, name_to_string

_CATEGORIES = {
    NodeKind.EVENT: "event",
    NodeKind.ENUM: "enum",
    NodeKind.PORT: "port",
    NodeKind.INTERFACE: "interface",
    NodeKind.NAMESPACE: "namespace",
    NodeKind.COMPONENT: "component",
    NodeKind.EXTERN: "extern",
    NodeKind.ON_PARAMETER: "parameter",
    NodeKind.FUNCTION_PARAMETER: "parameter",
    NodeKind.VARIABLE: "var",
    NodeKind.INT: "int",
    NodeKind.FUNCTION: "function",
}

_ICON_TAGS = {
    NodeKind.EVENT: IconTag.EVENT,
    NodeKind.ENUM: IconTag.ENUM,
    NodeKind.PORT: IconTag.FIELD,
    NodeKind.INTERFACE: IconTag.INTERFACE,
    NodeKind.NAMESPACE: IconTag.MODULE,
    NodeKind.COMPONENT: IconTag.CLASS,
    NodeKind.EXTERN: IconTag.TYPE_PARAMETER,
    NodeKind.ON_PARAMETER: IconTag.VARIABLE,
    NodeKind.FUNCTION_PARAMETER: IconTag.VARIABLE,
    NodeKind.VARIABLE: IconTag.VARIABLE,
    NodeKind.INT: IconTag.VARIABLE,
    NodeKind.INSTANCE: IconTag.VARIABLE,
    NodeKind.FUNCTION: IconTag.FUNCTION,
}


class CompletionItem(BaseModel):
    """一条补全候选"""

    display_name: str
    category: Optional[str] = None
    icon_tag: IconTag = IconTag.TEXT
    replacement_range: Optional[TextRange] = None
    parameter_preview: Optional[str] = None


def completion_icon_tag(node: SyntaxNode) -> IconTag:
    match node.kind:
        case NodeKind.KEYWORD:
            return IconTag.PROPERTY if node.text == "reply" else IconTag.CONSTANT
        case NodeKind.IDENTIFIER:
            parent = node.parent_node
            if parent is not None and parent.kind == NodeKind.ENUM:
                return IconTag.ENUM_MEMBER
            return IconTag.TEXT
        case _:
            return _ICON_TAGS.get(node.kind, IconTag.TEXT)


def completion_category(node: SyntaxNode) -> Optional[str]:
    if node.kind == NodeKind.KEYWORD:
        return node.text
    return _CATEGORIES.get(node.kind)


def parameter_preview(node: SyntaxNode) -> str:
    # 缺失方向关键字时对应位置为空串
    parameters = [
        f"{name_to_string(p.child('direction'))} {name_to_string(p.child('name'))}"
        for p in node.children_of("parameters")
    ]
    return f"({', '.join(parameters)})"


def completion_item_for_node(
    name: str, node: SyntaxNode, range: Optional[TextRange] = None
) -> CompletionItem:
    """
    :param name: 显示名（成员名或作用域内可见的名字）
    :param node: 名字对应的声明节点
    :param range: 替换范围，没有已输入的内容时为 None
    """
    preview = None
    if node.kind in (NodeKind.EVENT, NodeKind.FUNCTION):
        preview = parameter_preview(node)

    return CompletionItem(
        display_name=name,
        category=completion_category(node),
        icon_tag=completion_icon_tag(node),
        replacement_range=range,
        parameter_preview=preview,
    )


def keyword_completion_item(name: str) -> CompletionItem:
    return CompletionItem(display_name=name, icon_tag=IconTag.KEYWORD)
