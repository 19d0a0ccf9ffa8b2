# ============================================================
# 模块说明：
# 补全条目使用的图标分类（icon tag）枚举。
# 取值与 LSP CompletionItemKind 的名字保持一致（小写下划线形式），
# 由宿主界面自行映射为具体图标。
# ============================================================
from enum import Enum


class IconTag(str, Enum):
    TEXT = "text"
    KEYWORD = "keyword"
    EVENT = "event"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"
    FIELD = "field"
    INTERFACE = "interface"
    MODULE = "module"
    CLASS = "class"
    TYPE_PARAMETER = "type_parameter"
    VARIABLE = "variable"
    FUNCTION = "function"
    PROPERTY = "property"
    CONSTANT = "constant"
