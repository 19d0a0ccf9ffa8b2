"""
dzn_assist 的异常类型。

约定：
- 光标位置无法解析、符号或类型无法解析，都属于“无结果”，查询函数返回 None，不抛异常
- 只有结构性约束被破坏（语法树不符合解析器承诺的形状）才视为内部错误并抛出
"""


class DznAssistError(Exception):
    """dzn_assist 所有异常的基类"""


class StructuralInvariantError(DznAssistError, RuntimeError):
    """
    语法树结构约束被破坏。

    例如：on 参数（on_parameter）找不到所属的 on 触发器（on_trigger）。
    这是调用方 / 解析器的契约错误，而不是用户输入导致的情况。
    """


class DocumentNotOpenError(DznAssistError, KeyError):
    """查询了一个尚未通过 open_document 打开的文件"""

    def __init__(self, file_path: str):
        super().__init__(file_path)
        self.file_path = file_path

    def __str__(self):
        return f"Document {self.file_path} is not open"
