"""
本模块定义了源码位置建模所需的基础数据结构。

主要内容包括：
1. 文本位置（Point）：行号 + 列号，均从 0 开始
2. 文本范围（TextRange）：由起止 Point 组成

这两个结构被语法树节点、补全替换范围、签名帮助等功能共同使用。
"""

from typing import NamedTuple, Tuple

from pydantic import BaseModel


class Point(NamedTuple):
    """
    表示源码中的一个二维坐标点（行号 + 列号）。

    NamedTuple 天然支持按 (line, column) 字典序比较，
    因此可以直接用 <、<= 判断两个位置的先后关系。
    """
    line: int
    column: int


class TextRange(BaseModel):
    """
    表示源码中的一个连续文本区间。

    结束位置的语义由外部解析器定义（通常是“最后一个字符之后”）。
    判断光标是否落在范围内时两端都按闭区间处理：
    光标紧跟在标识符最后一个字符之后（正在输入）时，仍然视为位于该标识符上。
    """

    start_point: Point
    end_point: Point

    def __init__(
        self,
        *,
        start_point: Tuple[int, int],
        end_point: Tuple[int, int],
    ):
        """
        初始化 TextRange。

        注意：
        - start_point / end_point 使用 (line, column) 元组传入
        - 实际存储时由 Pydantic 自动转换为 Point 类型
        """
        super().__init__(start_point=start_point, end_point=end_point)

    def contains_point(self, point: Point) -> bool:
        """
        判断光标位置是否落在当前范围内（两端闭区间）。

        :param point: 光标位置
        :return: True 表示光标位于范围内
        """
        return self.start_point <= tuple(point) <= self.end_point

    def ends_before(self, point: Point) -> bool:
        # 严格早于光标结束
        return self.end_point < tuple(point)
