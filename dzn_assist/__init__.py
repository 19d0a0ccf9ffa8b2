"""
dzn_assist：Dezyne（.dzn）接口描述语言的语义查询核心。

把编辑器中的光标位置（可能位于正在编辑、语法不完整的文件中）
转换为补全候选、悬停提示、签名帮助与跳转定义目标。
"""

import logging

# 包级 logger，各模块通过 `from dzn_assist import logger` 复用
logger = logging.getLogger("dzn_assist")
