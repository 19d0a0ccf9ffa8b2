"""
运行期配置。

所有配置项均以模块常量的形式暴露，取值来自环境变量；
启动时会先尝试加载工作目录下的 .env 文件。
"""

import os

from dotenv import load_dotenv

load_dotenv()


# import 语句的首选查找根目录，未配置时使用当前工作目录
DZN_IMPORT_ROOT = os.getenv("DZN_IMPORT_ROOT", os.getcwd())

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

"""For MCP server"""
MCP_HOST = os.getenv("MCP_HOST", "127.0.0.1")
MCP_PORT = int(os.getenv("MCP_PORT", "3924"))
