"""repoget - 代码仓获取工具

按 <root>/<host>/<path> 规则管理本地代码仓，负责 clone 或 update。
"""

__version__ = "0.3.0"
