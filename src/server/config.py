# -*- coding: utf-8 -*-
"""
全局配置

文件功能:
    - 集中定义面板后端使用的常量，启动时从环境变量读取一次。

公开接口:
    - DEFAULT_RPC_URL: 内置默认 RPC 地址
    - RPC_URL_OVERRIDE: 启动时的 RPC 地址覆盖值 (PLT_RPC_URL)
    - RPC_TIMEOUT: 每次 RPC 请求的超时秒数 (PLT_RPC_TIMEOUT)
    - DEFAULT_TX_LIMIT: 交易页默认查询条数
    - SERVER_HOST / SERVER_PORT: 本地面板服务监听地址
"""

import os
from typing import Optional

DEFAULT_RPC_URL = "http://localhost:26657"

RPC_URL_OVERRIDE: Optional[str] = os.getenv("PLT_RPC_URL")

_DEFAULT_TIMEOUT = 10.0


def _read_timeout(raw: Optional[str]) -> float:
    """解析超时配置，非法或非正数时回退到默认值"""
    if not raw:
        return _DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_TIMEOUT
    return value if value > 0 else _DEFAULT_TIMEOUT


RPC_TIMEOUT: float = _read_timeout(os.getenv("PLT_RPC_TIMEOUT"))

DEFAULT_TX_LIMIT = 50

SERVER_HOST = os.getenv("PLT_PANEL_HOST", "localhost")
SERVER_PORT = int(os.getenv("PLT_PANEL_PORT", "1234"))
