# -*- coding: utf-8 -*-
"""
RPC 客户端的错误类型

所有错误都继承自 RPCClientError，调用方可以按类型区分处理。
`kind` 字段用于在 API 响应中标识错误类别。
"""

from typing import Optional


class RPCClientError(Exception):
    """RPC 客户端错误基类"""
    kind = "rpc_error"


class InvalidEndpoint(RPCClientError):
    """设置的 RPC 地址不是合法的绝对 URL"""
    kind = "invalid_endpoint"

    def __init__(self, candidate: str, reason: str = ""):
        self.candidate = candidate
        message = f"无效的 RPC 地址: {candidate!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidArgument(RPCClientError):
    """查询参数非法，例如 limit 不是正整数"""
    kind = "invalid_argument"


class TransportError(RPCClientError):
    """连接失败、DNS 解析失败或请求超时"""
    kind = "transport_error"

    def __init__(self, message: str, timeout: bool = False):
        self.timeout = timeout
        super().__init__(message)


class DecodeError(RPCClientError):
    """响应体无法解析为预期结构"""
    kind = "decode_error"


class RemoteError(RPCClientError):
    """节点返回了应用层错误（非 2xx 状态码或 JSON-RPC error）"""
    kind = "remote_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
