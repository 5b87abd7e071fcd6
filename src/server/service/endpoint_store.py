# -*- coding: utf-8 -*-
"""
RPC 地址存储服务。

文件功能:
    - 作为进程内唯一的 RPC 基础地址来源，提供读取、设置与重置。
    - 设置时校验 URL 语法，校验失败时保留原值。

公开接口:
    - 类 EndpointStore
        - 方法: get() -> str
        - 方法: set(candidate) -> str
        - 方法: reset() -> str
        - 方法: apply_override(value) -> str
"""

from __future__ import annotations

import threading
from typing import Optional

from loguru import logger
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from config import DEFAULT_RPC_URL
from rpc_client.errors import InvalidEndpoint

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def canonicalize(candidate: str) -> str:
    """
    去除首尾空白与末尾斜杠，并校验为带 scheme 和 host 的绝对 http(s) URL。
    查询路径会直接拼接在地址之后，因此不允许带查询串或片段。
    """
    trimmed = candidate.strip().rstrip("/")
    try:
        _URL_ADAPTER.validate_python(trimmed)
    except ValidationError as e:
        reason = e.errors()[0].get("msg", "") if e.errors() else ""
        raise InvalidEndpoint(candidate, reason) from e
    if "?" in trimmed or "#" in trimmed:
        raise InvalidEndpoint(candidate, "不能包含查询串或片段")
    return trimmed


class EndpointStore:
    """线程安全的 RPC 地址存储"""

    def __init__(self, default: str = DEFAULT_RPC_URL):
        self._default = canonicalize(default)
        self._value = self._default
        self._lock = threading.Lock()

    @property
    def default(self) -> str:
        return self._default

    def get(self) -> str:
        with self._lock:
            return self._value

    def set(self, candidate: Optional[str]) -> str:
        """
        替换当前地址。

        :param candidate: 新地址；为空或仅含空白时恢复默认地址
        :return: 规范化后的新地址
        :raises InvalidEndpoint: 地址不合法，此时原值保持不变
        """
        if candidate is None or not candidate.strip():
            value = self._default
        else:
            value = canonicalize(candidate)

        with self._lock:
            previous, self._value = self._value, value
        if previous != value:
            logger.info(f"RPC 地址已切换: {previous} -> {value}")
        return value

    def reset(self) -> str:
        return self.set("")

    def apply_override(self, value: Optional[str]) -> str:
        """启动时应用外部提供的覆盖值；非法值只记录错误，不中断启动"""
        if value is None or not value.strip():
            return self.get()
        try:
            return self.set(value)
        except InvalidEndpoint as e:
            logger.error(f"忽略启动配置中的 RPC 地址，继续使用 {self.get()}: {e}")
            return self.get()
