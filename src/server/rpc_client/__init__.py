# -*- coding: utf-8 -*-
"""
节点 RPC 查询客户端

负责对 Tendermint RPC 发起只读查询：节点状态、对等节点列表、交易池摘要，
以及用于调试的原始 /status 响应。

公开接口:
    - 类 RPCClient
        - 方法: fetch_status() -> NodeStatus
        - 方法: fetch_peers() -> list[Peer]
        - 方法: fetch_unconfirmed_txs(limit) -> UnconfirmedTxs
        - 方法: fetch_raw_status(pretty=False) -> str

每次调用相互独立，不缓存、不重试，失败时直接抛出 errors 中的错误类型。
"""
from typing import List

from config import RPC_TIMEOUT
from .errors import (
    DecodeError,
    InvalidArgument,
    InvalidEndpoint,
    RemoteError,
    RPCClientError,
    TransportError,
)
from .mempool import fetch_unconfirmed_txs as fetch_unconfirmed_txs_func
from .net_info import fetch_peers as fetch_peers_func
from .schemas import NodeStatus, Peer, UnconfirmedTxs
from .status import fetch_raw_status as fetch_raw_status_func, \
                    fetch_status as fetch_status_func

__all__ = [
    "RPCClient",
    "NodeStatus",
    "Peer",
    "UnconfirmedTxs",
    "RPCClientError",
    "InvalidEndpoint",
    "InvalidArgument",
    "TransportError",
    "DecodeError",
    "RemoteError",
]


class RPCClient:
    """封装了节点只读查询逻辑的客户端"""

    def __init__(self, base_url: str, timeout: float = RPC_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def fetch_status(self) -> NodeStatus:
        return fetch_status_func(self.base_url, self.timeout)

    def fetch_peers(self) -> List[Peer]:
        return fetch_peers_func(self.base_url, self.timeout)

    def fetch_unconfirmed_txs(self, limit: int) -> UnconfirmedTxs:
        return fetch_unconfirmed_txs_func(self.base_url, self.timeout, limit)

    def fetch_raw_status(self, pretty: bool = False) -> str:
        return fetch_raw_status_func(self.base_url, self.timeout, pretty=pretty)
