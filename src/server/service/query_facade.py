# -*- coding: utf-8 -*-
"""
查询门面服务。

文件功能:
    - 前端唯一使用的查询/命令入口，组合 EndpointStore 与 RPCClient。
    - 每次查询都在调用时读取当前 RPC 地址，地址变更对下一次查询立即生效。

公开接口:
    - 类 QueryFacade
        - 方法: get_endpoint() / set_endpoint(candidate) / reset_endpoint()
        - 方法: get_node_status() -> NodeStatus
        - 方法: get_raw_node_info(pretty=False) -> str
        - 方法: get_peers() -> list[Peer]
        - 方法: get_unconfirmed_transactions(limit) -> UnconfirmedTxs
        - 方法: load_overview() -> (NodeStatus, list[Peer])  (异步，并发查询)

内部方法:
    - _run_query(): 使用当前地址构建客户端并执行查询，失败时记录日志后原样抛出
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Tuple, TypeVar

from loguru import logger

from config import RPC_TIMEOUT
from rpc_client import NodeStatus, Peer, RPCClient, RPCClientError, UnconfirmedTxs
from rpc_client.mempool import validate_limit
from service.endpoint_store import EndpointStore

T = TypeVar("T")


class QueryFacade:
    """面向前端的查询入口"""

    def __init__(
        self,
        store: Optional[EndpointStore] = None,
        timeout: float = RPC_TIMEOUT,
        client_factory: Callable[[str, float], RPCClient] = RPCClient,
    ):
        self.store = store or EndpointStore()
        self.timeout = timeout
        self._client_factory = client_factory

    # --- 地址配置 ---

    def get_endpoint(self) -> str:
        return self.store.get()

    def set_endpoint(self, candidate: Optional[str]) -> str:
        return self.store.set(candidate)

    def reset_endpoint(self) -> str:
        return self.store.reset()

    # --- 查询 ---

    def _run_query(self, name: str, query: Callable[[RPCClient], T]) -> T:
        endpoint = self.store.get()
        client = self._client_factory(endpoint, self.timeout)
        try:
            return query(client)
        except RPCClientError as e:
            logger.warning(f"查询 {name} 失败 (endpoint={endpoint}): {e}")
            raise

    def get_node_status(self) -> NodeStatus:
        return self._run_query("status", lambda c: c.fetch_status())

    def get_raw_node_info(self, pretty: bool = False) -> str:
        return self._run_query("raw_status", lambda c: c.fetch_raw_status(pretty=pretty))

    def get_peers(self) -> List[Peer]:
        return self._run_query("peers", lambda c: c.fetch_peers())

    def get_unconfirmed_transactions(self, limit: int) -> UnconfirmedTxs:
        # 参数错误在读取地址、构建客户端之前即返回
        limit = validate_limit(limit)
        return self._run_query("unconfirmed_txs", lambda c: c.fetch_unconfirmed_txs(limit))

    async def load_overview(self) -> Tuple[NodeStatus, List[Peer]]:
        """并发获取节点状态与对等节点列表，两者之间不保证顺序"""
        status, peers = await asyncio.gather(
            asyncio.to_thread(self.get_node_status),
            asyncio.to_thread(self.get_peers),
        )
        return status, peers
