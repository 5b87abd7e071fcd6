# -*- coding: utf-8 -*-

"""
节点视图模型（schemas）

文件功能:
    - 定义 RPC 查询结果经归一化后的 pydantic 模型，供前端直接渲染。

公开接口的 pydantic 模型:
    - NodeStatus: 节点状态（名称、链 ID、版本、区块高度范围、同步状态）
    - Peer: 已连接的对等节点
    - UnconfirmedTxs: 交易池摘要（总数与截断后的交易列表）

序列化时字段使用 camelCase 别名，与前端约定保持一致。
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NodeStatus(BaseModel):
    """节点状态信息模型"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    moniker: str = ""
    network: str = ""
    version: str = ""
    latest_block_height: int = Field(default=0, ge=0, alias="latestBlockHeight")
    earliest_block_height: int = Field(default=0, ge=0, alias="earliestBlockHeight")
    catching_up: bool = Field(default=False, alias="catchingUp")


class Peer(BaseModel):
    """对等节点模型"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    moniker: str = ""
    remote_ip: str = Field(default="", alias="remoteIp")


class UnconfirmedTxs(BaseModel):
    """交易池摘要；total 可能大于 txs 的长度，两者不做一致性校验"""
    model_config = ConfigDict(frozen=True)

    total: int = 0
    txs: List[str] = Field(default_factory=list)
