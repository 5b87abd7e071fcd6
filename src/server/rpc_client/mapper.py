# -*- coding: utf-8 -*-

"""
视图模型映射（ViewModelMapper）

文件功能:
    - 将 Tendermint RPC 的 `result` 对象转换为 schemas 中的模型。
    - 对缺失或格式不符的字段使用中性默认值（空字符串、0、False），
      使结构残缺但可解析的响应仍能降级渲染，而不是整体失败。

公开接口:
    - map_node_status(result) -> NodeStatus
    - map_peers(result) -> list[Peer]
    - map_unconfirmed_txs(result) -> UnconfirmedTxs

内部方法:
    - _text(): 读取文本字段
    - _count(): 读取非负整数字段（兼容十进制字符串）
    - _flag(): 读取布尔字段
    - _section(): 读取嵌套对象
"""

from typing import Any, List, Mapping

from loguru import logger

from .schemas import NodeStatus, Peer, UnconfirmedTxs


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return value
    if value is not None:
        logger.warning(f"字段 {key} 不是对象，按空对象处理: {value!r}")
    return {}


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.warning(f"字段 {key} 不是文本，已置空: {value!r}")
    return ""


def _count(data: Mapping[str, Any], key: str) -> int:
    """Tendermint 将 int64 编码为十进制字符串，这里两种形式都接受"""
    value = data.get(key)
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        logger.warning(f"字段 {key} 不是数字，按 0 处理: {value!r}")
        return 0
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"字段 {key} 无法解析为整数，按 0 处理: {value!r}")
        return 0
    if parsed < 0:
        logger.warning(f"字段 {key} 为负数，按 0 处理: {parsed}")
        return 0
    return parsed


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value is not None:
        logger.warning(f"字段 {key} 不是布尔值，按 False 处理: {value!r}")
    return False


def map_node_status(result: Mapping[str, Any]) -> NodeStatus:
    """将 /status 的 result 映射为 NodeStatus"""
    node_info = _section(result, "node_info")
    sync_info = _section(result, "sync_info")

    latest = _count(sync_info, "latest_block_height")
    earliest = _count(sync_info, "earliest_block_height")
    if earliest > latest:
        logger.warning(f"最早区块高度 {earliest} 大于最新高度 {latest}，已截断为 {latest}")
        earliest = latest

    return NodeStatus(
        moniker=_text(node_info, "moniker"),
        network=_text(node_info, "network"),
        version=_text(node_info, "version"),
        latest_block_height=latest,
        earliest_block_height=earliest,
        catching_up=_flag(sync_info, "catching_up"),
    )


def map_peers(result: Mapping[str, Any]) -> List[Peer]:
    """将 /net_info 的 result 映射为有序的 Peer 列表；空列表是合法结果"""
    raw_peers = result.get("peers")
    if raw_peers is None:
        return []
    if not isinstance(raw_peers, list):
        logger.warning(f"peers 字段不是数组，按空列表处理: {raw_peers!r}")
        return []

    peers: List[Peer] = []
    for index, item in enumerate(raw_peers):
        if not isinstance(item, Mapping):
            logger.warning(f"跳过格式错误的 peer[{index}]: {item!r}")
            continue
        node_info = _section(item, "node_info")
        peers.append(Peer(
            id=_text(node_info, "id"),
            moniker=_text(node_info, "moniker"),
            remote_ip=_text(item, "remote_ip"),
        ))
    return peers


def map_unconfirmed_txs(result: Mapping[str, Any]) -> UnconfirmedTxs:
    """将 /unconfirmed_txs 的 result 映射为 UnconfirmedTxs，不校验 total 与 txs 长度的关系"""
    raw_txs = result.get("txs")
    txs: List[str] = []
    if isinstance(raw_txs, list):
        for index, tx in enumerate(raw_txs):
            if isinstance(tx, str):
                txs.append(tx)
            else:
                logger.warning(f"跳过非文本的交易 txs[{index}]: {tx!r}")
    elif raw_txs is not None:
        logger.warning(f"txs 字段不是数组，按空列表处理: {raw_txs!r}")

    return UnconfirmedTxs(total=_count(result, "total"), txs=txs)
