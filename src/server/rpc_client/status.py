# -*- coding: utf-8 -*-
"""
查询节点状态 (/status)
"""
import json

from loguru import logger

from .mapper import map_node_status
from .schemas import NodeStatus
from .transport import decode_result, http_get, raise_for_rpc_error

STATUS_PATH = "/status"


def fetch_status(base_url: str, timeout: float) -> NodeStatus:
    """
    获取节点状态并映射为 NodeStatus。

    :param base_url: RPC 基础地址
    :param timeout: 超时秒数
    :return: NodeStatus
    """
    resp = http_get(base_url, STATUS_PATH, timeout)
    result = decode_result(resp, STATUS_PATH)
    return map_node_status(result)


def fetch_raw_status(base_url: str, timeout: float, pretty: bool = False) -> str:
    """
    获取 /status 的原始响应体，用于调试页面展示。

    响应体为带 error 成员的 JSON 对象时与 fetch_status 一样抛出 RemoteError；
    非 JSON 响应体不做任何假设，原样返回。

    :param pretty: 为 True 时将 JSON 以两个空格缩进重新排版
    :return: 响应体文本
    """
    resp = http_get(base_url, STATUS_PATH, timeout)
    raw = resp.text
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("/status 响应不是合法 JSON，按原样返回")
        return raw
    raise_for_rpc_error(body, STATUS_PATH, resp.status_code)
    if not pretty:
        return raw
    return json.dumps(body, indent=2, ensure_ascii=False)
