# -*- coding: utf-8 -*-
"""
查询已连接的对等节点 (/net_info)
"""
from typing import List

from .mapper import map_peers
from .schemas import Peer
from .transport import decode_result, http_get

NET_INFO_PATH = "/net_info"


def fetch_peers(base_url: str, timeout: float) -> List[Peer]:
    """
    获取当前连接的对等节点列表。

    :return: Peer 列表；节点没有对等节点时返回空列表
    """
    resp = http_get(base_url, NET_INFO_PATH, timeout)
    result = decode_result(resp, NET_INFO_PATH)
    return map_peers(result)
