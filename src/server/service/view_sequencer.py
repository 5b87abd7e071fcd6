# -*- coding: utf-8 -*-
"""
视图请求序号。

同一视图（如概览页）的刷新请求可能并发进行，后发起的请求优先：
结果返回时若已有更新的请求发出，则该结果应被丢弃。
判断依据是请求发起的顺序，而不是结果到达的顺序。
"""

from __future__ import annotations

import threading
from typing import Dict


class ViewSequencer:
    """按视图分配递增序号，判断某次请求是否仍是最新的"""

    def __init__(self) -> None:
        self._latest: Dict[str, int] = {}
        self._lock = threading.Lock()

    def begin(self, view: str) -> int:
        with self._lock:
            ticket = self._latest.get(view, 0) + 1
            self._latest[view] = ticket
            return ticket

    def is_current(self, view: str, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(view, 0) == ticket
