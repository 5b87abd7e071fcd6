# -*- coding: utf-8 -*-
"""
查询交易池中的未确认交易 (/unconfirmed_txs)
"""
from .errors import InvalidArgument
from .mapper import map_unconfirmed_txs
from .schemas import UnconfirmedTxs
from .transport import decode_result, http_get

UNCONFIRMED_TXS_PATH = "/unconfirmed_txs"


def validate_limit(limit) -> int:
    """校验 limit 为正整数，否则抛出 InvalidArgument"""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgument(f"limit 必须是正整数，实际为 {limit!r}")
    if limit <= 0:
        raise InvalidArgument(f"limit 必须大于 0，实际为 {limit}")
    return limit


def fetch_unconfirmed_txs(base_url: str, timeout: float, limit: int) -> UnconfirmedTxs:
    """
    获取交易池摘要。limit 会在发起网络请求之前校验。

    :param limit: 返回交易条数上限
    :return: UnconfirmedTxs
    """
    limit = validate_limit(limit)
    resp = http_get(base_url, UNCONFIRMED_TXS_PATH, timeout, params={"limit": limit})
    result = decode_result(resp, UNCONFIRMED_TXS_PATH)
    return map_unconfirmed_txs(result)
