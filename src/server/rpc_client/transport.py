# -*- coding: utf-8 -*-
"""
RPC 传输层的工具函数

负责发起 HTTP GET、应用超时，并把 requests 的异常和响应状态
统一转换为 errors 中定义的错误类型。
"""

import json
from typing import Any, Dict, Mapping, Optional

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import RequestException, Timeout

from .errors import DecodeError, RemoteError, TransportError

_SNIPPET_LIMIT = 200


def build_url(base_url: str, path: str) -> str:
    """拼接基础地址与路径，保证两者之间只有一个斜杠"""
    if not path.startswith("/"):
        path = "/" + path
    return base_url.rstrip("/") + path


def _snippet(text: str) -> str:
    snippet = (text or "").strip().replace("\n", " ")
    if not snippet:
        return "无响应内容"
    if len(snippet) > _SNIPPET_LIMIT:
        snippet = snippet[:_SNIPPET_LIMIT] + "..."
    return snippet


def _describe_rpc_error(error: Any) -> str:
    """提取 JSON-RPC error 对象中的可读信息"""
    if isinstance(error, Mapping):
        parts = [str(error[key]) for key in ("message", "data") if error.get(key)]
        if parts:
            return ": ".join(parts)
    return str(error)


def http_get(base_url: str, path: str, timeout: float, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    """
    向节点发起 GET 请求。

    :param base_url: RPC 基础地址
    :param path: 查询路径，例如 /status
    :param timeout: 超时秒数
    :param params: 查询参数
    :return: 状态码为 2xx 的响应
    :raises TransportError: 连接失败或超时
    :raises RemoteError: 节点返回非 2xx 状态码
    """
    url = build_url(base_url, path)
    try:
        resp = requests.get(url, params=params, timeout=timeout)
    except Timeout as e:
        raise TransportError(f"请求 {path} 超时 ({timeout}s): {e}", timeout=True) from e
    except RequestsConnectionError as e:
        raise TransportError(f"无法连接节点 {base_url}: {e}") from e
    except RequestException as e:
        raise TransportError(f"请求 {path} 失败: {e}") from e

    if not (200 <= resp.status_code < 300):
        message = _snippet(resp.text)
        try:
            body = json.loads(resp.text)
        except ValueError:
            body = None
        if isinstance(body, Mapping) and body.get("error"):
            message = _describe_rpc_error(body["error"])
        raise RemoteError(f"RPC 错误 ({resp.status_code}): {message}", status_code=resp.status_code)

    return resp


def raise_for_rpc_error(body: Any, path: str, status_code: Optional[int] = None) -> None:
    """响应体为包含 error 成员的 JSON 对象时抛出 RemoteError"""
    if isinstance(body, Mapping) and body.get("error"):
        raise RemoteError(f"RPC 错误 ({path}): {_describe_rpc_error(body['error'])}", status_code=status_code)


def decode_result(resp: requests.Response, path: str) -> Mapping[str, Any]:
    """
    解析 JSON-RPC 响应体并返回其中的 result 对象。

    :raises DecodeError: 响应体不是 JSON 对象，或缺少 result 对象
    :raises RemoteError: 响应体中包含 JSON-RPC error
    """
    try:
        body = json.loads(resp.text)
    except ValueError as e:
        raise DecodeError(f"解析 {path} 响应失败: {e}") from e

    if not isinstance(body, Mapping):
        raise DecodeError(f"解析 {path} 响应失败: 期望 JSON 对象，实际为 {type(body).__name__}")

    raise_for_rpc_error(body, path, resp.status_code)

    result = body.get("result")
    if not isinstance(result, Mapping):
        raise DecodeError(f"解析 {path} 响应失败: 缺少 result 对象")
    return result
