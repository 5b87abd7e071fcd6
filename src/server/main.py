# -*- coding: utf-8 -*-
"""
后端 API 服务器

文件功能:
    - 提供基于 FastAPI 的本地面板后端，前端通过 RESTful API 和 SSE 与之交互。
    - 轮询节点 RPC 的状态、对等节点与交易池信息，并允许运行时切换 RPC 地址。

公开接口:
    - GET  /api/rpc/endpoint: 获取当前 RPC 地址。
    - PUT  /api/rpc/endpoint: 设置 RPC 地址（为空时恢复默认）。
    - POST /api/rpc/endpoint/reset: 恢复默认 RPC 地址。
    - GET  /api/node/status: 获取节点状态。
    - GET  /api/node/peers: 获取已连接的对等节点。
    - GET  /api/node/overview: 并发获取节点状态与对等节点。
    - GET  /api/node/raw: 获取 /status 原始响应（调试用）。
    - GET  /api/mempool: 获取交易池中的未确认交易。
    - GET  /api/logs/stream: 通过 SSE 实时推送日志。
"""

import asyncio
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from pydantic import BaseModel
from starlette.responses import StreamingResponse

from config import DEFAULT_TX_LIMIT, RPC_URL_OVERRIDE, SERVER_HOST, SERVER_PORT
from rpc_client import (
    DecodeError,
    InvalidArgument,
    InvalidEndpoint,
    RemoteError,
    RPCClientError,
    TransportError,
)
from service.paths import get_frontend_dist_dir
from service.query_facade import QueryFacade
from service.view_sequencer import ViewSequencer

# --- 应用和状态管理 ---

app = FastAPI(
    title="PLT 节点面板后端",
    description="提供节点状态、对等节点、交易池查询与 RPC 地址配置的 API",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

LOG_QUEUE_SIZE = 1000


class AppState:
    """管理应用程序的全局状态"""
    def __init__(self):
        self.facade = QueryFacade()
        self.sequencer = ViewSequencer()
        self.log_queue: asyncio.Queue = asyncio.Queue(maxsize=LOG_QUEUE_SIZE)
        self.facade.store.apply_override(RPC_URL_OVERRIDE)

    def push_log(self, message: str):
        # 无人订阅时丢弃最旧的日志
        if self.log_queue.full():
            self.log_queue.get_nowait()
        self.log_queue.put_nowait(message)


state = AppState()

# --- Pydantic 模型 ---

class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None


class EndpointUpdate(BaseModel):
    url: Optional[str] = ""

# --- 错误处理 ---

def _status_code_for(exc: RPCClientError) -> int:
    if isinstance(exc, (InvalidEndpoint, InvalidArgument)):
        return 400
    if isinstance(exc, TransportError) and exc.timeout:
        return 504
    if isinstance(exc, (TransportError, RemoteError, DecodeError)):
        return 502
    return 500


@app.exception_handler(RPCClientError)
async def rpc_error_handler(request: Request, exc: RPCClientError):
    state.push_log(f"[ERROR] {request.url.path}: {exc}")
    body = ApiResponse(success=False, message=str(exc), data={"error": exc.kind})
    return JSONResponse(status_code=_status_code_for(exc), content=body.model_dump())

# --- 视图请求：后发起的请求优先 ---

def _stale_response(view: str, ticket: int) -> ApiResponse:
    return ApiResponse(
        success=False,
        message=f"{view} 的响应已过期，已被更新的请求取代。",
        data={"stale": True, "seq": ticket},
    )


def _finish_view(view: str, ticket: int, message: str, data: Dict[str, Any]) -> ApiResponse:
    if not state.sequencer.is_current(view, ticket):
        return _stale_response(view, ticket)
    return ApiResponse(success=True, message=message, data={**data, "seq": ticket})


def _run_view(view: str, message: str, query: Callable[[], Dict[str, Any]]) -> ApiResponse:
    ticket = state.sequencer.begin(view)
    try:
        data = query()
    except RPCClientError:
        if not state.sequencer.is_current(view, ticket):
            return _stale_response(view, ticket)
        raise
    return _finish_view(view, ticket, message, data)

# --- SSE 日志流 ---

async def log_generator(request: Request):
    while True:
        if await request.is_disconnected():
            break
        log_message = await state.log_queue.get()
        yield f"data: {log_message}\n\n"
        await asyncio.sleep(0.01)

@app.get("/api/logs/stream")
def stream_logs(request: Request):
    return StreamingResponse(log_generator(request), media_type="text/event-stream")

# --- RPC 地址配置 ---

@app.get("/api/rpc/endpoint", response_model=ApiResponse, summary="获取当前 RPC 地址")
async def get_endpoint():
    return ApiResponse(success=True, message="ok", data={"url": state.facade.get_endpoint()})

@app.put("/api/rpc/endpoint", response_model=ApiResponse, summary="设置 RPC 地址")
async def set_endpoint(update: EndpointUpdate):
    url = state.facade.set_endpoint(update.url)
    state.push_log(f"[INFO] RPC 地址已更新: {url}")
    return ApiResponse(success=True, message="RPC 已更新，后续查询将使用该地址。", data={"url": url})

@app.post("/api/rpc/endpoint/reset", response_model=ApiResponse, summary="恢复默认 RPC 地址")
async def reset_endpoint():
    url = state.facade.reset_endpoint()
    state.push_log(f"[INFO] RPC 地址已恢复默认: {url}")
    return ApiResponse(success=True, message=f"已恢复默认地址 ({url})。", data={"url": url})

# --- 节点查询 ---

@app.get("/api/node/status", response_model=ApiResponse, summary="获取节点状态")
def get_node_status():
    return _run_view(
        "status", "节点状态已更新",
        lambda: state.facade.get_node_status().model_dump(by_alias=True),
    )

@app.get("/api/node/peers", response_model=ApiResponse, summary="获取已连接的对等节点")
def get_peers():
    def query():
        peers = state.facade.get_peers()
        return {"peers": [p.model_dump(by_alias=True) for p in peers], "count": len(peers)}
    return _run_view("peers", "对等节点已更新", query)

@app.get("/api/node/overview", response_model=ApiResponse, summary="并发获取节点状态与对等节点")
async def get_overview():
    view = "overview"
    ticket = state.sequencer.begin(view)
    try:
        status, peers = await state.facade.load_overview()
    except RPCClientError:
        if not state.sequencer.is_current(view, ticket):
            return _stale_response(view, ticket)
        raise
    return _finish_view(view, ticket, "概览已更新", {
        "status": status.model_dump(by_alias=True),
        "peers": [p.model_dump(by_alias=True) for p in peers],
    })

@app.get("/api/node/raw", response_model=ApiResponse, summary="获取 /status 原始响应")
def get_raw_node_info(pretty: bool = False):
    return _run_view(
        "debug", "原始响应已获取",
        lambda: {"payload": state.facade.get_raw_node_info(pretty=pretty)},
    )

def _parse_limit(raw: str) -> int:
    """查询参数按字符串接收，非整数时返回统一的 invalid_argument 响应"""
    try:
        return int(raw.strip())
    except ValueError as e:
        raise InvalidArgument(f"limit 必须是正整数，实际为 {raw!r}") from e

@app.get("/api/mempool", response_model=ApiResponse, summary="获取交易池中的未确认交易")
def get_unconfirmed_transactions(limit: str = str(DEFAULT_TX_LIMIT)):
    count = _parse_limit(limit)
    return _run_view(
        "transactions", "交易池已更新",
        lambda: state.facade.get_unconfirmed_transactions(count).model_dump(),
    )

# 挂载前端静态文件
frontend_dist_dir = get_frontend_dist_dir()
if frontend_dist_dir.exists():
    app.mount("/", StaticFiles(directory=str(frontend_dist_dir), html=True), name="frontend")
else:
    logger.warning(f"前端静态文件目录不存在: {frontend_dist_dir}")

if __name__ == "__main__":
    import threading
    import time
    import webbrowser

    import uvicorn

    def open_browser():
        # 等待服务启动（简单等待几秒）
        time.sleep(2)
        webbrowser.open(f"http://{SERVER_HOST}:{SERVER_PORT}")

    # 启动一个线程用于打开浏览器
    threading.Thread(target=open_browser, daemon=True).start()
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT, reload=False)
