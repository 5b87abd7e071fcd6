# -*- coding: utf-8 -*-
"""
针对后端 API 的测试：
- RPC 地址的读取、设置、非法值与重置
- 节点查询接口返回的数据结构与错误码
- 同一视图的旧请求在新请求发出后被标记为过期

仅测试公开接口：FastAPI 路由，节点 RPC 通过替换 QueryFacade 的客户端隔离。
"""

import pytest
from fastapi.testclient import TestClient

import main as main_mod
from rpc_client import NodeStatus, Peer, RemoteError, TransportError, UnconfirmedTxs
from service.endpoint_store import EndpointStore
from service.query_facade import QueryFacade


class StubClient:
    def __init__(self, base_url, timeout):
        self.base_url = base_url

    def fetch_status(self):
        return NodeStatus(
            moniker="node1", network="plt-1", version="0.1.0",
            latest_block_height=100, earliest_block_height=1, catching_up=False,
        )

    def fetch_peers(self):
        if "otherhost" in self.base_url:
            return []
        return [Peer(id="abc", moniker="peer-1", remote_ip="10.0.0.2")]

    def fetch_unconfirmed_txs(self, limit):
        return UnconfirmedTxs(total=120, txs=["dHg="] * limit)

    def fetch_raw_status(self, pretty=False):
        return '{"result": {}}'


@pytest.fixture
def client(monkeypatch):
    facade = QueryFacade(store=EndpointStore(), client_factory=StubClient)
    monkeypatch.setattr(main_mod.state, "facade", facade)
    return TestClient(main_mod.app)


def test_endpoint_round_trip(client):
    r = client.get("/api/rpc/endpoint")
    assert r.status_code == 200
    assert r.json()["data"]["url"] == "http://localhost:26657"

    r = client.put("/api/rpc/endpoint", json={"url": " http://otherhost:26657/ "})
    assert r.status_code == 200
    assert r.json()["data"]["url"] == "http://otherhost:26657"

    r = client.put("/api/rpc/endpoint", json={"url": "not a url"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["data"]["error"] == "invalid_endpoint"
    assert client.get("/api/rpc/endpoint").json()["data"]["url"] == "http://otherhost:26657"

    r = client.post("/api/rpc/endpoint/reset")
    assert r.json()["data"]["url"] == "http://localhost:26657"

    r = client.put("/api/rpc/endpoint", json={"url": ""})
    assert r.json()["data"]["url"] == "http://localhost:26657"


def test_node_status(client):
    r = client.get("/api/node/status")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["moniker"] == "node1"
    assert data["network"] == "plt-1"
    assert data["latestBlockHeight"] == 100
    assert data["earliestBlockHeight"] == 1
    assert data["catchingUp"] is False


def test_peers_follow_endpoint_change(client):
    assert client.get("/api/node/peers").json()["data"]["count"] == 1
    client.put("/api/rpc/endpoint", json={"url": "http://otherhost:26657"})
    r = client.get("/api/node/peers")
    assert r.status_code == 200
    assert r.json()["data"]["peers"] == []


def test_overview(client):
    r = client.get("/api/node/overview")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["status"]["moniker"] == "node1"
    assert data["peers"][0]["remoteIp"] == "10.0.0.2"


def test_mempool(client):
    r = client.get("/api/mempool", params={"limit": 50})
    data = r.json()["data"]
    assert data["total"] == 120
    assert len(data["txs"]) == 50

    r = client.get("/api/mempool", params={"limit": 0})
    assert r.status_code == 400
    assert r.json()["data"]["error"] == "invalid_argument"

    for bad in ("abc", "2.5", ""):
        r = client.get("/api/mempool", params={"limit": bad})
        assert r.status_code == 400
        body = r.json()
        assert body["success"] is False
        assert body["data"]["error"] == "invalid_argument"


def test_raw_node_info(client):
    r = client.get("/api/node/raw", params={"pretty": True})
    assert r.json()["data"]["payload"] == '{"result": {}}'


@pytest.mark.parametrize("error, code, kind", [
    (TransportError("refused"), 502, "transport_error"),
    (TransportError("timed out", timeout=True), 504, "transport_error"),
    (RemoteError("rpc error", status_code=500), 502, "remote_error"),
])
def test_query_errors_map_to_status_codes(client, monkeypatch, error, code, kind):
    def boom():
        raise error

    monkeypatch.setattr(main_mod.state.facade, "get_node_status", boom)
    r = client.get("/api/node/status")
    assert r.status_code == code
    assert r.json()["data"]["error"] == kind


def test_stale_response_is_discarded(client, monkeypatch):
    facade = main_mod.state.facade
    original = facade.get_node_status

    def slow_status():
        # 模拟请求进行中用户再次点击刷新
        main_mod.state.sequencer.begin("status")
        return original()

    monkeypatch.setattr(facade, "get_node_status", slow_status)
    r = client.get("/api/node/status")
    body = r.json()
    assert body["success"] is False
    assert body["data"]["stale"] is True


def test_invalid_startup_override_keeps_default(monkeypatch):
    monkeypatch.setattr(main_mod, "RPC_URL_OVERRIDE", "not a url")
    app_state = main_mod.AppState()
    assert app_state.facade.get_endpoint() == "http://localhost:26657"

    monkeypatch.setattr(main_mod, "RPC_URL_OVERRIDE", "http://remote:26657")
    assert main_mod.AppState().facade.get_endpoint() == "http://remote:26657"
