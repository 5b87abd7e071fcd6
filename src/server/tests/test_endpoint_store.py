# -*- coding: utf-8 -*-
"""
测试 RPC 地址存储逻辑
"""

import threading
import unittest

from rpc_client.errors import InvalidEndpoint
from service.endpoint_store import EndpointStore

DEFAULT = "http://localhost:26657"


class TestEndpointStore(unittest.TestCase):

    def setUp(self):
        """每个用例使用独立的存储实例"""
        self.store = EndpointStore()

    def test_initial_value_is_default(self):
        self.assertEqual(self.store.get(), DEFAULT)

    def test_set_valid_urls(self):
        """合法地址设置后读取结果一致（去除空白与末尾斜杠）"""
        for url in ("http://otherhost:26657", "https://rpc.example.org", "http://10.0.0.5:26657/rpc"):
            self.assertEqual(self.store.set(url), url)
            self.assertEqual(self.store.get(), url)
        self.assertEqual(self.store.set("  http://node:26657/ \n"), "http://node:26657")
        self.assertEqual(self.store.get(), "http://node:26657")

    def test_blank_resets_to_default(self):
        self.store.set("http://otherhost:26657")
        for blank in ("", "   ", "\t\n", None):
            self.store.set("http://otherhost:26657")
            self.assertEqual(self.store.set(blank), DEFAULT)
            self.assertEqual(self.store.get(), DEFAULT)

    def test_reset(self):
        self.store.set("http://otherhost:26657")
        self.assertEqual(self.store.reset(), DEFAULT)

    def test_invalid_url_keeps_previous_value(self):
        self.store.set("http://otherhost:26657")
        for bad in ("not a url", "localhost:26657", "ftp://host/x", "http://", "/status",
                    "http://h:1/?a=b", "http://h:1#frag", "http://h:1/?"):
            with self.assertRaises(InvalidEndpoint):
                self.store.set(bad)
            self.assertEqual(self.store.get(), "http://otherhost:26657")

    def test_apply_override(self):
        """启动覆盖值非法时保留默认地址，不抛出异常"""
        self.assertEqual(self.store.apply_override("not a url"), DEFAULT)
        self.assertEqual(self.store.apply_override(None), DEFAULT)
        self.assertEqual(self.store.apply_override("http://remote:26657"), "http://remote:26657")

    def test_concurrent_sets_never_tear(self):
        """并发读写时读到的值总是完整的合法地址之一"""
        urls = {f"http://node{i}:26657" for i in range(8)} | {DEFAULT}
        seen = []

        def writer(url):
            for _ in range(200):
                self.store.set(url)

        def reader():
            for _ in range(500):
                seen.append(self.store.get())

        threads = [threading.Thread(target=writer, args=(u,)) for u in urls]
        threads.append(threading.Thread(target=reader))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertTrue(set(seen) <= urls)
        self.assertIn(self.store.get(), urls)


if __name__ == "__main__":
    unittest.main()
