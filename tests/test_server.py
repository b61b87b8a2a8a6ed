import json
import logging
import threading
import time
import urllib.request

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from walletapi.config import Config, get_config
from walletapi.db import create_schema
from walletapi.models import Wallet
from walletapi.server import Server, main
from walletapi.wallet_repository import WalletRepository


class FakeRedis:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value

    def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    create_schema(eng)
    WalletRepository(eng).create(Wallet(id="a", amount=100.0))
    return eng


def test_build_app_serves_wallet(engine):
    server = Server(Config(), engine, logging.getLogger("test.server"), FakeRedis())
    client = server.build_app().test_client()
    resp = client.get("/api/wallet/a/balance")
    assert resp.status_code == 200
    assert resp.get_json() == {"ID": "a", "Amount": 100.0}


def test_build_app_without_engine_logs(caplog):
    caplog.set_level(logging.INFO, logger="test.server")
    server = Server(Config(), None, logging.getLogger("test.server"), FakeRedis())
    server.build_app()
    assert "database connection is not initialized" in caplog.messages


def test_run_serves_until_shutdown(engine, caplog):
    caplog.set_level(logging.INFO, logger="test.server")
    server = Server(Config(), engine, logging.getLogger("test.server"), FakeRedis())
    server.host = "127.0.0.1"
    server.port = 0
    worker = threading.Thread(target=server.run, daemon=True)
    worker.start()
    try:
        deadline = time.monotonic() + 10
        while server.httpd is None and time.monotonic() < deadline:
            time.sleep(0.01)
        port = server.httpd.server_port
        url = f"http://127.0.0.1:{port}/api/wallet/a/balance"
        with urllib.request.urlopen(url, timeout=5) as resp:
            status = resp.status
            body = json.loads(resp.read())
    finally:
        server.shutdown_event.set()
        worker.join(timeout=10)
    assert status == 200
    assert body == {"ID": "a", "Amount": 100.0}
    assert not worker.is_alive()
    assert "Try server starting" in caplog.messages
    assert "Shutting down server..." in caplog.messages


def test_main_without_config_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()
    try:
        assert main([]) == 1
    finally:
        get_config.cache_clear()


def test_main_without_env_file_fails_and_logs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yml").write_text(
        "is_debug: true\nlisten:\n  port: '8080'\n", encoding="utf-8"
    )
    get_config.cache_clear()
    try:
        assert main([]) == 1
    finally:
        get_config.cache_clear()
        for handler in list(logging.getLogger("walletapi").handlers):
            handler.flush()
    log_text = (tmp_path / "logs" / "all.log").read_text(encoding="utf-8")
    assert "Could not start a DB" in log_text