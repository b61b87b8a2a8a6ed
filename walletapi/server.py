"""HTTP server wiring and the command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, make_server

import yaml
from flask import Flask

from .api import create_app
from .config import Config, get_config
from .db import init_db, new_redis_client
from .logsetup import TRACE, new_logger
from .transaction_repository import TransactionRepository
from .transaction_service import TransactionService
from .wallet_repository import WalletRedisRepository, WalletRepository
from .wallet_service import WalletService

DEFAULT_PORT = 8080
REQUEST_TIMEOUT = 15
SHUTDOWN_TIMEOUT = 5

_access_log = logging.getLogger(__name__ + ".access")


class _RequestHandler(WSGIRequestHandler):
    timeout = REQUEST_TIMEOUT

    def log_message(self, format: str, *args: Any) -> None:
        _access_log.debug("%s - %s", self.address_string(), format % args)


class Server:
    """Runs the API until interrupted or until ``shutdown_event`` is set."""

    def __init__(
        self,
        config: Config,
        engine: Any,
        logger: logging.Logger | None = None,
        redis_client: Any = None,
    ) -> None:
        self.config = config
        self.engine = engine
        self.logger = logger or logging.getLogger(__name__)
        self.redis_client = redis_client
        self.host = ""
        self.port = DEFAULT_PORT
        self.shutdown_event = threading.Event()
        self.httpd = None

    def build_app(self) -> Flask:
        """Wire repositories and services into the Flask application."""
        if self.engine is None:
            self.logger.info("database connection is not initialized")
        transactions = TransactionRepository(self.engine)
        wallets = WalletRepository(self.engine)
        wallet_cache = WalletRedisRepository(self.redis_client)

        transaction_service = TransactionService(transactions, wallets, self.logger)
        wallet_service = WalletService(wallets, wallet_cache, self.logger)
        return create_app(transaction_service, wallet_service, self.logger)

    def run(self) -> None:
        """Serve requests until Ctrl-C or ``shutdown_event``, then shut down."""
        self.logger.info("Try server starting")
        app = self.build_app()
        httpd = make_server(self.host, self.port, app, handler_class=_RequestHandler)
        self.httpd = httpd

        worker = threading.Thread(target=httpd.serve_forever, name="http-server", daemon=True)
        self.logger.info("Server is listening on PORT: %d", httpd.server_port)
        worker.start()
        try:
            while not self.shutdown_event.wait(0.2):
                pass
        except KeyboardInterrupt:
            pass

        self.logger.info("Shutting down server...")
        httpd.shutdown()
        httpd.server_close()
        worker.join(timeout=SHUTDOWN_TIMEOUT)


def main(argv: list[str] | None = None) -> int:
    """Start the wallet API; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="walletapi", description="Run the wallet transaction HTTP API."
    )
    parser.parse_args(argv)

    try:
        config = get_config()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"could not load configuration: {exc}", file=sys.stderr)
        return 1

    try:
        logger = new_logger("logs", TRACE)
    except OSError as exc:
        print(f"could not set up logging: {exc}", file=sys.stderr)
        return 1

    try:
        engine = init_db()
    except Exception as exc:  # any failure here means the service cannot start
        logger.info("Could not start a DB")
        logger.critical("%s", exc)
        return 1

    redis_client = new_redis_client(config)
    try:
        Server(config, engine, logger, redis_client).run()
    except OSError as exc:
        logger.critical("Error starting Server: %s", exc)
        return 1
    finally:
        redis_client.close()
    return 0