"""Database schema, connection setup, seeding and the Redis client."""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Any, Mapping

import redis
from dotenv import load_dotenv
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    MetaData,
    String,
    Table,
    create_engine,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .models import Wallet

NUMBER_OF_WALLETS = 10
INITIAL_WALLET_AMOUNT = 100.0
REDIS_HOST = "localhost"
REDIS_PORT = 6379

_log = logging.getLogger(__name__)

metadata = MetaData()

wallets_table = Table(
    "wallets",
    metadata,
    Column("id", String, primary_key=True),
    Column("amount", Float, nullable=False, default=0.0),
)

transactions_table = Table(
    "transactions",
    metadata,
    Column("id", String, primary_key=True),
    Column("status", String(16), nullable=False),
    Column("sender", String, nullable=False),
    Column("receiver", String, nullable=False),
    Column("amount", Float, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

_DSN_KEYS = (
    ("host", "DB_HOST"),
    ("port", "DB_PORT"),
    ("user", "DB_USER"),
    ("password", "DB_PASSWORD"),
    ("dbname", "DB_NAME"),
    ("sslmode", "SSL_MODE"),
)


def build_dsn(env: Mapping[str, str]) -> str:
    """Build a PostgreSQL key=value connection string from environment values."""
    return " ".join(f"{name}={env.get(key, '')}" for name, key in _DSN_KEYS)


def create_schema(engine: Engine) -> None:
    """Create the wallets and transactions tables if they are missing."""
    metadata.create_all(engine)


def generate_wallets(engine: Engine, count: int = NUMBER_OF_WALLETS) -> list[Wallet]:
    """Seed ``count`` wallets when the wallets table is empty; return those created."""
    try:
        with engine.connect() as conn:
            existing = conn.execute(select(func.count()).select_from(wallets_table)).scalar_one()
    except SQLAlchemyError:
        _log.warning("Could not generate %d wallets for db", count)
        return []

    if existing:
        _log.info("Wallets were created earlier")
        return []

    created: list[Wallet] = []
    for _ in range(count):
        wallet = Wallet(id=str(uuid.uuid4()), amount=INITIAL_WALLET_AMOUNT)
        _log.info("%s", wallet)
        try:
            with engine.begin() as conn:
                conn.execute(insert(wallets_table).values(id=wallet.id, amount=wallet.amount))
        except SQLAlchemyError:
            _log.warning("Could not create wallet %s", wallet.id)
            break
        created.append(wallet)
    return created


def init_db(env_file: str | Path = ".env") -> Engine:
    """Load the environment file, connect to PostgreSQL, migrate and seed."""
    path = Path(env_file)
    if not path.is_file():
        raise FileNotFoundError(f"environment file not found: {path}")
    load_dotenv(path)

    engine = create_engine(
        "postgresql+psycopg2://", connect_args={"dsn": build_dsn(os.environ)}
    )
    create_schema(engine)
    generate_wallets(engine)
    return engine


def new_redis_client(config: Any = None) -> redis.Redis:
    """Return a Redis client for the local server on the default port."""
    return redis.Redis(host=REDIS_HOST, port=REDIS_PORT)