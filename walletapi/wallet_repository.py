"""Persistent storage and cache access for wallets."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from .db import wallets_table
from .models import Wallet


class WalletNotFoundError(LookupError):
    """Raised when no wallet has the requested id."""

    def __init__(self, wallet_id: str) -> None:
        super().__init__(f"wallet not found: {wallet_id}")
        self.wallet_id = wallet_id


class WalletRepository:
    """Wallet rows in the relational database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create(self, wallet: Wallet) -> Wallet:
        """Insert a wallet and return it."""
        with self.engine.begin() as conn:
            conn.execute(insert(wallets_table).values(id=wallet.id, amount=wallet.amount))
        return wallet

    def get_wallet_by_id(self, wallet_id: str) -> Wallet:
        """Return the wallet with ``wallet_id``; raise WalletNotFoundError if absent."""
        query = select(wallets_table.c.id, wallets_table.c.amount).where(
            wallets_table.c.id == wallet_id
        )
        with self.engine.connect() as conn:
            row = conn.execute(query).first()
        if row is None:
            raise WalletNotFoundError(wallet_id)
        return Wallet(id=row.id, amount=float(row.amount))

    def update_amount(self, wallet: Wallet, new_amount: float) -> None:
        """Set the stored balance of ``wallet`` to ``new_amount``."""
        with self.engine.begin() as conn:
            conn.execute(
                update(wallets_table)
                .where(wallets_table.c.id == wallet.id)
                .values(amount=new_amount)
            )


class WalletRedisRepository:
    """Wallets cached as JSON documents in Redis."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_wallet(self, key: str) -> Wallet:
        """Return the cached wallet under ``key``; raise KeyError on a miss."""
        raw = self.client.get(key)
        if raw is None:
            raise KeyError(key)
        return Wallet.from_dict(json.loads(raw))

    def set_wallet(self, key: str, seconds: int, wallet: Wallet) -> None:
        """Cache ``wallet`` under ``key`` for ``seconds`` (no expiry when not positive)."""
        payload = json.dumps(wallet.to_dict())
        self.client.set(key, payload, ex=seconds if seconds > 0 else None)

    def delete_wallet(self, key: str) -> None:
        """Remove the cached entry under ``key``."""
        self.client.delete(key)