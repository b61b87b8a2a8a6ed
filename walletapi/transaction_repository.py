"""Persistent storage and cache access for transactions."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from .db import transactions_table
from .models import Transaction, TransactionStatus


def _aware(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class TransactionRepository:
    """Transaction rows in the relational database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create(self, transaction: Transaction) -> Transaction:
        """Insert a transaction and return it."""
        with self.engine.begin() as conn:
            conn.execute(
                insert(transactions_table).values(
                    id=transaction.id,
                    status=TransactionStatus(transaction.status).value,
                    sender=transaction.sender,
                    receiver=transaction.receiver,
                    amount=transaction.amount,
                    created_at=transaction.created_at,
                )
            )
        return transaction

    def get_latest(self, count: int) -> list[Transaction]:
        """Return up to ``count`` newest transactions; a negative count means all."""
        query = select(transactions_table).order_by(transactions_table.c.created_at.desc())
        if count >= 0:
            query = query.limit(count)
        with self.engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            Transaction(
                id=row.id,
                status=TransactionStatus(row.status),
                sender=row.sender,
                receiver=row.receiver,
                amount=float(row.amount),
                created_at=_aware(row.created_at),
            )
            for row in rows
        ]


class TransactionRedisRepository:
    """Transactions cached as JSON documents in Redis."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_transaction(self, key: str) -> Transaction:
        """Return the cached transaction under ``key``; raise KeyError on a miss."""
        raw = self.client.get(key)
        if raw is None:
            raise KeyError(key)
        return Transaction.from_dict(json.loads(raw))

    def set_transaction(self, key: str, seconds: int, transaction: Transaction) -> None:
        """Cache ``transaction`` under ``key`` for ``seconds`` (no expiry when not positive)."""
        payload = json.dumps(transaction.to_dict())
        self.client.set(key, payload, ex=seconds if seconds > 0 else None)

    def delete_transaction(self, key: str) -> None:
        """Remove the cached entry under ``key``."""
        self.client.delete(key)