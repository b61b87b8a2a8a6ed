"""HTTP routes for transfers, transaction history and wallet balances."""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from .models import Transaction, TransactionStatus
from .transaction_service import TransactionService
from .wallet_service import WalletService

API_PREFIX = "/api"
WALLET_PREFIX = f"{API_PREFIX}/wallet"

MSG_COUNT_NOT_INT = "Param shoud be int"
MSG_LIST_FAILED = "Could not get transactions list"
MSG_WALLET_MISSING = "This id is not exists"

_INT_RE = re.compile(r"[+-]?\d+")
_IGNORED_METHODS = frozenset({"HEAD", "OPTIONS"})


@dataclass
class CreateTransactionRequest:
    """Body of a transfer request."""

    sender: str = ""
    receiver: str = ""
    amount: float = 0.0


def _field(payload: Mapping[Any, Any], name: str) -> Any:
    if name in payload:
        return payload[name]
    wanted = name.lower()
    for key, value in payload.items():
        if isinstance(key, str) and key.lower() == wanted:
            return value
    return None


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def parse_create_request(payload: Any) -> CreateTransactionRequest:
    """Read ``From``, ``To`` and ``Amount`` from a decoded JSON body.

    Keys match case-insensitively; missing or ill-typed values fall back to
    empty defaults rather than failing.
    """
    if not isinstance(payload, Mapping):
        return CreateTransactionRequest()
    return CreateTransactionRequest(
        sender=_as_text(_field(payload, "From")),
        receiver=_as_text(_field(payload, "To")),
        amount=_as_amount(_field(payload, "Amount")),
    )


def _parse_count(text: str | None) -> int | None:
    if text is None or not _INT_RE.fullmatch(text):
        return None
    return int(text)


def create_app(
    transaction_service: TransactionService,
    wallet_service: WalletService,
    logger: logging.Logger | None = None,
) -> Flask:
    """Build the Flask application with all API routes registered."""
    log = logger or logging.getLogger(__name__)
    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False

    log.info("Create transaction")

    @app.post(f"{API_PREFIX}/send")
    def send_transaction():
        body = parse_create_request(request.get_json(silent=True))
        transaction = Transaction(
            id=str(uuid.uuid4()),
            status=TransactionStatus.PENDING,
            sender=body.sender,
            receiver=body.receiver,
            amount=body.amount,
        )
        try:
            created = transaction_service.create(transaction)
        except (LookupError, ValueError, SQLAlchemyError) as exc:
            log.error("transfer failed: %r", exc)
            return jsonify({"message": str(getattr(exc, "message", exc))}), 400
        return jsonify(created.to_dict()), 201

    log.info("Get transacion by count")

    @app.get(f"{API_PREFIX}/transactions")
    def list_transactions():
        count = _parse_count(request.args.get("count"))
        if count is None:
            return jsonify(MSG_COUNT_NOT_INT), 404
        try:
            transactions = transaction_service.get_latest(count)
        except (ValueError, SQLAlchemyError) as exc:
            log.error("listing transactions failed: %r", exc)
            return jsonify(MSG_LIST_FAILED), 404
        return jsonify([t.to_dict() for t in transactions]), 200

    @app.get(f"{WALLET_PREFIX}/<wallet_id>/balance")
    def wallet_balance(wallet_id: str):
        try:
            wallet = wallet_service.get_wallet_by_id(wallet_id)
        except (LookupError, SQLAlchemyError) as exc:
            log.error("wallet lookup failed: %r", exc)
            return jsonify(MSG_WALLET_MISSING), 404
        return jsonify(wallet.to_dict()), 200

    for rule in app.url_map.iter_rules():
        for method in sorted((rule.methods or set()) - _IGNORED_METHODS):
            log.info("Method: %s, Path: %s", method, rule.rule)

    return app