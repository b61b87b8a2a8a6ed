"""Domain models for wallets and transactions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping

_TIME_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|[+-]\d{2}:\d{2})?$"
)


class TransactionStatus(str, Enum):
    """Lifecycle state of a transaction."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(value: datetime) -> str:
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text[:-6] + "Z"
    return text


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    result = match["base"]
    if match["frac"]:
        result += "." + (match["frac"] + "000000")[:6]
    tz = match["tz"]
    if tz:
        result += "+00:00" if tz == "Z" else tz
    return datetime.fromisoformat(result)


@dataclass
class Transaction:
    """A money transfer between two wallets."""

    id: str
    status: TransactionStatus = TransactionStatus.PENDING
    sender: str = ""
    receiver: str = ""
    amount: float = 0.0
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Status": TransactionStatus(self.status).value,
            "Sender": self.sender,
            "Receiver": self.receiver,
            "Amount": float(self.amount),
            "CreatedAt": _format_time(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        created = data.get("CreatedAt")
        return cls(
            id=data.get("ID", ""),
            status=TransactionStatus(data.get("Status", TransactionStatus.PENDING.value)),
            sender=data.get("Sender", ""),
            receiver=data.get("Receiver", ""),
            amount=float(data.get("Amount", 0.0)),
            created_at=_parse_time(created) if created else _now(),
        )


@dataclass
class Wallet:
    """A wallet holding a balance."""

    id: str
    amount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Amount": float(self.amount)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Wallet":
        return cls(id=data.get("ID", ""), amount=float(data.get("Amount", 0.0)))