import json
from datetime import datetime, timedelta, timezone

import pytest

from walletapi.models import Transaction, TransactionStatus, Wallet


@pytest.mark.parametrize("text", ["pending", "running", "completed", "failed"])
def test_status_text_survives_serialisation(text):
    trans = Transaction(id="t", status=TransactionStatus(text))
    assert trans.to_dict()["Status"] == text
    assert Transaction.from_dict({"ID": "t", "Status": text}).status is TransactionStatus(text)


def test_transaction_defaults():
    trans = Transaction(id="t1")
    assert trans.status is TransactionStatus.PENDING
    assert trans.created_at.utcoffset() == timedelta(0)


def test_transaction_to_dict_keys_and_status():
    trans = Transaction(
        id="t1",
        status=TransactionStatus.COMPLETED,
        sender="a",
        receiver="b",
        amount=12.5,
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    data = trans.to_dict()
    assert set(data) == {"ID", "Status", "Sender", "Receiver", "Amount", "CreatedAt"}
    assert data["Status"] == "completed"
    assert data["CreatedAt"].endswith("Z")


def test_transaction_round_trip_through_json():
    trans = Transaction(
        id="t2",
        status=TransactionStatus.FAILED,
        sender="s",
        receiver="r",
        amount=3.25,
        created_at=datetime(2023, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc),
    )
    restored = Transaction.from_dict(json.loads(json.dumps(trans.to_dict())))
    assert restored == trans


def test_from_dict_accepts_nanoseconds_and_zulu():
    trans = Transaction.from_dict(
        {"ID": "x", "Status": "running", "CreatedAt": "2024-01-02T03:04:05.123456789Z"}
    )
    assert trans.created_at == datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
    assert trans.status is TransactionStatus.RUNNING


def test_from_dict_keeps_offset():
    trans = Transaction.from_dict({"ID": "x", "CreatedAt": "2024-01-02T03:04:05+03:00"})
    assert trans.created_at.utcoffset() == timedelta(hours=3)


def test_from_dict_invalid_status():
    with pytest.raises(ValueError):
        Transaction.from_dict({"ID": "x", "Status": "bogus"})


def test_from_dict_invalid_time():
    with pytest.raises(ValueError):
        Transaction.from_dict({"ID": "x", "CreatedAt": "yesterday"})


def test_wallet_round_trip():
    wallet = Wallet(id="w1", amount=100)
    data = wallet.to_dict()
    assert data == {"ID": "w1", "Amount": 100.0}
    assert Wallet.from_dict(data) == wallet


def test_wallet_from_dict_defaults():
    assert Wallet.from_dict({}) == Wallet(id="", amount=0.0)