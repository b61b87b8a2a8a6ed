"""Transfer money between wallets and list recent transactions."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from .models import Transaction, TransactionStatus
from .transaction_repository import TransactionRepository
from .wallet_repository import WalletRepository


class InsufficientFundsError(ValueError):
    """Raised when the sender's balance is below the transfer amount."""

    status_code = 400

    def __init__(self, message: str = "Insufficient funds") -> None:
        super().__init__(message)
        self.message = message


class TransactionService:
    """Carry out transfers and record them."""

    def __init__(
        self,
        transactions: TransactionRepository,
        wallets: WalletRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self.transactions = transactions
        self.wallets = wallets
        self.logger = logger or logging.getLogger(__name__)

    def create(self, transaction: Transaction) -> Transaction:
        """Move the amount from sender to receiver and store the transaction.

        Unknown wallets and insufficient funds raise; a failed balance update
        stores the transaction with status ``failed``.
        """
        sender = self.wallets.get_wallet_by_id(transaction.sender)
        receiver = self.wallets.get_wallet_by_id(transaction.receiver)

        if sender.amount < transaction.amount:
            raise InsufficientFundsError()

        for wallet, new_amount in (
            (sender, sender.amount - transaction.amount),
            (receiver, receiver.amount + transaction.amount),
        ):
            try:
                self.wallets.update_amount(wallet, new_amount)
            except SQLAlchemyError as exc:
                self.logger.error("balance update of wallet %s failed: %r", wallet.id, exc)
                transaction.status = TransactionStatus.FAILED
                return self.transactions.create(transaction)

        transaction.status = TransactionStatus.COMPLETED
        return self.transactions.create(transaction)

    def get_latest(self, count: int) -> list[Transaction]:
        """Return up to ``count`` newest transactions."""
        return self.transactions.get_latest(count)