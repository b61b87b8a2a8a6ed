"""Wallet use cases with a read-through cache."""

from __future__ import annotations

import logging

import redis

from .models import Wallet
from .wallet_repository import WalletRedisRepository, WalletRepository

BASE_PREFIX = "api-wallet:"
CACHE_DURATION = 3600

_CACHE_ERRORS = (KeyError, ValueError, TypeError, redis.RedisError)


def cache_key(wallet_id: str) -> str:
    """Return the cache key for a wallet id."""
    return f"{BASE_PREFIX}:{wallet_id}"


class WalletService:
    """Look up and create wallets, caching lookups."""

    def __init__(
        self,
        repository: WalletRepository,
        cache: WalletRedisRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self.repository = repository
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    def create(self, wallet: Wallet) -> Wallet:
        """Store a new wallet."""
        return self.repository.create(wallet)

    def get_wallet_by_id(self, wallet_id: str) -> Wallet:
        """Return a wallet from the cache, falling back to the repository."""
        key = cache_key(wallet_id)
        try:
            return self.cache.get_wallet(key)
        except _CACHE_ERRORS as exc:
            self.logger.error("WalletService.get_wallet_by_id cache read: %r", exc)

        wallet = self.repository.get_wallet_by_id(wallet_id)

        try:
            self.cache.set_wallet(key, CACHE_DURATION, wallet)
        except _CACHE_ERRORS as exc:
            self.logger.error("WalletService.get_wallet_by_id cache write: %r", exc)
        return wallet