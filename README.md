# walletapi

`walletapi` is a small HTTP service that keeps a set of wallets and moves
money between them. Wallets and transactions are stored in PostgreSQL
through SQLAlchemy; wallet lookups are cached in Redis for an hour.

## Installing

```
pip install .
```

The database engine is created with SQLAlchemy's `postgresql+psycopg2`
dialect. The `psycopg2` driver is not installed with the package; install it
yourself before running the service against a real database.

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuring

When the `walletapi` command starts, it reads, relative to the working
directory:

**`config/config.yml`**, loaded by `walletapi.config.get_config()`:

```yaml
is_debug: true
listen:
  type: port
  bind_ip: 127.0.0.1
  port: "8080"
```

The file must be a YAML mapping; `is_debug`, when present, must be a boolean.
A missing or malformed file makes the command exit with status 1. The values
are loaded into `Config` and `ListenConfig`, but the server does not use the
`listen` settings (see below).

**`.env`**, with the database connection, loaded by `walletapi.db.init_db()`:

```
DB_HOST=localhost
DB_PORT=5432
DB_USER=user
DB_PASSWORD=password
DB_NAME=wallets
SSL_MODE=disable
```

These values are joined into a key=value connection string by
`walletapi.db.build_dsn()`. If `.env` is missing, the command logs
"Could not start a DB" and exits with status 1.

On start the `wallets` and `transactions` tables are created if missing. When
the wallet table is empty, ten wallets are created, each holding a balance of
100, and each is written to the log.

Redis is expected on `localhost` at port 6379.

Logs at every level (including a `TRACE` level below `DEBUG`) go both to
standard output and to `logs/all.log`, which is created if needed and
appended to.

## Running

```
walletapi
```

The server listens on port 8080 on all interfaces and shuts down cleanly on
Ctrl+C. The command takes no options other than `--help`.

## HTTP API

### Send money

`POST /api/send`

```json
{"From": "<sender wallet id>", "To": "<receiver wallet id>", "Amount": 25.0}
```

Keys are matched without regard to case; a missing or ill-typed value is
taken as an empty string or an amount of 0.

Replies `201 Created` with the recorded transaction:

```json
{"ID": "...", "Status": "completed", "Sender": "...", "Receiver": "...",
 "Amount": 25.0, "CreatedAt": "2024-01-01T12:00:00.000000Z"}
```

`Status` is `completed`, or `failed` if a balance update raised a database
error. The sender is debited before the receiver is credited, so a failure
in the second update leaves the sender debited.

Replies `400 Bad Request` with `{"message": "..."}` if either wallet does not
exist, the sender's balance is below the amount (`"Insufficient funds"`), or
the database reports an error.

### Latest transactions

`GET /api/transactions?count=N`

Replies `200 OK` with up to `N` transactions, newest first; a negative `N`
returns all of them. Replies `404 Not Found` with `"Param shoud be int"` if
`count` is missing or not an integer, and with
`"Could not get transactions list"` if the query fails.

### Wallet balance

`GET /api/wallet/<wallet_id>/balance`

Replies `200 OK` with `{"ID": ..., "Amount": ...}`, or `404 Not Found` with
`"This id is not exists"` if there is no such wallet. The wallet is read
from Redis under the key `api-wallet::<wallet_id>` when cached, otherwise
from the database and then cached for 3600 seconds. Cache errors are logged
and do not fail the request.

## Using it from Python

The pieces can be put together by hand, for instance in tests:

```python
from walletapi.api import create_app
from walletapi.transaction_repository import TransactionRepository
from walletapi.transaction_service import TransactionService
from walletapi.wallet_repository import WalletRedisRepository, WalletRepository
from walletapi.wallet_service import WalletService

wallets = WalletRepository(engine)
transaction_service = TransactionService(TransactionRepository(engine), wallets, logger)
wallet_service = WalletService(wallets, WalletRedisRepository(redis_client), logger)
app = create_app(transaction_service, wallet_service, logger)
```

`walletapi.server.Server(config, engine, logger, redis_client)` does the same
wiring in `build_app()`; `run()` serves until Ctrl+C or until its
`shutdown_event` is set.

Other building blocks:

- `walletapi.models`: `Wallet`, `Transaction` and `TransactionStatus`, with
  `to_dict()` / `from_dict()` for the JSON form used by the API and the cache.
- `walletapi.db`: `create_schema()`, `generate_wallets()`, `init_db()` and
  `new_redis_client()`.
- `walletapi.transaction_repository.TransactionRedisRepository`: caches
  transactions as JSON in Redis; the server does not use it.
- `walletapi.logsetup.new_logger(log_dir, level)`: the file-and-stdout logger.

## What it does not do

- There is no HTTP route for creating wallets; new wallets come only from the
  first-start seeding or from `WalletService.create()` / `WalletRepository.create()`.
- The `listen` section of the configuration is read but not applied: the
  address and port are fixed, and the Redis address is fixed as well.
- There is no authentication of any kind.