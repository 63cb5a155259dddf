# walletsys

The core of a small wallet service. It registers users and issues signed
tokens. It reads and tops up balances and transfers money between users.
It also ranks a user's latest transactions and the users they pay.

Storage is not part of the package. The use cases work with any auth and
balance domain objects that provide the methods they call. The package
also has infrastructure pieces that such domains and a web layer can use:

- `walletsys.database.Database` is a thin wrapper over a DB-API 2.0 connection. It returns rows as dicts.
- `walletsys.redis_store.RedisStore` is a Redis string store with a read-through JSON `fetch`.
- `walletsys.cache.LRUCache` is an in-process, thread-safe LRU cache with an expiry time on each entry.
- `walletsys.singleflight.SingleFlight` makes concurrent calls that share a key run the function only once.
- `walletsys.token.TokenService` creates and validates RS256 tokens.
- `walletsys.response` has `write_json_response`, `write_error_response` and a `ResponseRecorder`.
- `walletsys.authcontext` holds the authenticated user of the current context: `set_auth` and `get_auth`.
- `walletsys.log` is a logging facade that writes to stderr and to log files split by level.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Putting it together

```python
from walletsys import log
from walletsys.token import TokenService
from walletsys.usecase.service import Usecases
from walletsys.usecase.auth import RegisterUserRequest
from walletsys.usecase.balance import TopupBalanceRequest, TransferBalanceRequest

log.init("./log/wallet-system-error.log", "./log/wallet-system-info.log")

token_service = TokenService.from_env()  # reads the PRIVATE_KEY and PUBLIC_KEY files
usecases = Usecases(auth_domain, balance_domain, token_service)

registered = usecases.auth.register_user(RegisterUserRequest(username="alice"))
usecases.balance.topup_balance(TopupBalanceRequest(user_id="user-1", amount=100000))
usecases.balance.transfer_balance(
    TransferBalanceRequest(user_id="user-1", to_username="bob", amount=25000)
)
```

### What the domains must provide

Each method below raises an exception when it fails. A lookup that finds no
record raises `walletsys.usecase.errors.RecordNotFound`.

- The auth domain provides `get_user_by_username(username)`, `get_user_by_id(user_id)` and `insert_user(user)`.
- The balance domain provides these methods:
  - `get_balance_by_user_id(user_id)`
  - `grant_balance_by_user_id(grant)`
  - `disburse_balance(request)`
  - `get_history_summary_by_user_id_and_type(user_id, history_type)`
  - `get_latest_history_by_user_id(user_id)`

### Results and errors

A successful call returns a frozen dataclass. Its `code` field holds the
success status:

- `register_user` returns 201 and a token that is valid for one hour.
- `read_balance_by_user_id` returns 200. A user with no balance has a balance of 0.
- `topup_balance` and `transfer_balance` return 204.
- `list_overall_top_transacting_users_by_value` and `top_transactions_for_user` return 200.
  - `top_transactions_for_user` lists transactions with the largest amount first.

A failed use case raises `UsecaseError`. Its `code` attribute holds the
HTTP status that should be sent back:

- 409 when the username is already taken.
- 502 when registration cannot read or write the user, or cannot create the token.
- 400 when the top-up amount is outside 0 to 10,000,000, when the balance is too low, or when the balance domain fails.
- 404 when the user who should receive a transfer cannot be found.
- 401 when a transaction ranking cannot be built.

## Configuration

`TokenService.from_env()` reads the PEM files named by `PRIVATE_KEY` and
`PUBLIC_KEY`. `RedisStore.from_env()` connects to `REDIS_ADDR` (`host:port`)
with `REDIS_PASSWORD` and pings the server. `Database` takes a connection
that you have already opened.

## What the package does not do

It has no HTTP server, no routes and no command to start a service. It has
no auth or balance domain implementations and no database schema: you
supply those objects yourself.

## Running the tests

```
pytest
```