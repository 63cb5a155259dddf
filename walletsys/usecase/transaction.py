"""Rankings of a user's transactions and of the users they transact with."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from http import HTTPStatus
from typing import Iterable

from walletsys import log
from walletsys.singleflight import SingleFlight
from walletsys.usecase.errors import UsecaseError

SINGLE_FLIGHT_KEY_TOP_TRANSACTING_USERS = (
    "sf:usecase:transaction:ListOverallTopTransactingUsersByValue:user_id:{}"
)
SINGLE_FLIGHT_KEY_TOP_TRANSACTIONS_FOR_USER = (
    "sf:usecase:transaction:TopTransactionsForUser:user_id:{}"
)

HISTORY_TYPE_DEBIT = 2
MAX_CONCURRENT_LOOKUPS = 5


@dataclass(frozen=True)
class ListOverallTopTransactingUsersByValueRequest:
    user_id: str


@dataclass(frozen=True)
class TopTransactingUser:
    username: str
    transacted_value: float


@dataclass(frozen=True)
class ListOverallTopTransactingUsersByValueResponse:
    code: int
    data: tuple[TopTransactingUser, ...] = ()


@dataclass(frozen=True)
class TopTransactionsForUserRequest:
    user_id: str


@dataclass(frozen=True)
class TopTransaction:
    username: str
    amount: float


@dataclass(frozen=True)
class TopTransactionsForUserResponse:
    code: int
    data: tuple[TopTransaction, ...] = ()


def _resolve_usernames(auth, target_user_ids: Iterable[str], label: str) -> list[str]:
    """Look up the usernames of ``target_user_ids`` concurrently, keeping order.

    Every lookup runs; if any of them fails the whole resolution fails.
    """
    with ThreadPoolExecutor(max_workers=MAX_CONCURRENT_LOOKUPS) as pool:
        futures = [pool.submit(auth.get_user_by_id, target) for target in target_user_ids]

    usernames: list[str] = []
    failed = False
    for future in futures:
        exc = future.exception()
        if exc is not None:
            log.errorln(label, exc)
            failed = True
        else:
            usernames.append(future.result().username)

    if failed:
        raise UsecaseError(HTTPStatus.UNAUTHORIZED, "goroutine error")
    return usernames


class TransactionUsecase:
    """Transaction rankings over an auth domain and a balance domain.

    The balance domain provides ``get_history_summary_by_user_id_and_type(user_id,
    history_type)`` and ``get_latest_history_by_user_id(user_id)``, both returning
    records with ``target_user_id`` and ``amount``. The auth domain provides
    ``get_user_by_id(user_id)`` returning a record with ``username``.
    Concurrent identical requests share one computation.
    """

    def __init__(self, auth, balance, singleflight: SingleFlight | None = None) -> None:
        self.auth = auth
        self.balance = balance
        self.singleflight = singleflight if singleflight is not None else SingleFlight()

    def list_overall_top_transacting_users_by_value(
        self, req: ListOverallTopTransactingUsersByValueRequest
    ) -> ListOverallTopTransactingUsersByValueResponse:
        """Return the user's debit totals per counterpart, with usernames."""

        def compute() -> ListOverallTopTransactingUsersByValueResponse:
            try:
                summaries = list(
                    self.balance.get_history_summary_by_user_id_and_type(
                        req.user_id, HISTORY_TYPE_DEBIT
                    )
                )
            except Exception as exc:
                log.errorln(
                    "ListOverallTopTransactingUsersByValue.GetHistorySummaryByUserIdAndType", exc
                )
                raise UsecaseError(HTTPStatus.UNAUTHORIZED, str(exc)) from exc

            usernames = _resolve_usernames(
                self.auth,
                (summary.target_user_id for summary in summaries),
                "ListOverallTopTransactingUsersByValue.GetUserById",
            )
            return ListOverallTopTransactingUsersByValueResponse(
                code=int(HTTPStatus.OK),
                data=tuple(
                    TopTransactingUser(username=name, transacted_value=summary.amount)
                    for name, summary in zip(usernames, summaries)
                ),
            )

        key = SINGLE_FLIGHT_KEY_TOP_TRANSACTING_USERS.format(req.user_id)
        result, _shared = self.singleflight.do(key, compute)
        return result

    def top_transactions_for_user(
        self, req: TopTransactionsForUserRequest
    ) -> TopTransactionsForUserResponse:
        """Return the user's latest transactions, largest amount first."""

        def compute() -> TopTransactionsForUserResponse:
            try:
                histories = list(self.balance.get_latest_history_by_user_id(req.user_id))
            except Exception as exc:
                log.errorln("TopTransactionsForUser.GetLatestHistoryByUserId", exc)
                raise UsecaseError(HTTPStatus.UNAUTHORIZED, str(exc)) from exc

            histories.sort(key=lambda history: history.amount, reverse=True)

            usernames = _resolve_usernames(
                self.auth,
                (history.target_user_id for history in histories),
                "TopTransactionsForUser.GetUserById",
            )
            return TopTransactionsForUserResponse(
                code=int(HTTPStatus.OK),
                data=tuple(
                    TopTransaction(username=name, amount=history.amount)
                    for name, history in zip(usernames, histories)
                ),
            )

        key = SINGLE_FLIGHT_KEY_TOP_TRANSACTIONS_FOR_USER.format(req.user_id)
        result, _shared = self.singleflight.do(key, compute)
        return result