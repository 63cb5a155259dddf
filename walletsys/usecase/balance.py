"""Reading, topping up and transferring wallet balances."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from walletsys import log
from walletsys.usecase.errors import RecordNotFound, UsecaseError

MAX_TOPUP_AMOUNT = 10_000_000


@dataclass(frozen=True)
class Grant:
    """A balance amount held by, or granted to, a user."""

    user_id: str
    amount: float = 0.0


@dataclass(frozen=True)
class DisbursementRequest:
    user_id: str
    to_user_id: str
    amount: float


@dataclass(frozen=True)
class ReadBalanceByUserIdRequest:
    user_id: str


@dataclass(frozen=True)
class ReadBalanceByUserIdResponse:
    code: int
    balance: float = 0.0


@dataclass(frozen=True)
class TopupBalanceRequest:
    user_id: str
    amount: float


@dataclass(frozen=True)
class TopupBalanceResponse:
    code: int


@dataclass(frozen=True)
class TransferBalanceRequest:
    user_id: str
    to_username: str
    amount: float


@dataclass(frozen=True)
class TransferBalanceResponse:
    code: int


class BalanceUsecase:
    """Balance operations over a balance domain and an auth domain.

    The balance domain provides ``get_balance_by_user_id(user_id)`` (raising
    ``RecordNotFound`` when the user has no balance), ``grant_balance_by_user_id(grant)``
    and ``disburse_balance(request)``. The auth domain provides
    ``get_user_by_username(username)``.
    """

    def __init__(self, balance, auth) -> None:
        self.balance = balance
        self.auth = auth

    def read_balance_by_user_id(self, req: ReadBalanceByUserIdRequest) -> ReadBalanceByUserIdResponse:
        """Return the user's balance; a user without one has a balance of zero."""
        try:
            amount = self.balance.get_balance_by_user_id(req.user_id).amount
        except RecordNotFound:
            amount = 0.0
        except Exception as exc:
            log.errorln("ReadBalanceByUserId.GetBalanceByUserId", exc)
            raise UsecaseError(HTTPStatus.BAD_REQUEST, str(exc)) from exc
        return ReadBalanceByUserIdResponse(code=int(HTTPStatus.OK), balance=amount)

    def topup_balance(self, req: TopupBalanceRequest) -> TopupBalanceResponse:
        """Add between 0 and ``MAX_TOPUP_AMOUNT`` to the user's balance."""
        if req.amount < 0 or req.amount > MAX_TOPUP_AMOUNT:
            raise UsecaseError(HTTPStatus.BAD_REQUEST, "invalid topup amount")

        try:
            self.balance.grant_balance_by_user_id(Grant(user_id=req.user_id, amount=req.amount))
        except Exception as exc:
            log.errorln("TopupBalance.GrantBalanceByUserId", exc)
            raise UsecaseError(HTTPStatus.BAD_REQUEST, str(exc)) from exc

        return TopupBalanceResponse(code=int(HTTPStatus.NO_CONTENT))

    def transfer_balance(self, req: TransferBalanceRequest) -> TransferBalanceResponse:
        """Move ``req.amount`` from the user to the user named ``req.to_username``."""
        try:
            current = self.balance.get_balance_by_user_id(req.user_id)
        except Exception as exc:
            log.errorln("TransferBalance.GetBalanceByUserId", exc)
            raise UsecaseError(HTTPStatus.BAD_REQUEST, str(exc)) from exc

        if current.amount - req.amount < 0:
            raise UsecaseError(HTTPStatus.BAD_REQUEST, "insufficient balance")

        try:
            to_user = self.auth.get_user_by_username(req.to_username)
        except Exception as exc:
            log.errorln("TransferBalance.GetUserByUsername", exc)
            raise UsecaseError(HTTPStatus.NOT_FOUND, str(exc)) from exc

        try:
            self.balance.disburse_balance(
                DisbursementRequest(user_id=req.user_id, to_user_id=to_user.id, amount=req.amount)
            )
        except Exception as exc:
            log.errorln("TransferBalance.DisburmentBalance", exc)
            raise UsecaseError(HTTPStatus.BAD_REQUEST, str(exc)) from exc

        return TransferBalanceResponse(code=int(HTTPStatus.NO_CONTENT))