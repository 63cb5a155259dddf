"""Wiring of all wallet use cases over shared domains."""

from __future__ import annotations

from walletsys.usecase.auth import AuthUsecase
from walletsys.usecase.balance import BalanceUsecase
from walletsys.usecase.transaction import TransactionUsecase


class Usecases:
    """Holds the auth, balance and transaction use cases built on one set of domains."""

    def __init__(self, auth_domain, balance_domain, token) -> None:
        self.auth = AuthUsecase(auth_domain, token)
        self.balance = BalanceUsecase(balance_domain, auth_domain)
        self.transaction = TransactionUsecase(auth_domain, balance_domain)