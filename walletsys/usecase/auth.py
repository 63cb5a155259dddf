"""User registration."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import timedelta
from http import HTTPStatus

from walletsys import log
from walletsys.usecase.errors import RecordNotFound, UsecaseError

TOKEN_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class User:
    """A registered wallet user."""

    id: str = ""
    username: str = ""


@dataclass(frozen=True)
class RegisterUserRequest:
    username: str


@dataclass(frozen=True)
class RegisterUserResponse:
    code: int
    token: str = ""


class AuthUsecase:
    """Registers users through an auth domain and issues their tokens.

    The auth domain provides ``get_user_by_username(username)``, raising
    ``RecordNotFound`` when there is no such user, and ``insert_user(user)``.
    The token service provides ``create(ttl, content)``.
    """

    def __init__(self, auth, token) -> None:
        self.auth = auth
        self.token = token

    def register_user(self, req: RegisterUserRequest) -> RegisterUserResponse:
        """Create a user with a fresh id and return a token valid for an hour."""
        try:
            existing = self.auth.get_user_by_username(req.username)
        except RecordNotFound:
            existing = None
        except Exception as exc:
            log.errorln("RegisterUser.GetUserByUsername", exc)
            raise UsecaseError(HTTPStatus.BAD_GATEWAY, str(exc)) from exc

        if existing is not None and existing.id:
            raise UsecaseError(HTTPStatus.CONFLICT, "username already exists")

        user = User(id=str(uuid.uuid4()), username=req.username)

        try:
            self.auth.insert_user(user)
        except Exception as exc:
            log.errorln("RegisterUser.InsertUser", exc)
            raise UsecaseError(HTTPStatus.BAD_GATEWAY, str(exc)) from exc

        try:
            token = self.token.create(TOKEN_TTL, user)
        except Exception as exc:
            log.errorln("RegisterUser.Create", exc)
            raise UsecaseError(HTTPStatus.BAD_GATEWAY, str(exc)) from exc

        return RegisterUserResponse(code=int(HTTPStatus.CREATED), token=token)