"""Errors shared by the wallet use cases."""

from __future__ import annotations


class RecordNotFound(LookupError):
    """A domain lookup found no matching record."""


class UsecaseError(Exception):
    """A use case failed; ``code`` is the HTTP status to answer with."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = int(code)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"