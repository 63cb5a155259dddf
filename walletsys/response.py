"""Helpers that write HTTP status codes and JSON bodies to a response writer."""

from __future__ import annotations

import json
from typing import Any


class ResponseRecorder:
    """In-memory response writer that records status, headers and body."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.body = b""
        self._wrote_header = False

    def write_header(self, status_code: int) -> None:
        if self._wrote_header:
            return
        self.status_code = status_code
        self._wrote_header = True

    def write(self, data: bytes) -> int:
        if not self._wrote_header:
            self.write_header(200)
        self.body += data
        return len(data)


def write_error_response(writer, status_code: int) -> None:
    """Send only a status code."""
    writer.write_header(status_code)


def write_json_response(writer, status_code: int, content: Any) -> None:
    """Send ``content`` as JSON; nothing is written if it cannot be encoded."""
    try:
        body = json.dumps(content, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError):
        return
    writer.headers["Content-Type"] = "application/json"
    writer.write_header(status_code)
    writer.write(body.encode("utf-8"))