from __future__ import annotations

import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

MAX_REQUEST_ID_LENGTH = 128

_request_id_ctx_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]+$")


def normalize_request_id(candidate: Optional[str]) -> Optional[str]:
    """Return the incoming request id when it is safe to echo back, otherwise None."""
    if not candidate:
        return None
    cleaned = candidate.strip()
    if not cleaned or len(cleaned) > MAX_REQUEST_ID_LENGTH:
        return None
    if not _REQUEST_ID_PATTERN.match(cleaned):
        return None
    return cleaned


def set_request_id(request_id: Optional[str] = None) -> Token:
    value = normalize_request_id(request_id) or str(uuid.uuid4())
    return _request_id_ctx_var.set(value)


def get_request_id() -> Optional[str]:
    return _request_id_ctx_var.get()


def reset_request_id(token: Token) -> None:
    _request_id_ctx_var.reset(token)


@contextmanager
def request_id_scope(request_id: Optional[str] = None) -> Iterator[str]:
    token = set_request_id(request_id)
    try:
        yield get_request_id() or ""
    finally:
        reset_request_id(token)
