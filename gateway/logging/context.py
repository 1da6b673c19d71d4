"""Request-scoped fields attached to every log record.

The HTTP layer binds a request id, method and path when a request starts;
ContextualFilter copies whatever is bound onto each record, so lines from
the discovery client and service can be correlated with the request that
caused them. Fields live in a ContextVar and are stored as a read-only
mapping; every push creates a new mapping and returns a token for undoing it.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping

REQUEST_ID_LENGTH = 12

_EMPTY: Mapping[str, Any] = MappingProxyType({})

_bound_fields: ContextVar[Mapping[str, Any]] = ContextVar("gateway_log_fields", default=_EMPTY)


def get_log_context() -> Dict[str, Any]:
    """Return a mutable copy of the fields currently bound."""
    return dict(_bound_fields.get())


def push_log_context(**fields: Any) -> Token:
    """Bind fields on top of the current ones; later values win.

    Returns:
        Token for pop_log_context()
    """
    merged = {**_bound_fields.get(), **fields}
    return _bound_fields.set(MappingProxyType(merged))


def pop_log_context(token: Token) -> None:
    _bound_fields.reset(token)


def clear_log_context() -> None:
    """Drop every bound field."""
    _bound_fields.set(_EMPTY)


def new_request_id() -> str:
    return uuid.uuid4().hex[:REQUEST_ID_LENGTH]


def bind_request(method: str, path: str) -> Token:
    """Bind a fresh request id plus method and path for one HTTP request."""
    return push_log_context(request_id=new_request_id(), method=method, path=path)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind fields for the duration of a with-block.

    Example:
        >>> with log_context(operation="suggest"):
        ...     logger.info("Fetching suggestions")  # carries operation=suggest
    """
    token = push_log_context(**fields)
    try:
        yield
    finally:
        pop_log_context(token)
