"""End-user credentials and the token endpoint response schema."""

import threading
import time
from typing import Any

import anyio
from pydantic import BaseModel, ConfigDict, PrivateAttr


class TokenResponse(BaseModel):
    """JSON body returned by the token endpoint. Absent and null fields are both None."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None


class Token(BaseModel):
    """
    An end-user's tokens.

    This is the data you must store to persist authentication. A Token is
    updated in place on every refresh, so anything holding a reference to it
    sees the new credentials.

    Refreshes through a ``Transport`` are serialized by ``lock`` and refreshes
    through an ``AsyncTransport`` by ``async_lock``. The two locks are
    independent: a Token shared between a sync and an async transport is not
    protected against a sync and an async refresh running at the same time.

    Copies and unpickled Tokens get fresh locks of their own.
    """

    access_token: str = ""
    refresh_token: str = ""
    expiry: float | None = None

    _lock = PrivateAttr(default_factory=threading.Lock)
    _async_lock = PrivateAttr(default_factory=anyio.Lock)

    @property
    def expired(self) -> bool:
        return self.expiry is not None and time.time() > self.expiry

    def update(self, response: TokenResponse) -> None:
        """Apply a token endpoint response to this token."""
        if response.access_token is not None:
            self.access_token = response.access_token
        if response.refresh_token:
            self.refresh_token = response.refresh_token
        if response.expires_in:
            self.expiry = time.time() + response.expires_in

    @property
    def lock(self) -> threading.Lock:
        """Lock serializing refresh-and-retry across threads sharing this token."""
        return self._lock

    @property
    def async_lock(self) -> anyio.Lock:
        """Lock serializing refresh-and-retry across tasks sharing this token."""
        return self._async_lock

    def _reset_locks(self) -> None:
        self._lock = threading.Lock()
        self._async_lock = anyio.Lock()

    def __copy__(self) -> "Token":
        copied = super().__copy__()
        copied._reset_locks()
        return copied

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> "Token":
        # Every field is immutable, so a shallow copy with new locks is a deep copy.
        return self.__copy__()

    def __getstate__(self) -> dict[Any, Any]:
        state = super().__getstate__()
        state["__pydantic_private__"] = {}
        return state

    def __setstate__(self, state: dict[Any, Any]) -> None:
        super().__setstate__(state)
        self._reset_locks()
