"""
Identity Provider

Authentication is an external collaborator. The rest of the system only
needs to know who is signed in (an opaque uid) or that nobody is.

sign_in() and sign_out() do not return the outcome. Callers observe it
through the listeners, the same way a hosted auth SDK reports state.
A listener may be a coroutine function; it is awaited before the
sign-in or sign-out call returns.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_pro.telemetry import get_logger


class Identity(BaseModel):
    """A signed-in user."""
    model_config = ConfigDict(frozen=True)

    uid: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def label(self) -> str:
        """Name to show: display name, else the local part of the e-mail."""
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.split("@")[0]
        return self.uid


IdentityListener = Callable[[Optional[Identity]], Any]


class IdentityProvider(ABC):
    """Abstract identity source."""

    def __init__(self):
        self._listeners: list[IdentityListener] = []
        self._current: Optional[Identity] = None
        self._logger = get_logger(__name__)

    @property
    def current(self) -> Optional[Identity]:
        """The signed-in identity, or None when signed out."""
        return self._current

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _set_current(self, identity: Optional[Identity]) -> None:
        if identity == self._current:
            return
        self._current = identity
        self._logger.info(
            "identity_changed",
            uid=identity.uid if identity else None,
        )
        for listener in list(self._listeners):
            result = listener(identity)
            if inspect.isawaitable(result):
                await result

    @abstractmethod
    async def sign_in(self) -> None:
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass


class LocalIdentityProvider(IdentityProvider):
    """
    Signs in a preconfigured identity.

    Stands in for a hosted sign-in flow in local setups and tests.
    """

    def __init__(
        self,
        identity: Optional[Identity] = None,
        signed_in: bool = False,
    ):
        super().__init__()
        self._identity = identity
        if signed_in and identity is not None:
            self._current = identity

    async def sign_in(self) -> None:
        if self._identity is None:
            self._logger.warning("sign_in_unavailable")
            return
        await self._set_current(self._identity)

    async def sign_out(self) -> None:
        await self._set_current(None)
