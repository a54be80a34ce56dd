"""Session provider seam: the account system is an external collaborator."""
import logging
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel

from thriftcart.errors import SessionError

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional["Session"]], None]


class Session(BaseModel):
    uid: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None


class SessionProvider(Protocol):
    def sign_in(self, credential: str) -> Session: ...

    def sign_out(self) -> None: ...

    def current_session(self) -> Optional[Session]: ...

    def subscribe(self, listener: SessionListener) -> Callable[[], None]: ...


class InMemorySessionProvider:
    """Accepts a fixed set of credentials; used in development and tests."""

    def __init__(self, accounts: Optional[Dict[str, Session]] = None):
        self.accounts = dict(accounts or {})
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)

    def sign_in(self, credential: str) -> Session:
        session = self.accounts.get(credential)
        if session is None:
            raise SessionError("Sign-in failed: unknown account")
        self._session = session
        self._notify()
        return session

    def sign_out(self) -> None:
        self._session = None
        self._notify()

    def current_session(self) -> Optional[Session]:
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self._session)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class SessionService:
    """Wraps a provider so every failure surfaces as a SessionError with a user-facing message."""

    def __init__(self, provider: SessionProvider):
        self.provider = provider

    def sign_in(self, credential: str) -> Session:
        try:
            return self.provider.sign_in(credential)
        except SessionError:
            logger.warning("Sign-in rejected")
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Error signing in: %s", exc)
            raise SessionError("Sign-in failed. Please try again.") from exc

    def sign_out(self) -> None:
        try:
            self.provider.sign_out()
        except SessionError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Error signing out: %s", exc)
            raise SessionError("Sign-out failed. Please try again.") from exc

    def current_session(self) -> Optional[Session]:
        return self.provider.current_session()
