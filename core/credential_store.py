# core/credential_store.py

from typing import Callable, Optional

from supabase import Client

from core.errors import CredentialError, classify_auth_error, extract_supabase_error
from core.logging_config import logger
from models.auth import Session
from models.enums import CredentialErrorKind


SessionCallback = Callable[[Optional[Session]], None]


def _to_session(raw_session, raw_user=None) -> Optional[Session]:
    """Reduce a GoTrue session/user pair to models.auth.Session."""
    user = raw_user or getattr(raw_session, "user", None)
    if user is None:
        return None

    return Session(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=getattr(raw_session, "access_token", None),
        refresh_token=getattr(raw_session, "refresh_token", None),
    )


class SessionListener:
    """Unsubscribe handle for on_session_change()."""

    def __init__(self, subscription):
        self._subscription = subscription
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._subscription is not None:
            self._subscription.unsubscribe()


class CredentialStore:
    """
    Identity provider (Supabase GoTrue) as the console sees it.

    The wrapped client holds at most one session at a time; signing in
    or signing up replaces it, exactly like a browser tab would.
    """

    def __init__(self, client: Client):
        self._client = client

    # ============================================================
    # SIGN IN / SIGN UP
    # ============================================================
    def verify_credentials(self, email: str, password: str) -> Session:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            kind = classify_auth_error(e)
            logger.warning(f"Credential check failed for {email}: {kind}")
            raise CredentialError(kind, extract_supabase_error(e))

        session = _to_session(response.session, response.user)
        if session is None or not session.access_token:
            raise CredentialError(CredentialErrorKind.invalid_credentials, "No session returned")
        return session

    def create_credential(self, email: str, password: str) -> Session:
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            kind = classify_auth_error(e)
            logger.warning(f"Credential creation failed for {email}: {kind}")
            raise CredentialError(kind, extract_supabase_error(e))

        # With email confirmation on, sign_up returns a user but no session
        session = _to_session(response.session, response.user)
        if session is None:
            raise CredentialError(CredentialErrorKind.other, "Identity provider returned no user")
        return session

    # ============================================================
    # SESSION
    # ============================================================
    def current_session(self) -> Optional[Session]:
        try:
            raw = self._client.auth.get_session()
        except Exception as e:
            logger.warning(f"Could not read current session: {extract_supabase_error(e)}")
            return None
        return _to_session(raw) if raw else None

    def get_session_user(self, access_token: str) -> Optional[Session]:
        """Validate a bearer token with GoTrue; None when invalid/expired."""
        try:
            response = self._client.auth.get_user(access_token)
        except Exception:
            return None

        if not response or not response.user:
            return None

        return Session(
            user_id=str(response.user.id),
            email=response.user.email,
            access_token=access_token,
        )

    def sign_out(self, session: Optional[Session] = None) -> None:
        """
        Sign out the client's own session, or revoke another session by
        token. Failures are logged: the caller treats the session as gone.
        """
        try:
            current = self.current_session()
            if session is None or (current and current.access_token == session.access_token):
                self._client.auth.sign_out()
            elif session.access_token:
                self._client.auth.admin.sign_out(session.access_token)
        except Exception as e:
            logger.warning(f"Sign-out failed: {extract_supabase_error(e)}")

    def send_password_reset(self, email: str) -> None:
        try:
            self._client.auth.reset_password_for_email(email)
        except Exception as e:
            kind = classify_auth_error(e)
            raise CredentialError(kind, extract_supabase_error(e))

    # ============================================================
    # AUTH STATE STREAM
    # ============================================================
    def on_session_change(self, callback: SessionCallback) -> SessionListener:
        """
        Call `callback` on every sign-in / sign-out, and once right away
        with the persisted session (None when there is none).
        """

        def listener(event, raw_session):
            callback(_to_session(raw_session) if raw_session else None)

        subscription = self._client.auth.on_auth_state_change(listener)
        handle = SessionListener(subscription)
        callback(self.current_session())
        return handle
