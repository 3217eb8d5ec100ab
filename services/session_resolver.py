# services/session_resolver.py

"""
Session Resolver: turns an identity-provider session into an AuthContext.

    unauthenticated → checking → authenticated
                               ↘ unauthenticated (rejected, signed out)

Validation is fail-closed: a session whose user has no admin record, an
undecodable record, or a record whose status is not `active` is signed
out and never yields a context.
"""

from typing import Callable, Optional

from core.config import settings
from core.credential_store import CredentialStore
from core.errors import AuthenticationError, CredentialError, RecordDecodeError, StoreError
from core.logging_config import logger
from core.record_store import RecordStore
from core.utils import utc_now_iso
from models.admin import Admin
from models.auth import AuthContext, LoginResult, Session
from models.enums import AuthErrorKind, AuthState, Collection, CredentialErrorKind


CREDENTIAL_MESSAGES = {
    CredentialErrorKind.not_found: "Admin account not found.",
    CredentialErrorKind.wrong_password: "Incorrect password.",
    CredentialErrorKind.invalid_credentials: "Invalid email or password.",
}
LOGIN_FAILED = "Login failed. Please try again."
ACCESS_DENIED = "Access denied. Admin account not found."
UNAUTHORIZED = "User not found or unauthorized."
INACTIVE = "Your account is inactive. Please contact super admin."


class SessionResolver:
    def __init__(
        self,
        credential_store: CredentialStore,
        record_store: RecordStore,
        *,
        precheck_email: Optional[bool] = None,
        on_change: Optional[Callable[[Optional[AuthContext]], None]] = None,
    ):
        self._credentials = credential_store
        self._records = record_store
        self._precheck_email = (
            settings.LOGIN_PRECHECK_ADMIN_EMAIL if precheck_email is None else precheck_email
        )
        self._on_change = on_change

        self.state = AuthState.unauthenticated
        self.context: Optional[AuthContext] = None

    # ============================================================
    # AUTH STATE STREAM
    # ============================================================
    def attach(self):
        """Follow the credential store's session stream. Returns the unsubscribe handle."""
        return self._credentials.on_session_change(self.handle_session_change)

    def handle_session_change(self, session: Optional[Session]) -> Optional[AuthContext]:
        if session is None:
            self._set_unauthenticated()
            return None

        self.state = AuthState.checking
        try:
            context = self.resolve(session)
        except AuthenticationError:
            # resolve() already signed out; its SIGNED_OUT event may have
            # re-entered this method, which is harmless
            self._set_unauthenticated()
            return None
        except StoreError as e:
            logger.error(f"Session check failed for {session.user_id}: {e.message}")
            self._credentials.sign_out(session)
            self._set_unauthenticated()
            return None

        self._set_authenticated(context)
        return context

    # ============================================================
    # VALIDATION
    # ============================================================
    def resolve(self, session: Session) -> AuthContext:
        """
        Cross-check a session against the admins table.
        Raises AuthenticationError (after forcing sign-out) on rejection.
        """
        admin = self._load_admin(session.user_id)

        if admin is None:
            logger.warning(f"Session {session.user_id} has no admin record; signing out")
            self._credentials.sign_out(session)
            raise AuthenticationError(AuthErrorKind.unauthorized, UNAUTHORIZED)

        if not admin.is_active:
            logger.warning(f"Admin {admin.id} is {admin.status}; signing out")
            self._credentials.sign_out(session)
            raise AuthenticationError(AuthErrorKind.inactive, INACTIVE)

        return AuthContext(
            user_id=admin.id,
            role=admin.role,
            name=admin.name,
            email=admin.email or session.email,
        )

    def resolve_token(self, access_token: str) -> AuthContext:
        session = self._credentials.get_session_user(access_token)
        if session is None:
            raise AuthenticationError(AuthErrorKind.no_session, "Invalid or expired authentication token")
        return self.resolve(session)

    def _load_admin(self, user_id: str) -> Optional[Admin]:
        raw = self._records.get_one(Collection.admins, user_id)
        if raw is None:
            return None
        try:
            return Admin.from_record(Collection.admins.value, raw)
        except RecordDecodeError as e:
            logger.error(e.message)
            return None

    # ============================================================
    # INTERACTIVE LOGIN
    # ============================================================
    def login(self, email: str, password: str) -> LoginResult:
        email = (email or "").strip().lower()
        logger.info(f"Login attempt: email={email}")

        if self._precheck_email:
            try:
                matches = self._records.count_ignore_case(Collection.admins, "email", email)
            except StoreError as e:
                raise AuthenticationError(AuthErrorKind.failed, f"{LOGIN_FAILED} ({e.detail})")
            if matches == 0:
                raise AuthenticationError(AuthErrorKind.admin_not_found, ACCESS_DENIED)

        self.state = AuthState.checking
        try:
            session = self._credentials.verify_credentials(email, password)
        except CredentialError as e:
            self._credentials.sign_out()
            self._set_unauthenticated()
            message = CREDENTIAL_MESSAGES.get(e.kind, LOGIN_FAILED)
            kind = (
                AuthErrorKind.admin_not_found
                if e.kind == CredentialErrorKind.not_found
                else AuthErrorKind.invalid_credentials
            )
            raise AuthenticationError(kind, message)

        try:
            context = self.resolve(session)
        except StoreError as e:
            self._credentials.sign_out(session)
            self._set_unauthenticated()
            raise AuthenticationError(AuthErrorKind.failed, f"{LOGIN_FAILED} ({e.detail})")
        except AuthenticationError:
            self._set_unauthenticated()
            raise

        self._record_login(context.user_id)
        self._set_authenticated(context)
        logger.info(f"Login succeeded: admin={context.user_id} role={context.role}")
        return LoginResult(context=context, session=session)

    def _record_login(self, user_id: str) -> None:
        """Best effort: a failed counter update never fails the login."""
        try:
            raw = self._records.get_one(Collection.admins, user_id) or {}
            count = raw.get("login_count") or raw.get("loginCount") or 0
            self._records.update(
                Collection.admins,
                user_id,
                {"last_login": utc_now_iso(), "login_count": int(count) + 1},
            )
        except (StoreError, TypeError, ValueError) as e:
            logger.warning(f"Could not record login for {user_id}: {e}")

    # ============================================================
    # LOGOUT / PASSWORD RESET
    # ============================================================
    def logout(self, session: Optional[Session] = None) -> None:
        self._credentials.sign_out(session)
        self._set_unauthenticated()

    def request_password_reset(self, email: str) -> bool:
        """
        Dispatch a reset email only when the address belongs to an admin.
        Returns whether an email was sent; callers must not echo this
        back to the user.
        """
        email = (email or "").strip().lower()
        if not email:
            return False

        if self._records.count_ignore_case(Collection.admins, "email", email) == 0:
            logger.info(f"Password reset skipped, no admin: email={email}")
            return False

        try:
            self._credentials.send_password_reset(email)
        except CredentialError as e:
            logger.error(f"Failed to send password reset email to {email}: {e.kind}: {e.message}")
            return False

        logger.info(f"Password reset email sent: email={email}")
        return True

    # ============================================================
    # STATE
    # ============================================================
    def _set_authenticated(self, context: AuthContext) -> None:
        self.state = AuthState.authenticated
        self.context = context
        if self._on_change:
            self._on_change(context)

    def _set_unauthenticated(self) -> None:
        already = self.state == AuthState.unauthenticated and self.context is None
        self.state = AuthState.unauthenticated
        self.context = None
        if self._on_change and not already:
            self._on_change(None)
