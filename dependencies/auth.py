from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.credential_store import CredentialStore
from core.errors import AuthenticationError, StoreError
from core.logging_config import logger
from core.record_store import RecordStore
from core.supabase_client import get_auth_client, get_supabase_client
from models.auth import AuthContext, Session
from services.session_resolver import SessionResolver


bearer_scheme = HTTPBearer()


# ============================================================
# STORES
# ============================================================
def record_store_for(app) -> Optional[RecordStore]:
    """
    One RecordStore per app so live subscriptions and the writes that
    trigger them share a fan-out. Created lazily on first use.
    """
    store = getattr(app.state, "record_store", None)
    if store is None:
        client = get_supabase_client()
        if client is None:
            return None
        store = RecordStore(client)
        app.state.record_store = store
    return store


def get_record_store(request: Request) -> RecordStore:
    store = record_store_for(request.app)
    if store is None:
        raise HTTPException(500, "Supabase client not configured")
    return store


def get_credential_store() -> CredentialStore:
    """
    A fresh auth client per request: the client holds one session at a
    time, and concurrent logins must not share it.
    """
    client = get_auth_client()
    if client is None:
        raise HTTPException(500, "Supabase auth client not configured")
    return CredentialStore(client)


def get_session_resolver(
    credential_store: CredentialStore = Depends(get_credential_store),
    record_store: RecordStore = Depends(get_record_store),
) -> SessionResolver:
    return SessionResolver(credential_store, record_store)


# ============================================================
# AUTHENTICATED ADMIN (bearer token → AuthContext)
# ============================================================
def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    resolver: SessionResolver = Depends(get_session_resolver),
) -> AuthContext:
    """
    Every protected request re-checks the admins table, so a deleted or
    deactivated admin loses access on their next call.
    """
    try:
        return resolver.resolve_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    except StoreError as e:
        logger.error(f"Session check failed: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not verify session",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_bearer_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    context: AuthContext = Depends(get_current_admin),
) -> Session:
    """The caller's own session, for logout."""
    return Session(
        user_id=context.user_id,
        email=context.email,
        access_token=credentials.credentials,
    )


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_subsection(subsection_id: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real gating logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_subsection as checker
    return checker(subsection_id)


def requires_section(section_id: str):
    from core.permission_helpers import requires_section as checker
    return checker(section_id)
