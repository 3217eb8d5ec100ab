from fastapi import APIRouter, Depends, Request

from core.rate_limiter import client_ip, get_rate_limit_identifier, require_rate_limit
from core.errors import StoreError
from core.logging_config import logger
from dependencies.auth import get_bearer_session, get_current_admin, get_session_resolver
from models.auth import AuthContext, LoginRequest, LoginResponse, PasswordResetRequest, Session
from models.menu import NavigationState
from services.navigation import NavigationController
from services.session_resolver import SessionResolver


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


PASSWORD_RESET_MESSAGE = "If an admin account exists with this email, a password reset link has been sent."


# ============================================================
# LOGIN
# ============================================================
@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate an admin",
    responses={
        401: {"description": "Unknown admin, wrong password, or inactive account"},
        429: {"description": "Rate limit exceeded"},
    },
)
def login(
    payload: LoginRequest,
    request: Request,
    resolver: SessionResolver = Depends(get_session_resolver),
):
    """
    Verifies the credentials, then cross-checks the admins table.
    An account without an active admin record is signed out again and
    never receives a token.
    """
    require_rate_limit(request, identifier=get_rate_limit_identifier(request, payload.email))

    # AuthenticationError propagates to the ConsoleError handler (401)
    result = resolver.login(payload.email, payload.password)

    return LoginResponse(
        role=result.context.role,
        name=result.context.name,
        access_token=result.session.access_token,
    )


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", response_model=NavigationState, summary="Sign out the current admin")
def logout(
    session: Session = Depends(get_bearer_session),
    context: AuthContext = Depends(get_current_admin),
    resolver: SessionResolver = Depends(get_session_resolver),
):
    """Revokes the session and returns the navigation state to start from."""
    state = NavigationController(context.role).logout(resolver, session)
    logger.info(f"Admin {context.user_id} logged out")
    return state


# ============================================================
# CURRENT ADMIN
# ============================================================
@router.get("/me", response_model=AuthContext, summary="Current authenticated admin")
def read_me(context: AuthContext = Depends(get_current_admin)):
    return context


# ============================================================
# PASSWORD RESET
# ============================================================
@router.post(
    "/password-reset",
    summary="Send a password reset email",
    description="""
    Sends a reset link when the email belongs to an admin.

    **Note:** The response is identical whether or not the email exists,
    to prevent email enumeration.
    """,
    responses={
        200: {"description": "Email sent (or email not found, for security)"},
        429: {"description": "Rate limit exceeded"},
    },
)
def password_reset(
    payload: PasswordResetRequest,
    request: Request,
    resolver: SessionResolver = Depends(get_session_resolver),
):
    email = payload.email.strip().lower()
    require_rate_limit(request, identifier=get_rate_limit_identifier(request, email))

    logger.info(f"Password reset attempt: email={email}, ip={client_ip(request)}")
    try:
        resolver.request_password_reset(email)
    except StoreError as e:
        logger.error(f"Password reset lookup failed for {email}: {e.message}")

    return {"success": True, "message": PASSWORD_RESET_MESSAGE}
