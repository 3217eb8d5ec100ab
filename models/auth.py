# models/auth.py

from typing import Optional
from pydantic import BaseModel, ConfigDict


# ===============================================================
# IDENTITY PROVIDER SESSION
# ===============================================================

class Session(BaseModel):
    """
    Identity-provider session, reduced to what the console needs.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


# ===============================================================
# AUTHENTICATED ADMIN CONTEXT
# ===============================================================

class AuthContext(BaseModel):
    """
    Produced by the SessionResolver and passed explicitly down the call
    chain (dependencies → routers → services). Never stored globally.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    role: str
    name: str
    email: Optional[str] = None


class LoginResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    context: AuthContext
    session: Session


# ===============================================================
# REQUEST / RESPONSE PAYLOADS
# ===============================================================

class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    role: str
    name: str
    access_token: Optional[str] = None
    token_type: str = "bearer"


class PasswordResetRequest(BaseModel):
    email: str
