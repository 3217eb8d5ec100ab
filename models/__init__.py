# -------------------------
# Enums
# -------------------------
from .enums import (
    AdminRole,
    AdminStatus,
    Capability,
    Collection,
    VerificationStatus,
    OfficeType,
    OfficeStatus,
)

# -------------------------
# Auth Models
# -------------------------
from .auth import (
    AuthContext,
    Session,
    LoginResult,
)

# -------------------------
# Record Models
# -------------------------
from .admin import Admin, AdminCreate, AdminUpdate, OfficeAssignment
from .worker import Worker, WorkerCreate, WorkerUpdate
from .office import Office, OfficeCreate, OfficeUpdate
from .category import WorkCategory, CategoryCreate, CategoryUpdate

# -------------------------
# Menu Models
# -------------------------
from .menu import (
    RoleAccess,
    MenuSubsection,
    MenuSection,
    ResolvedSection,
    NavigationState,
    ContentTarget,
)
