# core/menu_config.py

from typing import Dict, List

from core.errors import MenuConfigError
from models.enums import AdminRole, Capability
from models.menu import MenuSection, MenuSubsection, RoleAccess


SUPER = AdminRole.super.value
SUB = AdminRole.sub.value

DASHBOARD_ID = "dashboard"
DASHBOARD_TARGET = "DashboardFull"
DASHBOARD_TITLE = "Dashboard"


def _sub(id: str, name: str, required: Capability) -> MenuSubsection:
    return MenuSubsection(id=id, name=name, required=required)


# ============================================
# CENTRALIZED SECTION → ROLE → CAPABILITY MAP
# ============================================
MENU_CONFIG: List[MenuSection] = [

    # =====================================================
    # DASHBOARD
    # =====================================================
    MenuSection(
        id=DASHBOARD_ID,
        name="Dashboard",
        access={
            SUPER: RoleAccess(render_target="DashboardFull", capability=Capability.full),
            SUB: RoleAccess(render_target="DashboardLimited", capability=Capability.full),
        },
    ),


    # =====================================================
    # ADMINS — sub admins can only look
    # =====================================================
    MenuSection(
        id="admins",
        name="Admins",
        access={
            SUPER: RoleAccess(render_target="AdminsFull", capability=Capability.full),
            SUB: RoleAccess(render_target="AdminsView", capability=Capability.view),
        },
        subsections=[
            _sub("view-admins", "View Admins", Capability.view),
            _sub("add-admin", "Add Admin", Capability.full),
            _sub("manage-admins", "Manage Admins", Capability.full),
            _sub("admin-activity", "Admin Activity", Capability.view),
        ],
    ),


    # =====================================================
    # WORKERS — sub admins review and edit, but don't onboard
    # =====================================================
    MenuSection(
        id="workers",
        name="Workers",
        access={
            SUPER: RoleAccess(render_target="WorkersFull", capability=Capability.full),
            SUB: RoleAccess(render_target="WorkersFull", capability=Capability.view),
        },
        subsections=[
            _sub("view-workers", "View Workers", Capability.view),
            _sub("add-worker", "Add Worker", Capability.full),
            _sub("manage-workers", "Manage Workers", Capability.view),
            _sub("manage-categories", "Manage Categories", Capability.full),
            _sub("view-categories", "View Categories", Capability.view),
            _sub("worker-verification", "Verification", Capability.view),
            _sub("worker-performance", "Performance", Capability.view),
        ],
    ),


    # =====================================================
    # OFFICES
    # =====================================================
    MenuSection(
        id="offices",
        name="Offices",
        access={
            SUPER: RoleAccess(render_target="OfficesFull", capability=Capability.full),
            SUB: RoleAccess(render_target="OfficesView", capability=Capability.view),
        },
        subsections=[
            _sub("view-offices", "View Offices", Capability.view),
            _sub("add-office", "Add Office", Capability.full),
            _sub("manage-offices", "Manage Offices", Capability.full),
            _sub("office-zones", "Service Zones", Capability.view),
            _sub("office-schedule", "Office Hours", Capability.view),
        ],
    ),


    # =====================================================
    # DISPUTES
    # =====================================================
    MenuSection(
        id="disputes",
        name="Disputes",
        access={
            SUPER: RoleAccess(render_target="DisputesFull", capability=Capability.full),
            SUB: RoleAccess(render_target="DisputesFull", capability=Capability.full),
        },
        subsections=[
            _sub("all-disputes", "All Disputes", Capability.full),
            _sub("open-disputes", "Open Disputes", Capability.full),
            _sub("resolved-disputes", "Resolved", Capability.full),
            _sub("dispute-categories", "Categories", Capability.full),
            _sub("dispute-reports", "Reports", Capability.view),
        ],
    ),


    # =====================================================
    # REVIEWS
    # =====================================================
    MenuSection(
        id="reviews",
        name="Reviews",
        access={
            SUPER: RoleAccess(render_target="ReviewsFull", capability=Capability.full),
            SUB: RoleAccess(render_target="ReviewsFull", capability=Capability.full),
        },
        subsections=[
            _sub("all-reviews", "All Reviews", Capability.full),
            _sub("pending-reviews", "Pending", Capability.full),
            _sub("approved-reviews", "Approved", Capability.full),
            _sub("review-settings", "Settings", Capability.full),
            _sub("review-analytics", "Analytics", Capability.view),
        ],
    ),


    # =====================================================
    # SETTINGS — sub admins only get their own profile
    # =====================================================
    # `personal` grants no subsections under the visibility rule;
    # the section itself still opens SettingsPersonal.
    MenuSection(
        id="settings",
        name="Settings",
        access={
            SUPER: RoleAccess(render_target="SettingsFull", capability=Capability.full),
            SUB: RoleAccess(render_target="SettingsPersonal", capability=Capability.personal),
        },
        subsections=[
            _sub("general-settings", "General", Capability.full),
            _sub("security-settings", "Security", Capability.full),
            _sub("notification-settings", "Notifications", Capability.personal),
            _sub("profile-settings", "My Profile", Capability.personal),
            _sub("system-logs", "System Logs", Capability.full),
        ],
    ),
]


# ============================================
# SUBSECTION → RENDER TARGET
# ============================================
SUBSECTION_TARGETS: Dict[str, str] = {
    # Admins
    "view-admins": "ViewAdmins",
    "add-admin": "AddAdmin",
    "manage-admins": "ManageAdmins",
    "admin-activity": "AdminActivity",

    # Workers
    "view-workers": "ViewWorkers",
    "add-worker": "AddWorker",
    "manage-workers": "ManageWorkers",
    "manage-categories": "ManageCategories",
    "view-categories": "ViewCategories",
    "worker-verification": "WorkerVerification",
    "worker-performance": "WorkerPerformance",

    # Offices
    "view-offices": "ViewOffices",
    "add-office": "AddOffice",
    "manage-offices": "ManageOffices",
    "office-zones": "OfficeZones",
    "office-schedule": "OfficeSchedule",

    # Disputes
    "all-disputes": "AllDisputes",
    "open-disputes": "OpenDisputes",
    "resolved-disputes": "ResolvedDisputes",
    "dispute-categories": "DisputeCategories",
    "dispute-reports": "DisputeReports",

    # Reviews
    "all-reviews": "AllReviews",
    "pending-reviews": "PendingReviews",
    "approved-reviews": "ApprovedReviews",
    "review-settings": "ReviewSettings",
    "review-analytics": "ReviewAnalytics",

    # Settings
    "general-settings": "GeneralSettings",
    "security-settings": "SecuritySettings",
    "notification-settings": "NotificationSettings",
    "profile-settings": "ProfileSettings",
    "system-logs": "SystemLogs",
}


# ============================================
# LOAD-TIME VALIDATION
# ============================================
def validate_menu_config(
    sections: List[MenuSection] = MENU_CONFIG,
    targets: Dict[str, str] = SUBSECTION_TARGETS,
) -> None:
    """
    Fail fast at import time rather than at navigation time.

    Raises MenuConfigError when:
      • an id (section or subsection) appears twice
      • the dashboard section is missing
      • a subsection has no render target
      • a render target points at a subsection not in the table
    """
    seen = set()
    subsection_ids = set()

    for section in sections:
        if section.id in seen:
            raise MenuConfigError(f"Duplicate menu id: {section.id}")
        seen.add(section.id)

        for sub in section.subsections:
            if sub.id in seen:
                raise MenuConfigError(f"Duplicate menu id: {sub.id}")
            seen.add(sub.id)
            subsection_ids.add(sub.id)

    if DASHBOARD_ID not in seen:
        raise MenuConfigError("Menu config has no dashboard section")

    missing_targets = sorted(subsection_ids - set(targets))
    if missing_targets:
        raise MenuConfigError(f"Subsections without a render target: {missing_targets}")

    unknown_targets = sorted(set(targets) - subsection_ids)
    if unknown_targets:
        raise MenuConfigError(f"Render targets for unknown subsections: {unknown_targets}")


validate_menu_config()
