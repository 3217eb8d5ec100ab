# services/content_router.py

from typing import Optional

from core.menu_config import DASHBOARD_ID, DASHBOARD_TARGET, DASHBOARD_TITLE, SUBSECTION_TARGETS
from core.permission_helpers import (
    find_section,
    find_subsection,
    normalize_role,
    role_access,
    subsection_allowed,
)
from models.enums import AdminRole
from models.menu import ContentTarget


ROLE_LABELS = {
    AdminRole.super.value: "Super Admin",
    AdminRole.sub.value: "Sub Admin",
}


def dashboard_content(role) -> ContentTarget:
    label = ROLE_LABELS.get(normalize_role(role), "Admin")
    dashboard = find_section(DASHBOARD_ID)
    access = role_access(dashboard, role) if dashboard else None
    return ContentTarget(
        render_target=DASHBOARD_TARGET,
        title=DASHBOARD_TITLE,
        subtitle=f"{label} Dashboard",
        capability=access.capability if access else None,
    )


def resolve_content(active_id: Optional[str], role) -> ContentTarget:
    """
    Map the active menu item to what the console should render.

    Never raises: empty ids, the dashboard id, unknown ids, unknown roles
    and items the role may not open all land on the dashboard.
    """
    if not active_id or active_id == DASHBOARD_ID:
        return dashboard_content(role)

    section = find_section(active_id)
    if section is not None:
        access = role_access(section, role)
        if access is None or access.capability is None:
            return dashboard_content(role)
        return ContentTarget(
            render_target=access.render_target,
            title=section.name,
            subtitle=f"Access: {access.capability.value}",
            capability=access.capability,
        )

    found = find_subsection(active_id)
    if found is not None and subsection_allowed(role, active_id):
        parent, sub = found
        target = SUBSECTION_TARGETS.get(sub.id)
        if target:
            return ContentTarget(
                render_target=target,
                title=sub.name,
                subtitle=parent.name,
                capability=role_access(parent, role).capability,
            )

    return dashboard_content(role)
