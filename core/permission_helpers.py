from typing import Dict, List, Optional, Tuple

from fastapi import Depends, HTTPException

from core.menu_config import MENU_CONFIG
from dependencies.auth import get_current_admin
from models.auth import AuthContext
from models.enums import Capability
from models.menu import MenuSection, MenuSubsection, ResolvedSection, RoleAccess


_SECTIONS: Dict[str, MenuSection] = {s.id: s for s in MENU_CONFIG}
_SUBSECTIONS: Dict[str, Tuple[MenuSection, MenuSubsection]] = {
    sub.id: (section, sub) for section in MENU_CONFIG for sub in section.subsections
}


# -----------------------------------------------------
# Lookups (all total: unknown → None)
# -----------------------------------------------------
def normalize_role(role) -> Optional[str]:
    if not isinstance(role, str):
        return None
    role = role.strip().lower()
    return role or None


def find_section(section_id: Optional[str]) -> Optional[MenuSection]:
    return _SECTIONS.get(section_id or "")


def find_subsection(subsection_id: Optional[str]) -> Optional[Tuple[MenuSection, MenuSubsection]]:
    return _SUBSECTIONS.get(subsection_id or "")


def role_access(section: MenuSection, role) -> Optional[RoleAccess]:
    role = normalize_role(role)
    if role is None:
        return None
    return section.access.get(role)


def section_capability(role, section_id: str) -> Optional[Capability]:
    section = find_section(section_id)
    if section is None:
        return None
    access = role_access(section, role)
    return access.capability if access else None


# -----------------------------------------------------
# Visibility rule
# -----------------------------------------------------
# Two tiers only, not a general ordering:
#   full  → every subsection
#   view  → subsections whose requirement is exactly `view`
#   other → nothing (including `personal` and no access)
def subsection_visible(granted: Optional[Capability], required: Capability) -> bool:
    if granted == Capability.full:
        return True
    if granted == Capability.view:
        return required == Capability.view
    return False


def resolve_visible_sections(role, sections: List[MenuSection] = MENU_CONFIG) -> List[ResolvedSection]:
    """
    Render the permission table for one role.
    Sections the role has no capability on are left out entirely.
    """
    resolved = []
    for section in sections:
        access = role_access(section, role)
        if access is None or access.capability is None:
            continue

        resolved.append(
            ResolvedSection(
                id=section.id,
                name=section.name,
                capability=access.capability,
                render_target=access.render_target,
                has_subsections=section.has_subsections,
                subsections=[
                    sub for sub in section.subsections
                    if subsection_visible(access.capability, sub.required)
                ],
            )
        )
    return resolved


def subsection_allowed(role, subsection_id: str) -> bool:
    found = find_subsection(subsection_id)
    if found is None:
        return False
    section, sub = found
    access = role_access(section, role)
    return subsection_visible(access.capability if access else None, sub.required)


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_subsection(subsection_id: str):
    """
    Gate an endpoint on the menu entry that exposes it.
    Usage:
        @router.post("", dependencies=[Depends(requires_subsection("add-worker"))])
    """

    def dependency(context: AuthContext = Depends(get_current_admin)):
        if not subsection_allowed(context.role, subsection_id):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{subsection_id}' not available to role '{context.role}'"
            )
        return context

    return dependency


def requires_section(section_id: str):
    def dependency(context: AuthContext = Depends(get_current_admin)):
        if section_capability(context.role, section_id) is None:
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{section_id}' not available to role '{context.role}'"
            )
        return context

    return dependency
