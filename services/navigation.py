# services/navigation.py

from typing import Optional

from core.logging_config import logger
from core.menu_config import DASHBOARD_ID
from core.permission_helpers import find_section, section_capability, subsection_allowed
from models.auth import Session
from models.menu import NavigationState


class NavigationController:
    """
    Tracks the single active menu item and the (at most one) expanded
    section group for one admin.

    Stateless callers (the HTTP layer) rebuild it from the last
    NavigationState the client sent and read `.state` back.
    """

    def __init__(self, role: Optional[str], state: Optional[NavigationState] = None):
        self.role = role
        self._active = DASHBOARD_ID
        self._expanded: Optional[str] = None
        if state is not None:
            self._restore(state)

    @property
    def state(self) -> NavigationState:
        return NavigationState(active_item=self._active, expanded_item=self._expanded)

    def select_item(self, item_id: str) -> NavigationState:
        """
        Section with subsections → toggle its group, active item unchanged.
        Leaf section or subsection → becomes active, groups collapse.
        Unknown ids and subsections the role can't see are ignored.
        """
        section = find_section(item_id)
        if section is not None and section_capability(self.role, item_id) is None:
            section = None

        if section is not None and section.has_subsections:
            self._expanded = None if self._expanded == item_id else item_id
        elif section is not None or subsection_allowed(self.role, item_id):
            self._active = item_id
            self._expanded = None
        else:
            logger.debug(f"Ignoring navigation to '{item_id}' for role '{self.role}'")

        return self.state

    def reset(self) -> NavigationState:
        self._active = DASHBOARD_ID
        self._expanded = None
        return self.state

    def logout(self, resolver, session: Optional[Session] = None) -> NavigationState:
        """Logout is an action, not a menu item: sign out, then back to default."""
        resolver.logout(session)
        return self.reset()

    def _restore(self, state: NavigationState) -> None:
        # Client-supplied state is untrusted; keep only what the role may hold
        active = state.active_item
        if section_capability(self.role, active) is not None or subsection_allowed(self.role, active):
            self._active = active

        expanded = find_section(state.expanded_item)
        if (
            expanded is not None
            and expanded.has_subsections
            and section_capability(self.role, expanded.id) is not None
        ):
            self._expanded = expanded.id

