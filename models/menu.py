# models/menu.py

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.enums import Capability


# ===============================================================
# PERMISSION TABLE SHAPES
# ===============================================================

class RoleAccess(BaseModel):
    """What a role gets when it opens a top-level section."""
    model_config = ConfigDict(frozen=True)

    render_target: str
    capability: Optional[Capability] = None


class MenuSubsection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    required: Capability


class MenuSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    access: Dict[str, RoleAccess]
    subsections: List[MenuSubsection] = []

    @property
    def has_subsections(self) -> bool:
        return len(self.subsections) > 0


# ===============================================================
# RESOLVED (PER ROLE) SHAPES
# ===============================================================

class ResolvedSection(BaseModel):
    id: str
    name: str
    capability: Capability
    render_target: str
    has_subsections: bool = False
    subsections: List[MenuSubsection] = []


class NavigationState(BaseModel):
    active_item: str = "dashboard"
    expanded_item: Optional[str] = None


class NavigationSelectRequest(BaseModel):
    item_id: str
    state: NavigationState = Field(default_factory=NavigationState)


class ContentTarget(BaseModel):
    render_target: str
    title: str
    subtitle: str
    capability: Optional[Capability] = None


class NavigationView(BaseModel):
    state: NavigationState
    content: ContentTarget
