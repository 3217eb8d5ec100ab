# routers/navigation.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.permission_helpers import resolve_visible_sections
from dependencies.auth import get_current_admin
from models.auth import AuthContext
from models.menu import ContentTarget, NavigationSelectRequest, NavigationView, ResolvedSection
from services.content_router import resolve_content
from services.navigation import NavigationController

router = APIRouter(
    prefix="/navigation",
    tags=["Navigation"],
)


# -----------------------------------------------------
# GET /navigation/menu
# The sidebar for the caller's role
# -----------------------------------------------------
@router.get("/menu", response_model=List[ResolvedSection], summary="Menu visible to the current admin")
def get_menu(context: AuthContext = Depends(get_current_admin)):
    return resolve_visible_sections(context.role)


# -----------------------------------------------------
# POST /navigation/select
# Applies one click to the client's last navigation state
# -----------------------------------------------------
@router.post("/select", response_model=NavigationView, summary="Select a menu item")
def select_item(
    payload: NavigationSelectRequest,
    context: AuthContext = Depends(get_current_admin),
):
    """
    Clicking a group toggles it; clicking a leaf or subsection makes it
    active and collapses the groups. Returns the new state together with
    the content to render for it.
    """
    controller = NavigationController(context.role, payload.state)
    state = controller.select_item(payload.item_id)
    return NavigationView(
        state=state,
        content=resolve_content(state.active_item, context.role),
    )


# -----------------------------------------------------
# GET /navigation/content?item=<id>
# -----------------------------------------------------
@router.get("/content", response_model=ContentTarget, summary="Content target for a menu item")
def get_content(
    item: Optional[str] = None,
    context: AuthContext = Depends(get_current_admin),
):
    return resolve_content(item, context.role)
