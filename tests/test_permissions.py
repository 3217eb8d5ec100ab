# tests/test_permissions.py

"""
Tests for the menu permission table and the capability rules.
"""

import pytest

from core.errors import MenuConfigError
from core.menu_config import MENU_CONFIG, SUBSECTION_TARGETS, validate_menu_config
from core.permission_helpers import (
    resolve_visible_sections,
    section_capability,
    subsection_allowed,
    subsection_visible,
)
from models.enums import Capability
from models.menu import MenuSection, MenuSubsection, RoleAccess


@pytest.mark.parametrize("required", list(Capability))
def test_full_sees_every_subsection(required):
    assert subsection_visible(Capability.full, required) is True


@pytest.mark.parametrize(
    "required,expected",
    [
        (Capability.view, True),
        (Capability.full, False),
        (Capability.personal, False),
    ],
)
def test_view_sees_only_view_subsections(required, expected):
    assert subsection_visible(Capability.view, required) is expected


@pytest.mark.parametrize("granted", [Capability.personal, None])
@pytest.mark.parametrize("required", list(Capability))
def test_other_capabilities_see_nothing(granted, required):
    assert subsection_visible(granted, required) is False


def test_add_worker_hidden_for_sub_visible_for_super():
    sub_workers = next(s for s in resolve_visible_sections("sub") if s.id == "workers")
    super_workers = next(s for s in resolve_visible_sections("super") if s.id == "workers")

    assert "add-worker" not in [x.id for x in sub_workers.subsections]
    assert "add-worker" in [x.id for x in super_workers.subsections]
    assert subsection_allowed("sub", "add-worker") is False
    assert subsection_allowed("super", "add-worker") is True


def test_sub_workers_subsections_are_the_view_ones():
    workers = next(s for s in resolve_visible_sections("sub") if s.id == "workers")
    assert [x.id for x in workers.subsections] == [
        "view-workers",
        "manage-workers",
        "view-categories",
        "worker-verification",
        "worker-performance",
    ]


def test_personal_section_opens_but_lists_no_subsections():
    settings = next(s for s in resolve_visible_sections("sub") if s.id == "settings")
    assert settings.capability == Capability.personal
    assert settings.render_target == "SettingsPersonal"
    assert settings.subsections == []


def test_role_is_case_insensitive():
    assert section_capability("SUPER", "admins") == Capability.full
    assert section_capability(" Sub ", "admins") == Capability.view


@pytest.mark.parametrize("role", ["guest", "", None, 42])
def test_unknown_role_is_fail_closed(role):
    assert resolve_visible_sections(role) == []
    assert section_capability(role, "dashboard") is None
    assert subsection_allowed(role, "view-workers") is False


def test_every_subsection_has_a_render_target():
    ids = [sub.id for section in MENU_CONFIG for sub in section.subsections]
    assert len(ids) == len(set(ids))
    assert set(ids) == set(SUBSECTION_TARGETS)


def _section(id, subsections=()):
    return MenuSection(
        id=id,
        name=id.title(),
        access={"super": RoleAccess(render_target="X", capability=Capability.full)},
        subsections=list(subsections),
    )


def test_validate_rejects_duplicate_ids():
    sections = [
        _section("dashboard"),
        _section("workers", [MenuSubsection(id="view-workers", name="View", required=Capability.view)]),
        _section("workers"),
    ]
    with pytest.raises(MenuConfigError):
        validate_menu_config(sections, {"view-workers": "ViewWorkers"})


def test_validate_rejects_subsection_without_target():
    sections = [
        _section("dashboard"),
        _section("workers", [MenuSubsection(id="view-workers", name="View", required=Capability.view)]),
    ]
    with pytest.raises(MenuConfigError):
        validate_menu_config(sections, {})


def test_validate_requires_dashboard():
    with pytest.raises(MenuConfigError):
        validate_menu_config([_section("workers")], {})
