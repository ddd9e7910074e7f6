"""
Region and module access rules.

A user's effective access is merged from every ProjectAssignment row carrying
their email:

- regions: union of assigned_states
- modules: union of module_access
- region_access: per region, the highest level among view < edit < admin

Admins bypass every rule. A non-admin with no regions sees all regions, while a
non-admin with no modules opens none.
"""
from typing import Iterable, Optional

from solarops.core.constants import CHITOOR, REGION_ACCESS_LEVELS, REGIONS, STATE_ABBREVIATIONS
from solarops.models.user import UserRole
from solarops.schemas.access import AccessProfile


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Expand TG / AP to the full state name and give known regions their
    canonical spelling whatever the case. Other values are only trimmed.
    """
    if state is None:
        return None
    text = state.strip()
    if text.upper() in STATE_ABBREVIATIONS:
        return STATE_ABBREVIATIONS[text.upper()]
    for region in REGIONS:
        if region.lower() == text.lower():
            return region
    return text


def build_access_profile(user, assignments: Iterable) -> AccessProfile:
    regions = []
    modules = []
    levels = {}
    for assignment in assignments:
        for state in assignment.assigned_states or []:
            if state not in regions:
                regions.append(state)
        for module in assignment.module_access or []:
            if module not in modules:
                modules.append(module)
        for state, level in (assignment.region_access or {}).items():
            current = levels.get(state)
            if REGION_ACCESS_LEVELS.get(level, 0) > REGION_ACCESS_LEVELS.get(current, 0):
                levels[state] = level

    return AccessProfile(
        email=user.email,
        is_admin=user.is_privileged,
        regions=regions,
        modules=modules,
        region_access=levels,
    )


def region_allowed(profile: AccessProfile, allowed_regions: Iterable[str]) -> bool:
    """True when the user may open a screen that serves any of ``allowed_regions``."""
    if profile.is_admin or not profile.regions:
        return True
    return any(region in profile.regions for region in allowed_regions)


def module_allowed(profile: AccessProfile, module_key: str) -> bool:
    if profile.is_admin:
        return True
    return module_key in profile.modules


def state_visible(profile: AccessProfile, state: Optional[str]) -> bool:
    """Row-level check: may this user see a project located in ``state``."""
    if profile.is_admin or not profile.regions:
        return True
    if not state:
        return False
    return state.strip().lower() in {r.lower() for r in profile.regions}


def chitoor_visible(profile: AccessProfile) -> bool:
    return state_visible(profile, CHITOOR)


def can_edit_state(user, profile: AccessProfile, state: Optional[str]) -> bool:
    """
    Editing a project needs the editor role, an admin role, or edit/admin
    region access to the project's state.
    """
    if profile.is_admin or user.has_role(UserRole.EDITOR):
        return True
    wanted = (state or "").strip().lower()
    level = next(
        (lvl for region, lvl in profile.region_access.items() if region.lower() == wanted),
        None,
    )
    return REGION_ACCESS_LEVELS.get(level, 0) >= REGION_ACCESS_LEVELS["edit"]
