from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from .context import Profile
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class _All:
    """Marker for a profile that includes every catalogue step."""

    def __repr__(self) -> str:
        return "ALL"


ALL = _All()

AllowedIds = Union[FrozenSet[str], _All]

_MINIMAL = ("setup_dnf", "setup_fonts", "setup_shell")

PROFILE_STEPS: Dict[Profile, Optional[Tuple[str, ...]]] = {
    Profile.MINIMAL: _MINIMAL,
    Profile.DEV: _MINIMAL + ("setup_dev", "setup_docker", "setup_antigravity", "setup_gemini"),
    Profile.GAMING: _MINIMAL
    + (
        "setup_drivers",
        "setup_packages",
        "setup_mangohud",
        "setup_flatpaks",
        "setup_browser_multimedia",
    ),
    # None means every step.
    Profile.FULL: None,
}


class ProfileFilter:
    def __init__(
        self,
        catalogue_ids: Iterable[str],
        profile_steps: Mapping[Profile, Optional[Tuple[str, ...]]] = PROFILE_STEPS,
    ) -> None:
        self.catalogue_ids = tuple(catalogue_ids)
        self.profile_steps = dict(profile_steps)

    def validate(self) -> None:
        """Fail fast on profile entries that name no catalogue step."""

        known = set(self.catalogue_ids)
        if len(known) != len(self.catalogue_ids):
            raise ConfigurationError("Step catalogue contains duplicate ids")
        for profile in Profile:
            if profile not in self.profile_steps:
                raise ConfigurationError(f"Profile {profile.value} has no step table")
            ids = self.profile_steps[profile]
            if ids is None:
                continue
            unknown = [i for i in ids if i not in known]
            if unknown:
                raise ConfigurationError(
                    f"Profile {profile.value} names unknown steps: {', '.join(unknown)}"
                )

    def allowed_ids(self, profile: Profile) -> AllowedIds:
        ids = self.profile_steps[profile]
        if ids is None:
            return ALL
        return frozenset(ids)

    def includes(self, profile: Profile, step_id: str) -> bool:
        allowed = self.allowed_ids(profile)
        if allowed is ALL:
            return True
        return step_id in allowed

    def ordered_ids(self, profile: Profile) -> Tuple[str, ...]:
        """Profile steps in catalogue order."""
        return tuple(i for i in self.catalogue_ids if self.includes(profile, i))

    def total_for(self, profile: Profile) -> int:
        return len(self.ordered_ids(profile))
