"""
Tests for profile-to-steps mapping.
"""

import pytest

from fedora_setup.context import Profile
from fedora_setup.errors import ConfigurationError
from fedora_setup.profiles import ALL, PROFILE_STEPS, ProfileFilter
from fedora_setup.steps import build_catalogue


@pytest.fixture
def profiles():
    f = ProfileFilter([s.step_id for s in build_catalogue()])
    f.validate()
    return f


@pytest.mark.parametrize(
    "profile,total",
    [(Profile.MINIMAL, 3), (Profile.DEV, 7), (Profile.GAMING, 8), (Profile.FULL, 20)],
)
def test_totals(profiles, profile, total):
    assert profiles.total_for(profile) == total


def test_full_is_all(profiles):
    assert profiles.allowed_ids(Profile.FULL) is ALL
    assert profiles.includes(Profile.FULL, "setup_gemini")


def test_named_profile_keeps_catalogue_order(profiles):
    assert profiles.ordered_ids(Profile.GAMING) == (
        "setup_dnf",
        "setup_fonts",
        "setup_shell",
        "setup_browser_multimedia",
        "setup_drivers",
        "setup_packages",
        "setup_mangohud",
        "setup_flatpaks",
    )


def test_membership_is_exact(profiles):
    assert profiles.includes(Profile.DEV, "setup_dev")
    assert not profiles.includes(Profile.DEV, "setup_de")
    assert not profiles.includes(Profile.MINIMAL, "setup")


def test_prefix_ids_are_not_spuriously_included():
    f = ProfileFilter(
        ["setup_dnf", "setup_dnf_extra", "setup_fonts", "setup_shell", "setup_dev", "setup_docker",
         "setup_antigravity", "setup_gemini", "setup_drivers", "setup_packages", "setup_mangohud",
         "setup_flatpaks", "setup_browser_multimedia"]
    )
    f.validate()
    assert "setup_dnf_extra" not in f.ordered_ids(Profile.MINIMAL)


def test_unknown_profile_ids_fail_fast():
    f = ProfileFilter(["setup_dnf", "setup_fonts"])
    with pytest.raises(ConfigurationError, match="setup_shell"):
        f.validate()


def test_duplicate_catalogue_ids_fail_fast():
    with pytest.raises(ConfigurationError, match="duplicate"):
        ProfileFilter(["setup_dnf", "setup_dnf"], profile_steps=PROFILE_STEPS).validate()
