"""
Firefox profile lookup.

Resolves a profile section of ``profiles.ini`` (for example ``Profile0``) to
the ``places.sqlite`` database that holds its bookmarks.
"""

import configparser
import os
import logging

from mebarchive.core.errors import ProfileError


PROFILES_INI = "profiles.ini"
PLACES_DB = "places.sqlite"

logger = logging.getLogger(__name__)


def default_firefox_dir() -> str:
    return os.path.join(os.path.expanduser("~"), ".mozilla", "firefox")


def locate_places_db(firefox_dir: str, profile: str) -> str:
    """
    Find the bookmark database of a Firefox profile.

    Args:
        firefox_dir: Directory containing profiles.ini
        profile: Section name in profiles.ini, e.g. "Profile0"

    Returns:
        Path to the profile's places.sqlite

    Raises:
        ProfileError: profiles.ini is missing or malformed, or lacks the profile
    """
    ini_path = os.path.join(firefox_dir, PROFILES_INI)
    logger.info(f"reading ff profiles from {ini_path}")

    parser = configparser.ConfigParser(interpolation=None)
    # Firefox writes keys like "IsRelative" and "Path"; keep their case
    parser.optionxform = str
    try:
        with open(ini_path, 'r', encoding='utf-8') as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        raise ProfileError(f"read profiles.ini from {ini_path}: {e}") from e

    if not parser.has_section(profile):
        raise ProfileError(f"get profile from ini: section {profile!r} not found in {ini_path}")
    section = parser[profile]

    for key in ("Name", "Path"):
        if key not in section:
            raise ProfileError(f"get .{key} from profile {profile!r} in {ini_path}")

    name = section["Name"]
    profile_path = section["Path"]
    logger.info(f"profile: name: {name!r}; path: {profile_path!r}")

    if section.get("IsRelative", "1") == "0":
        return os.path.join(profile_path, PLACES_DB)
    return os.path.join(firefox_dir, profile_path, PLACES_DB)
