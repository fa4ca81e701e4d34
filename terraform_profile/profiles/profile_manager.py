"""
Terraform Cloud Profile Manager

This module manages named copies of the Terraform Cloud credentials file
(~/.terraform.d/credentials.tfrc.json). Profiles live in a store directory
as <name>.tfrc.json files; switching copies one of them over the active
credentials file. File contents are treated as opaque bytes.
"""

import filecmp
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..utils.paths import (
    get_store_dir,
    get_credentials_path,
    profile_filename,
    profile_name_from_filename,
)
from .exceptions import (
    ProfileNotFoundError,
    NoActiveCredentialsError,
    ProfileExistsError,
    ProfileAlreadyImportedError,
    UnsavedCredentialsError,
    InvalidProfileNameError,
    ProfileStoreError,
)

__all__ = [
    'list_profiles',
    'get_current_profile',
    'import_profile',
    'switch_profile',
    'validate_profile_name',
    'generate_profile_name',
    'ProfileInfo'
]

logger = logging.getLogger(__name__)

GENERATED_NAME_PREFIX = "profile-"

class ProfileInfo:
    """Contains information about a stored profile."""
    def __init__(self, name: str, path: Path, is_active: bool = False):
        self.name = name
        self.path = path
        self.is_active = is_active

    def __str__(self) -> str:
        """Return string representation of the profile info."""
        status_str = " (ACTIVE)" if self.is_active else ""
        return f"{self.name}{status_str}"

    def __repr__(self) -> str:
        return f"ProfileInfo(name={self.name!r}, path={str(self.path)!r}, is_active={self.is_active})"

def _scan_store(store_dir: Path) -> Dict[str, Path]:
    """
    Map profile names to their files in the store.

    Args:
        store_dir: The store directory

    Returns:
        Dict of profile name to file path, ordered by name. Empty if the
        directory does not exist.
    """
    profiles = {}
    try:
        entries = list(os.scandir(store_dir))
    except FileNotFoundError:
        logger.debug("Store directory %s does not exist", store_dir)
        return profiles
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot read profile store {store_dir}: {e.strerror or e}",
            {"path": str(store_dir)}
        ) from e

    for entry in entries:
        name = profile_name_from_filename(entry.name)
        if name is None:
            logger.debug("Ignoring non-profile entry %s", entry.path)
            continue
        try:
            if not entry.is_file():
                continue
        except OSError:
            continue
        profiles[name] = Path(entry.path)

    return dict(sorted(profiles.items()))

def _credentials_exist(credentials_path: Path) -> bool:
    """Check for the credentials file, following symlinks."""
    try:
        return credentials_path.exists()
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot access credentials file {credentials_path}: {e.strerror or e}",
            {"path": str(credentials_path)}
        ) from e

def _match_active(credentials_path: Path, profiles: Dict[str, Path]) -> Optional[str]:
    """
    Find the stored profile the active credentials file corresponds to.

    A symlink into the store matches by target; anything else is compared
    byte for byte. The first match in name order wins.
    """
    if not _credentials_exist(credentials_path):
        return None

    # filecmp caches results by size and mtime
    filecmp.clear_cache()
    try:
        if credentials_path.is_symlink():
            target = credentials_path.resolve()
            for name, path in profiles.items():
                if path.resolve() == target:
                    return name

        for name, path in profiles.items():
            if filecmp.cmp(credentials_path, path, shallow=False):
                return name
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot compare credentials file {credentials_path}: {e.strerror or e}",
            {"path": str(credentials_path)}
        ) from e

    return None

def _copy_file(source: Path, destination: Path) -> None:
    """
    Copy source over destination through a temporary file and a rename.

    An existing destination (or a symlink at that path) is replaced, never
    written through. The result is readable by the owner only.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=str(destination.parent), prefix=f".{destination.name}.", suffix=".tmp"
        )
        os.close(fd)
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot write to {destination.parent}: {e.strerror or e}",
            {"destination": str(destination)}
        ) from e

    try:
        shutil.copyfile(source, tmp_name)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, destination)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            logger.warning("Could not remove temporary file %s", tmp_name)
        raise ProfileStoreError(
            f"Cannot copy {source} to {destination}: {e.strerror or e}",
            {"source": str(source), "destination": str(destination)}
        ) from e

def validate_profile_name(name: str) -> str:
    """
    Check that a profile name can be used as a store filename.

    Args:
        name: The requested profile name

    Returns:
        The name, unchanged

    Raises:
        InvalidProfileNameError: If the name is empty, hidden or contains a path separator
    """
    if not name or not name.strip():
        raise InvalidProfileNameError("Profile name must not be empty")

    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    if any(sep in name for sep in separators):
        raise InvalidProfileNameError(
            f"Profile name '{name}' must not contain a path separator", {"name": name}
        )

    if name.startswith("."):
        raise InvalidProfileNameError(
            f"Profile name '{name}' must not start with '.'", {"name": name}
        )

    return name

def generate_profile_name(store_dir: Optional[Path] = None) -> str:
    """
    Pick the first free "profile-N" name in the store.

    Args:
        store_dir: The store directory (default location if None)

    Returns:
        A name not used by any stored profile
    """
    profiles = _scan_store(store_dir or get_store_dir())
    index = 1
    while f"{GENERATED_NAME_PREFIX}{index}" in profiles:
        index += 1
    return f"{GENERATED_NAME_PREFIX}{index}"

def list_profiles(store_dir: Optional[Path] = None,
                  credentials_path: Optional[Path] = None) -> List[ProfileInfo]:
    """
    List all profiles saved in the store.

    Args:
        store_dir: The store directory (default location if None)
        credentials_path: The active credentials file (default location if None)

    Returns:
        List of ProfileInfo objects sorted by name, empty if nothing is stored

    Raises:
        ProfileStoreError: If the store directory exists but cannot be read
    """
    store_dir = store_dir or get_store_dir()
    credentials_path = credentials_path or get_credentials_path()

    profiles = _scan_store(store_dir)
    active = _match_active(credentials_path, profiles)

    return [
        ProfileInfo(name=name, path=path, is_active=(name == active))
        for name, path in profiles.items()
    ]

def get_current_profile(store_dir: Optional[Path] = None,
                        credentials_path: Optional[Path] = None) -> Optional[str]:
    """
    Get the name of the profile the active credentials file matches.

    Returns:
        Name of the active profile, or None if there is no credentials file
        or it matches no stored profile
    """
    store_dir = store_dir or get_store_dir()
    credentials_path = credentials_path or get_credentials_path()

    if not _credentials_exist(credentials_path):
        logger.debug("No credentials file at %s", credentials_path)
        return None

    return _match_active(credentials_path, _scan_store(store_dir))

def import_profile(name: Optional[str] = None, force: bool = False,
                   store_dir: Optional[Path] = None,
                   credentials_path: Optional[Path] = None) -> ProfileInfo:
    """
    Save the active credentials file into the store.

    The active file is left untouched.

    Args:
        name: Name for the new profile; a "profile-N" name is generated if None
        force: Overwrite an existing profile with the same name

    Returns:
        ProfileInfo for the stored profile

    Raises:
        NoActiveCredentialsError: If there is no credentials file
        ProfileAlreadyImportedError: If the credentials are already stored
        ProfileExistsError: If the name is taken and force is False
        InvalidProfileNameError: If the name is not usable
    """
    store_dir = store_dir or get_store_dir()
    credentials_path = credentials_path or get_credentials_path()

    if name is not None:
        validate_profile_name(name)

    if not _credentials_exist(credentials_path):
        raise NoActiveCredentialsError(
            f"Nothing to import: no credentials file at {credentials_path}",
            {"path": str(credentials_path)}
        )

    profiles = _scan_store(store_dir)
    existing = _match_active(credentials_path, profiles)
    if existing is not None and not (force and existing == name):
        raise ProfileAlreadyImportedError(
            f"The profile is already imported under '{existing}'", existing
        )

    if name is None:
        name = generate_profile_name(store_dir)
        logger.info("Generated profile name %s", name)

    if name in profiles and not force:
        raise ProfileExistsError(
            f"Profile '{name}' already exists, use --force to overwrite it",
            {"name": name}
        )

    try:
        store_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot create profile store {store_dir}: {e.strerror or e}",
            {"path": str(store_dir)}
        ) from e

    destination = store_dir / profile_filename(name)
    _copy_file(credentials_path, destination)
    logger.info("Imported %s as profile %s", credentials_path, name)

    return ProfileInfo(name=name, path=destination, is_active=True)

def switch_profile(name: str, force: bool = False,
                   store_dir: Optional[Path] = None,
                   credentials_path: Optional[Path] = None) -> ProfileInfo:
    """
    Make a stored profile the active credentials file.

    Args:
        name: Name of the profile to switch to
        force: Overwrite credentials that match no stored profile

    Returns:
        ProfileInfo for the activated profile

    Raises:
        ProfileNotFoundError: If no profile has that name
        UnsavedCredentialsError: If the current credentials were never
            imported and force is False
    """
    store_dir = store_dir or get_store_dir()
    credentials_path = credentials_path or get_credentials_path()

    profiles = _scan_store(store_dir)
    profile_path = profiles.get(name)
    if profile_path is None:
        raise ProfileNotFoundError(
            f"Couldn't find the profile '{name}' to switch to", {"name": name}
        )

    if not force and _credentials_exist(credentials_path) and _match_active(credentials_path, profiles) is None:
        raise UnsavedCredentialsError(
            "The current credentials are not saved as a profile. "
            "Import them first or use --force to overwrite them",
            {"path": str(credentials_path)}
        )

    try:
        credentials_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProfileStoreError(
            f"Cannot create {credentials_path.parent}: {e.strerror or e}",
            {"path": str(credentials_path.parent)}
        ) from e

    _copy_file(profile_path, credentials_path)
    logger.info("Switched %s to profile %s", credentials_path, name)

    return ProfileInfo(name=name, path=profile_path, is_active=True)
