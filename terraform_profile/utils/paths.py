import os
from pathlib import Path
from typing import Optional

PROFILE_SUFFIX = ".tfrc.json"
CREDENTIALS_FILENAME = "credentials.tfrc.json"

STORE_DIR_ENV = "TERRAFORM_PROFILE_HOME"
CREDENTIALS_FILE_ENV = "TF_CLI_CREDENTIALS_FILE"

def get_store_dir(override: Optional[str] = None) -> Path:
    """
    Get the directory holding the saved profiles.

    Args:
        override: Explicit path, takes precedence over the environment

    Returns:
        Path: The store directory (not created here)
    """
    if override:
        return Path(override).expanduser()

    env_dir = os.environ.get(STORE_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()

    return Path.home() / ".terraform-profile"

def get_credentials_path(override: Optional[str] = None) -> Path:
    """
    Get the path of the credentials file read by terraform.

    Args:
        override: Explicit path, takes precedence over the environment

    Returns:
        Path: The active credentials file path
    """
    if override:
        return Path(override).expanduser()

    env_file = os.environ.get(CREDENTIALS_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()

    return Path.home() / ".terraform.d" / CREDENTIALS_FILENAME

def profile_filename(name: str) -> str:
    """Return the store filename for a profile name."""
    return f"{name}{PROFILE_SUFFIX}"

def profile_name_from_filename(filename: str) -> Optional[str]:
    """
    Derive a profile name from a store filename.

    Args:
        filename: Bare file name, e.g. "work.tfrc.json"

    Returns:
        Optional[str]: The profile name, or None if the file is not a profile
    """
    if not filename.endswith(PROFILE_SUFFIX) or filename.startswith("."):
        return None

    name = filename[:-len(PROFILE_SUFFIX)]
    return name or None
