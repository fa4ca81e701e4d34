"""
Terraform Cloud profile management: save, list and switch copies of the
credentials file terraform reads.
"""

from .profile_manager import (
    list_profiles,
    get_current_profile,
    import_profile,
    switch_profile,
    validate_profile_name,
    generate_profile_name,
    ProfileInfo
)
from .exceptions import (
    ProfileError,
    ProfileNotFoundError,
    NoActiveCredentialsError,
    ProfileExistsError,
    ProfileAlreadyImportedError,
    UnsavedCredentialsError,
    InvalidProfileNameError,
    ProfileStoreError
)
