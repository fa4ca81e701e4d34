"""
Utility functions for locating profile files and configuring logging.
"""

from .paths import (
    get_store_dir,
    get_credentials_path,
    profile_filename,
    profile_name_from_filename,
    PROFILE_SUFFIX,
)
from .logging_setup import setup_logging

__all__ = [
    'get_store_dir',
    'get_credentials_path',
    'profile_filename',
    'profile_name_from_filename',
    'PROFILE_SUFFIX',
    'setup_logging',
]
