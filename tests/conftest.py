"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the terraform_profile package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Isolated terraform-profile environment
class ProfileEnvironment:
    """Store directory and credentials file under a temporary home."""

    def __init__(self, root):
        self.home = root / "home"
        self.home.mkdir()
        self.store_dir = self.home / ".terraform-profile"
        self.credentials_path = self.home / ".terraform.d" / "credentials.tfrc.json"

    def write_credentials(self, content):
        """Write the active credentials file."""
        self.credentials_path.parent.mkdir(parents=True, exist_ok=True)
        self.credentials_path.write_bytes(content)

    def read_credentials(self):
        """Read the active credentials file."""
        return self.credentials_path.read_bytes()

    def add_profile(self, name, content):
        """Put a profile file straight into the store."""
        self.store_dir.mkdir(parents=True, exist_ok=True)
        path = self.store_dir / f"{name}.tfrc.json"
        path.write_bytes(content)
        return path

@pytest.fixture
def profile_env(tmp_path, monkeypatch):
    """Fixture pointing the store and the credentials file at tmp_path."""
    env = ProfileEnvironment(tmp_path)
    monkeypatch.setenv("HOME", str(env.home))
    monkeypatch.setenv("TERRAFORM_PROFILE_HOME", str(env.store_dir))
    monkeypatch.setenv("TF_CLI_CREDENTIALS_FILE", str(env.credentials_path))
    monkeypatch.delenv("TERRAFORM_PROFILE_LOG_LEVEL", raising=False)
    return env

@pytest.fixture
def work_token():
    return b'{"credentials": {"app.terraform.io": {"token": "work.atlasv1.aaaa"}}}\n'

@pytest.fixture
def personal_token():
    return b'{"credentials": {"app.terraform.io": {"token": "personal.atlasv1.bbbb"}}}\n'
