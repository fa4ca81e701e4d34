"""
terraform-profile: switch between Terraform Cloud credentials files.
"""

__version__ = "0.1.0"
