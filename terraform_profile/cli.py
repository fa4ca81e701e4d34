#!/usr/bin/env python3
"""
Terraform Cloud Profile Manager CLI

A command-line utility for keeping several Terraform Cloud credentials
files side by side. This tool helps you import, list and switch between
them, and shows which one terraform is currently using.
"""

import argparse
import logging
import sys
import textwrap

from . import __version__
from .profiles import (
    list_profiles,
    get_current_profile,
    import_profile,
    switch_profile,
    ProfileError
)
from .utils import get_store_dir, get_credentials_path, setup_logging

logger = logging.getLogger(__name__)

PROG = "terraform-profile"

def _paths(args):
    """Resolve the store directory and credentials file for this invocation."""
    return get_store_dir(args.store_dir), get_credentials_path(args.credentials_file)

def format_profile_list(profiles):
    """Format profiles for display."""
    if not profiles:
        return "No profiles are currently available."

    output = []
    for p in profiles:
        marker = "→ " if p.is_active else "  "
        output.append(f"{marker}{p.name}")

    return "\n".join(output)

def handle_list(args):
    """Handle the list command."""
    store_dir, credentials_path = _paths(args)
    profiles = list_profiles(store_dir=store_dir, credentials_path=credentials_path)

    if args.names:
        for p in profiles:
            print(p.name)
        return

    if not profiles:
        print(format_profile_list(profiles), file=sys.stderr)
        return

    print("Terraform Cloud profiles:")
    print(format_profile_list(profiles))

def handle_status(args):
    """Handle the status command."""
    store_dir, credentials_path = _paths(args)
    current = get_current_profile(store_dir=store_dir, credentials_path=credentials_path)
    if current:
        print(current)
    else:
        print("No profile is currently in use.", file=sys.stderr)
        sys.exit(1)

def handle_import(args):
    """Handle the import command."""
    store_dir, credentials_path = _paths(args)
    profile = import_profile(
        args.name,
        force=args.force,
        store_dir=store_dir,
        credentials_path=credentials_path
    )
    print(f"The terraform cloud profile was safely registered as '{profile.name}'")

def handle_switch(args):
    """Handle the switch command."""
    store_dir, credentials_path = _paths(args)
    profile = switch_profile(
        args.name,
        force=args.force,
        store_dir=store_dir,
        credentials_path=credentials_path
    )
    print(f"Switched credentials to profile: {profile.name}")

def handle_shell_completion(args):
    """Display the bash completion function."""
    completion = textwrap.dedent("""
    # terraform-profile bash completion
    # Add this to your ~/.bashrc:
    #   eval "$(terraform-profile shell-completion)"

    _terraform_profile_completion() {
        local cur prev
        cur="${COMP_WORDS[COMP_CWORD]}"
        prev="${COMP_WORDS[COMP_CWORD-1]}"

        # Complete subcommands
        if [ "$COMP_CWORD" -eq 1 ]; then
            COMPREPLY=( $(compgen -W "import list ls status switch use help shell-completion" -- "$cur") )
            return 0
        fi

        # Complete stored profile names
        if [ "$prev" = "switch" ] || [ "$prev" = "use" ] || [ "$prev" = "import" ]; then
            COMPREPLY=( $(compgen -W "$(PROG_NAME list --names 2>/dev/null)" -- "$cur") )
            return 0
        fi
    }
    complete -F _terraform_profile_completion PROG_NAME
    """)

    print(completion.replace("PROG_NAME", PROG))

def build_parser():
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Terraform Cloud Profile Manager - Switch between Terraform Cloud credentials"
    )
    parser.add_argument("-V", "--version", action="version",
                        version=f"{PROG} {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show debug logging on stderr")
    parser.add_argument("--store-dir",
                        help="Profile store directory (default: ~/.terraform-profile)")
    parser.add_argument("--credentials-file",
                        help="Active credentials file (default: ~/.terraform.d/credentials.tfrc.json)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Import command
    import_parser = subparsers.add_parser("import", help="Import the current unregistered credentials as a profile")
    import_parser.add_argument("name", nargs="?", help="Profile name (generated if not specified)")
    import_parser.add_argument("--force", "-f", action="store_true",
                               help="Overwrite an existing profile with the same name")
    import_parser.set_defaults(func=handle_import)

    # List command
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List all registered profiles")
    list_parser.add_argument("--names", action="store_true",
                             help="Print bare profile names, one per line")
    list_parser.set_defaults(func=handle_list)

    # Status command
    status_parser = subparsers.add_parser("status", help="Show which profile is currently used")
    status_parser.set_defaults(func=handle_status)

    # Switch command
    switch_parser = subparsers.add_parser("switch", aliases=["use"], help="Switch to another profile")
    switch_parser.add_argument("name", help="Profile name to switch to")
    switch_parser.add_argument("--force", "-f", action="store_true",
                               help="Overwrite credentials that were never imported")
    switch_parser.set_defaults(func=handle_switch)

    # Help command
    help_parser = subparsers.add_parser("help", help="Show this help message")
    help_parser.set_defaults(func=lambda args: parser.print_help())

    # Shell completion command
    completion_parser = subparsers.add_parser("shell-completion", help="Display the bash completion function")
    completion_parser.set_defaults(func=handle_shell_completion)

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    logger.debug("Running command %s", args.command)
    try:
        args.func(args)
    except ProfileError as e:
        logger.debug("Command %s failed: %r", args.command, e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
