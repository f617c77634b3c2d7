#!/usr/bin/env python3
"""
Seed the onboarding_config table.

Writes the default page layout (About Me on page 2, Address on page 3),
or a custom one, replacing whatever is stored.

Usage:
    python scripts/seed_onboarding_config.py                     # Defaults
    python scripts/seed_onboarding_config.py --page2 about_me birthdate --page3 address
    python scripts/seed_onboarding_config.py --dry-run
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from onboarding.components import ConfigError, PageAssignments
from zealthy.db.client import get_onboarding_config, update_onboarding_config
from zealthy.models import default_onboarding_config


async def main(args: argparse.Namespace) -> int:
    if args.page2 or args.page3:
        pages = {2: args.page2 or [], 3: args.page3 or []}
    else:
        pages = default_onboarding_config()

    try:
        assignments = PageAssignments(pages)
    except ConfigError as e:
        print(f"Invalid config: {e.description}")
        return 1

    errors = assignments.validate()
    if errors:
        for error in errors:
            print(f"Invalid config: {error}")
        return 1

    print(f"Current: {await get_onboarding_config()}")
    print(f"New:     {assignments.to_config()}")

    if args.dry_run:
        print("Dry run - nothing written")
        return 0

    if not await update_onboarding_config(assignments.to_config()):
        print("Failed to write config")
        return 1

    print("Config saved")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed onboarding page config")
    parser.add_argument("--page2", nargs="*", help="Components for page 2")
    parser.add_argument("--page3", nargs="*", help="Components for page 3")
    parser.add_argument("--dry-run", action="store_true", help="Show the config without saving")
    sys.exit(asyncio.run(main(parser.parse_args())))
