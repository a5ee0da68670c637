"""Promote an existing user to admin.

Usage: python scripts/setup_admin.py user@example.com

The user must have signed in at least once so the account exists.
"""

from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from worklog_tracker.config import get_settings_module
from worklog_tracker.container import build_container
from worklog_tracker.core.enums import Role
from worklog_tracker.core.exceptions import DomainError


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print("Please provide an email address: python scripts/setup_admin.py user@example.com")
        return 1

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    try:
        user = container.user_service.promote_to_admin(argv[1])
    except DomainError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"OK: {user.name} <{user.email}> is now {user.role.value}")
    admins = container.user_service.list_users(Role.ADMIN)
    print("Admins: " + ", ".join(a.email for a in admins))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
