#!/usr/bin/env python3
"""Seed a superadmin account.

Superadmins cannot be created over HTTP. Run this once per deployment to
create the first one; it can then create admins through ``/api/admin``.

Usage:
    python scripts/create_superadmin.py --name "Station Owner" \\
        --email owner@example.com --phone "+201001234567" --password secret123

    # Password from the environment instead of the command line
    SUPERADMIN_PASSWORD=secret123 python scripts/create_superadmin.py \\
        --name "Station Owner" --email owner@example.com --phone "+201001234567"
"""

import argparse
import asyncio
import os
import sys

from pydantic import ValidationError

from app.core.container import create_container, shutdown_container
from app.core.exceptions import SeagullsError
from app.core.logging import get_logger, setup_logging
from app.schemas.identity import AccountCreate

setup_logging()
logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a SeagullsFM superadmin account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--email", required=True, help="Login e-mail")
    parser.add_argument("--phone", required=True, help="Phone number with country code")
    parser.add_argument(
        "--password",
        default=os.environ.get("SUPERADMIN_PASSWORD"),
        help="Password (defaults to $SUPERADMIN_PASSWORD)",
    )
    return parser.parse_args(argv)


async def create_superadmin(args: argparse.Namespace) -> int:
    """Create the account and return a process exit code."""
    if not args.password:
        logger.error("Password is required (--password or SUPERADMIN_PASSWORD)")
        return 2

    try:
        data = AccountCreate(
            name=args.name,
            email=args.email,
            phone_number=args.phone,
            password=args.password,
        )
    except ValidationError as e:
        for error in e.errors():
            logger.error("Invalid account field", field=error["loc"], message=error["msg"])
        return 2

    container = create_container()
    try:
        staff = container.services.staff_service()
        principal = await staff.create_superadmin(data)
    except SeagullsError as e:
        logger.error("Superadmin not created", error=e.message)
        return 1
    finally:
        await shutdown_container(container)

    logger.info("Superadmin created", principal_id=str(principal.id), email=principal.email)
    return 0


def main() -> None:
    sys.exit(asyncio.run(create_superadmin(parse_args())))


if __name__ == "__main__":
    main()
