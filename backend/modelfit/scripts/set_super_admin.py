"""Promote an existing account to super_admin from the command line.

Usage: modelfit-set-super-admin user@example.com
"""

import argparse
import asyncio
import sys

import structlog

from modelfit.config import settings
from modelfit.core.exceptions import ModelFitError
from modelfit.core.logging import setup_logging
from modelfit.db.session import create_tables, dispose_engine, get_session_factory
from modelfit.services.auth_service import AuthService

logger = structlog.get_logger()


async def promote(identifier: str) -> bool:
    await create_tables()
    try:
        async with get_session_factory()() as session:
            _, changed = await AuthService(session).promote_super_admin(identifier)
            await session.commit()
        return changed
    finally:
        await dispose_engine()


def main() -> int:
    parser = argparse.ArgumentParser(description="Promote a user to super_admin")
    parser.add_argument("identifier", help="email or phone of an existing account")
    args = parser.parse_args()

    setup_logging(debug=settings.debug)
    try:
        changed = asyncio.run(promote(args.identifier))
    except ModelFitError as e:
        logger.error("set_super_admin_failed", identifier=args.identifier, code=e.code, error=e.message)
        return 1

    if changed:
        print(f"{args.identifier} is now super_admin")
    else:
        print(f"{args.identifier} is already super_admin")
    return 0


if __name__ == "__main__":
    sys.exit(main())
