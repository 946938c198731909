"""
Podium command line

Usage:
    podium serve [--host HOST] [--port PORT] [--reload]
    podium migrate
    podium create-admin --username NAME [--password PW] [--display-name NAME]
    podium seed-demo
"""

import argparse
import asyncio
import logging
import secrets
import string
import sys
from datetime import time, timedelta
from typing import Optional

from podium.core.auth import get_password_hash
from podium.core.config import settings
from podium.core.log_config import configure_logging
from podium.db.migrations import upgrade_to_head
from podium.db.session import AsyncSessionLocal
from podium.models.enums import AccountRole
from podium.repos import account_repo, event_repo, special_bet_repo
from podium.services.catalog import local_today

logger = logging.getLogger(__name__)


def generate_secure_password(length: int = 16) -> str:
    """Generate a secure random password."""
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return ''.join(secrets.choice(alphabet) for _ in range(length))


async def create_admin(username: str, password: Optional[str] = None, display_name: Optional[str] = None) -> bool:
    """Create an admin account, or promote an existing account to admin."""
    generated = password is None
    password = password or generate_secure_password()

    async with AsyncSessionLocal() as session:
        account = await account_repo.get_account_by_username(session, username)
        if account:
            if account.is_admin:
                logger.info(f"Account {username} is already an admin")
                return True
            account.role = AccountRole.ADMIN.value
            await session.commit()
            logger.info(f"Promoted {username} to admin")
            return True

        await account_repo.create_account(
            session,
            username=username,
            password_hash=get_password_hash(password),
            display_name=display_name,
            role=AccountRole.ADMIN.value
        )

    logger.info(f"Created admin {username}")
    if generated:
        print(f"Generated password for {username}: {password}")
    return True


DEMO_ACCOUNTS = [
    ("alice", "Alice"),
    ("bob", "Bob"),
    ("carol", "Carol"),
    ("dave", "Dave"),
]


async def seed_demo() -> bool:
    """Load a few accounts, events inside the betting window and a special bet."""
    async with AsyncSessionLocal() as session:
        if await event_repo.get_events(session, limit=1):
            logger.info("Database already has events; skipping demo seed")
            return True

        ids = []
        for username, display_name in DEMO_ACCOUNTS:
            account = await account_repo.get_account_by_username(session, username)
            if not account:
                account = await account_repo.create_account(
                    session,
                    username=username,
                    password_hash=get_password_hash(f"{username}-demo"),
                    display_name=display_name
                )
            ids.append(account.id)

        today = local_today()
        await event_repo.create_event(
            session,
            title="Backyard Sprint",
            event_date=today,
            event_time=time(18, 0),
            description="100m, grass track",
            participant_ids=ids[:2],
            moneylines=[-150, 130]
        )
        await event_repo.create_event(
            session,
            title="Darts Final",
            event_date=today + timedelta(days=2),
            event_time=time(20, 30),
            participant_ids=ids,
            moneylines=[200, 250, -120, 400]
        )
        await special_bet_repo.create_special_bet(
            session,
            description="Someone falls into the pool before midnight",
            odds=300
        )
        await session.commit()

    logger.info(f"Seeded {len(DEMO_ACCOUNTS)} accounts, 2 events and 1 special bet")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="podium", description=f"{settings.app_name} management commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    subparsers.add_parser("migrate", help="Apply database migrations")

    admin = subparsers.add_parser("create-admin", help="Create or promote an admin account")
    admin.add_argument("--username", required=True)
    admin.add_argument("--password", help="Generated and printed when omitted")
    admin.add_argument("--display-name")

    subparsers.add_parser("seed-demo", help="Load demo accounts, events and a special bet")

    return parser


def main(argv=None) -> int:
    """Main CLI function"""
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == "serve":
        import uvicorn
        uvicorn.run("podium.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    if args.command == "migrate":
        upgrade_to_head()
        return 0

    if args.command == "create-admin":
        success = asyncio.run(create_admin(args.username, args.password, args.display_name))
    else:
        success = asyncio.run(seed_demo())
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
