#!/usr/bin/env python3
"""
Migration tool that creates the users table if it does not exist
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from user_records.database import schema
from user_records.database.connection import PersistenceError, PostgresGateway
from user_records.services.bootstrap import ensure_users_table


async def migrate(dsn: str) -> None:
    """Connect, create the users table when absent, then disconnect"""
    gateway = PostgresGateway(dsn, min_size=1, max_size=1)
    try:
        await gateway.query(schema.PING)
        print("Connected to database")
        print("Creating users table if not exists...")
        await ensure_users_table(gateway)
    finally:
        await gateway.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI interface"""
    parser = argparse.ArgumentParser(description="Create the users table if it does not exist")
    parser.add_argument("--dsn", help="PostgreSQL DSN (defaults to DATABASE_URL or the DB_* variables)")
    parser.add_argument("--env-file", default=None, help="Path to a .env file to load first")
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)

    # Settings read the environment at import time, after the .env file is loaded
    from user_records.config import settings

    dsn = args.dsn or settings.get_database_dsn()

    try:
        asyncio.run(migrate(dsn))
    except PersistenceError as e:
        print(f"❌ Migration failed: {e}", file=sys.stderr)
        return 1

    print("✅ Migration completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
