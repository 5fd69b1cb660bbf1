#!/usr/bin/env python3
"""
Entrypoint script for development and management tasks.

    python manage.py ensure-indexes
"""
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# === Add 'src' directory to PYTHONPATH ===
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

load_dotenv(dotenv_path=PROJECT_ROOT / ".env", override=True)

from common.logging.logger import log_info, log_error  # noqa: E402
from infrastructure.database.mongodb.connection import MongoDBConnection  # noqa: E402

COMMANDS = ("ensure-indexes",)


async def ensure_indexes_command():
    # connect() builds every declared index
    await MongoDBConnection.connect()
    await MongoDBConnection.disconnect()
    log_info("Indexes ensured")


def main():
    log_info("Manage script started.", extra={"argv": sys.argv[1:]})
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(f"Usage: python manage.py [{'|'.join(COMMANDS)}]")
        return 1
    try:
        asyncio.run(ensure_indexes_command())
    except Exception as e:
        log_error("Manage command failed", extra={"command": sys.argv[1], "error": str(e)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
