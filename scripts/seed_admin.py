"""Create the first administrator (provider account + admin_users entry)"""
import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from projectboard.core.exceptions import AccountCreationException
from projectboard.core.logging_config import get_logger
from projectboard.deps import get_auth_provider, get_store
from projectboard.services.admin_service import seed_admin_user
from projectboard.services.reference_service import seed_reference_data

logger = get_logger("projectboard.seed_admin")


async def create_admin(email: str, password: str, name: str):
    store = get_store()
    seed_reference_data(store)
    try:
        await get_auth_provider().create_account(email, password, name)
    except AccountCreationException as e:
        # the account may already exist from an earlier run
        logger.warning(f"Provider account not created for {email}: {e.detail}")

    _, created = seed_admin_user(store, email, name)
    if created:
        logger.info(f"Admin user created successfully: {email}")
    else:
        logger.warning(f"{email} is already an admin")


def main():
    if len(sys.argv) < 3:
        logger.error("Usage: python scripts/seed_admin.py <email> <password> [name]")
        sys.exit(1)

    email = sys.argv[1]
    password = sys.argv[2]
    name = sys.argv[3] if len(sys.argv) > 3 else "Administrator"

    logger.info(f"Creating admin user: {email}")
    asyncio.run(create_admin(email, password, name))


if __name__ == "__main__":
    main()
