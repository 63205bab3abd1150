"""Delete projects whose deadline has passed (run from cron or a scheduler)"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from projectboard.core.logging_config import get_logger
from projectboard.deps import get_store
from projectboard.services.maintenance_service import sweep_expired_projects

logger = get_logger("projectboard.sweep_expired")


def main():
    try:
        deleted = sweep_expired_projects(get_store())
    except Exception as e:
        logger.error(f"Sweep failed: {e}", exc_info=True)
        sys.exit(1)
    logger.info(f"Removed {len(deleted)} expired project(s)")


if __name__ == "__main__":
    main()
