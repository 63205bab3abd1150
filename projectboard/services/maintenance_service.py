# projectboard/services/maintenance_service.py
import asyncio
from datetime import datetime
from typing import Callable, List, Optional

from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.services.project_service import PROJECT_PREFIX, parse_timestamp, utcnow

logger = get_logger(__name__)


def sweep_expired_projects(store: KeyValueStore, now: Optional[datetime] = None) -> List[str]:
    """
    Delete every project whose deadline lies strictly before ``now``.

    Projects without a deadline, or with one that cannot be parsed, are kept.
    Returns the ids that were deleted.
    """
    now = now or utcnow()
    deleted: List[str] = []
    for record in store.get_by_prefix(PROJECT_PREFIX) or []:
        deadline = parse_timestamp(record.get("deadline"))
        project_id = record.get("id")
        if deadline is None or not project_id:
            continue
        if deadline < now:
            store.delete(project_id)
            deleted.append(project_id)

    if deleted:
        logger.info("Swept %d expired project(s): %s", len(deleted), ", ".join(deleted))
    else:
        logger.debug("Sweep found no expired projects")
    return deleted


async def run_periodic_sweep(store_factory: Callable[[], KeyValueStore], interval_seconds: int) -> None:
    """Background loop started from the app lifespan when an interval is configured."""
    loop = asyncio.get_running_loop()
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await loop.run_in_executor(None, sweep_expired_projects, store_factory())
        except Exception as e:
            logger.error(f"Periodic sweep failed: {e}", exc_info=True)
