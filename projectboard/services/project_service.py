# projectboard/services/project_service.py
import secrets
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from projectboard.core.exceptions import ProjectNotFoundException
from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.models.project import Project, ProjectCreate, ProjectFilter, ProjectUpdate
from projectboard.services.filtering import filter_projects

logger = get_logger(__name__)

PROJECT_PREFIX = "project_"
# fields a client can never overwrite through an update
_IMMUTABLE_FIELDS = ("id", "createdAt")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ID_ALPHABET = string.ascii_lowercase + string.digits


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored ISO-8601 timestamp. Naive values are taken as UTC;
    anything unparseable yields None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def generate_id(kind: str) -> str:
    # time-based plus a random suffix, e.g. project_1718000000000_k3j9x0a1b
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{kind}_{int(time.time() * 1000)}_{suffix}"


def _is_project_key(project_id: str) -> bool:
    return bool(project_id) and project_id.startswith(PROJECT_PREFIX)


def _listable(record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    The record as it can be served, or None if it cannot be.

    An unreadable deadline is dropped from the listed copy (the stored record
    is left alone); any other invalid field hides the record.
    """
    try:
        Project.model_validate(record)
        return record
    except ValidationError as e:
        if all(err["loc"][:1] == ("deadline",) for err in e.errors()):
            logger.warning("Project %s has unreadable deadline %r; listed without it",
                           record.get("id"), record.get("deadline"))
            return {**record, "deadline": None}
        logger.warning("Skipping unreadable project record %s: %s", record.get("id"), e)
        return None


def list_projects(store: KeyValueStore, criteria: Optional[ProjectFilter] = None) -> List[Dict[str, Any]]:
    """Filtered projects, newest first by createdAt."""
    records = [r for r in map(_listable, store.get_by_prefix(PROJECT_PREFIX) or []) if r is not None]
    filtered = filter_projects(records, criteria)
    # list.sort is stable, ties keep store order
    filtered.sort(key=lambda p: parse_timestamp(p.get("createdAt")) or _EPOCH, reverse=True)
    return filtered


def get_project(store: KeyValueStore, project_id: str) -> Dict[str, Any]:
    if not _is_project_key(project_id):
        raise ProjectNotFoundException(project_id)
    record = store.get(project_id)
    if record is None:
        raise ProjectNotFoundException(project_id)
    return record


def create_project(store: KeyValueStore, data: ProjectCreate) -> Dict[str, Any]:
    project_id = generate_id("project")
    while store.get(project_id) is not None:
        project_id = generate_id("project")

    now = utcnow()
    project = Project(id=project_id, created_at=now, updated_at=now, **data.model_dump())
    record = project.model_dump(mode="json", by_alias=True)
    # one timestamp value for both fields
    record["createdAt"] = record["updatedAt"] = format_timestamp(now)

    store.set(project_id, record)
    logger.info("Created project %s", project_id)
    return record


def update_project(store: KeyValueStore, project_id: str, changes: ProjectUpdate) -> Dict[str, Any]:
    """
    Shallow-merge the supplied fields over the stored record.

    id and createdAt are kept; updatedAt is always moved strictly forward.
    """
    if not _is_project_key(project_id):
        raise ProjectNotFoundException(project_id)

    patch = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
    for field in _IMMUTABLE_FIELDS:
        patch.pop(field, None)

    def _merge(current):
        if current is None:
            raise ProjectNotFoundException(project_id)
        now = utcnow()
        previous = parse_timestamp(current.get("updatedAt"))
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return {
            **current,
            **patch,
            "id": current.get("id", project_id),
            "createdAt": current.get("createdAt"),
            "updatedAt": format_timestamp(now),
        }

    merged = store.update(project_id, _merge)
    logger.info("Updated project %s (%s)", project_id, ", ".join(sorted(patch)) or "no fields")
    return merged


def delete_project(store: KeyValueStore, project_id: str) -> None:
    get_project(store, project_id)
    store.delete(project_id)
    logger.info("Deleted project %s", project_id)
