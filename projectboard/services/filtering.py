# projectboard/services/filtering.py
"""
Project list filtering shared by the list endpoint and the Python client.

Four independent predicates (free-text search, category, skill, urgency) are
combined with AND. The functions here are pure: they never raise on odd
records and always return items in input order.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

from projectboard.models.project import ProjectFilter

ALL = "all"

Record = Mapping[str, Any]


def _is_active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def _text(record: Record, field: str) -> str:
    value = record.get(field)
    if value is None:
        return ""
    if hasattr(value, "value"):  # enum
        value = value.value
    return str(value)


def _skills(record: Record) -> List[str]:
    skills = record.get("skills") or []
    if isinstance(skills, str):
        return [skills]
    return [str(s) for s in skills]


def matches_search(record: Record, term: Optional[str]) -> bool:
    if not term:
        return True
    needle = term.lower()
    haystack = [
        _text(record, "title"),
        _text(record, "description"),
        _text(record, "category"),
        _text(record, "studentName"),
        *_skills(record),
    ]
    return any(needle in h.lower() for h in haystack)


def matches(record: Record, criteria: ProjectFilter) -> bool:
    if not matches_search(record, criteria.search):
        return False
    if _is_active(criteria.category) and _text(record, "category") != criteria.category:
        return False
    if _is_active(criteria.skill) and criteria.skill not in _skills(record):
        return False
    if _is_active(criteria.urgency) and _text(record, "urgency") != criteria.urgency:
        return False
    return True


def filter_projects(
    projects: Iterable[Record],
    criteria: Union[ProjectFilter, Mapping[str, Any], None] = None,
) -> List[Record]:
    """Return the projects satisfying every active criterion, order preserved."""
    if criteria is None:
        criteria = ProjectFilter()
    elif not isinstance(criteria, ProjectFilter):
        criteria = ProjectFilter(**criteria)
    return [p for p in projects if matches(p, criteria)]
