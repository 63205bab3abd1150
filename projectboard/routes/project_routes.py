# projectboard/routes/project_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from projectboard.core.exceptions import BoardException, InternalErrorException
from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.deps import get_current_admin, get_store
from projectboard.models.admin import AdminUser
from projectboard.models.project import (
    DeleteResponse,
    Project,
    ProjectCreate,
    ProjectFilter,
    ProjectUpdate,
)
from projectboard.services.project_service import (
    create_project,
    delete_project,
    list_projects,
    update_project,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[Project], summary="List projects (filtered, newest first)")
def list_projects_endpoint(
    category: Optional[str] = Query(None),
    skill: Optional[str] = Query(None),
    urgency: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    store: KeyValueStore = Depends(get_store),
):
    criteria = ProjectFilter(search=search, category=category, skill=skill, urgency=urgency)
    try:
        return list_projects(store, criteria)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error fetching projects: {e}", exc_info=True)
        raise InternalErrorException("Failed to fetch projects")


@router.post("", response_model=Project, summary="Submit a project")
def create_project_endpoint(req: ProjectCreate, store: KeyValueStore = Depends(get_store)):
    # public: students submit without an account
    try:
        return create_project(store, req)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error creating project: {e}", exc_info=True)
        raise InternalErrorException("Failed to create project")


@router.put("/{project_id}", response_model=Project, summary="Edit a project (admin only)")
def update_project_endpoint(
    project_id: str,
    req: ProjectUpdate,
    store: KeyValueStore = Depends(get_store),
    _admin: AdminUser = Depends(get_current_admin),
):
    try:
        return update_project(store, project_id, req)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error updating project {project_id}: {e}", exc_info=True)
        raise InternalErrorException("Failed to update project")


@router.delete("/{project_id}", response_model=DeleteResponse, summary="Delete a project (admin only)")
def delete_project_endpoint(
    project_id: str,
    store: KeyValueStore = Depends(get_store),
    admin: AdminUser = Depends(get_current_admin),
):
    try:
        delete_project(store, project_id)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error deleting project {project_id}: {e}", exc_info=True)
        raise InternalErrorException("Failed to delete project")
    logger.info("Project %s deleted by %s", project_id, admin.email)
    return DeleteResponse(message="Project deleted successfully")
