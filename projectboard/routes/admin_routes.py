# projectboard/routes/admin_routes.py
from typing import List

from fastapi import APIRouter, Depends

from projectboard.core.exceptions import BoardException, InternalErrorException
from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.deps import get_auth_provider, get_current_admin, get_store
from projectboard.models.admin import (
    AdminLoginIn,
    AdminLoginResponse,
    AdminRequest,
    AdminRequestIn,
    AdminUser,
    MessageResponse,
)
from projectboard.models.project import SweepResponse
from projectboard.services.admin_service import (
    admin_login,
    approve_request,
    list_pending_requests,
    submit_admin_request,
)
from projectboard.services.auth_service import AuthProvider
from projectboard.services.maintenance_service import sweep_expired_projects

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=AdminLoginResponse, summary="Login email & password (approved admins)")
async def login(
    req: AdminLoginIn,
    store: KeyValueStore = Depends(get_store),
    provider: AuthProvider = Depends(get_auth_provider),
):
    try:
        token, admin = await admin_login(store, provider, req.email, req.password)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Admin login error: {e}", exc_info=True)
        raise InternalErrorException("Login failed")
    return AdminLoginResponse(message="Login successful", access_token=token, user=admin)


@router.post("/request", response_model=MessageResponse, summary="Request admin access")
async def request_admin_access(
    req: AdminRequestIn,
    store: KeyValueStore = Depends(get_store),
    provider: AuthProvider = Depends(get_auth_provider),
):
    try:
        await submit_admin_request(store, provider, req)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Admin request error: {e}", exc_info=True)
        raise InternalErrorException("Failed to request admin access")
    return MessageResponse(message="Admin access requested successfully")


@router.get("/requests", response_model=List[AdminRequest], summary="Pending admin requests (admin only)")
def pending_requests(
    store: KeyValueStore = Depends(get_store),
    _admin: AdminUser = Depends(get_current_admin),
):
    try:
        return list_pending_requests(store)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error fetching admin requests: {e}", exc_info=True)
        raise InternalErrorException("Failed to fetch admin requests")


@router.put("/requests/{request_id}/approve", response_model=MessageResponse, summary="Approve admin request (admin only)")
def approve(
    request_id: str,
    store: KeyValueStore = Depends(get_store),
    admin: AdminUser = Depends(get_current_admin),
):
    try:
        approve_request(store, request_id, admin)
    except BoardException:
        raise
    except Exception as e:
        logger.error(f"Error approving admin request {request_id}: {e}", exc_info=True)
        raise InternalErrorException("Failed to approve admin request")
    return MessageResponse(message="Admin request approved successfully")


@router.post("/maintenance/sweep-expired", response_model=SweepResponse, summary="Delete projects past their deadline (admin only)")
def sweep_expired(
    store: KeyValueStore = Depends(get_store),
    admin: AdminUser = Depends(get_current_admin),
):
    try:
        deleted = sweep_expired_projects(store)
    except Exception as e:
        logger.error(f"Expired-project sweep failed: {e}", exc_info=True)
        raise InternalErrorException("Failed to sweep expired projects")
    logger.info("Sweep triggered by %s removed %d project(s)", admin.email, len(deleted))
    return SweepResponse(deleted=deleted, count=len(deleted))
