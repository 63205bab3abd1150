# projectboard/services/admin_service.py
"""
Admin request / approval workflow.

Requests move from pending (``approved=False``) to approved exactly once;
there is no rejection state. ``admin_users`` is an append-only set keyed by
email. Both lists live under single keys and are only ever changed through
``KeyValueStore.update`` so concurrent submissions and approvals cannot
overwrite each other.
"""
from typing import List, Optional, Tuple

from projectboard.core.exceptions import ForbiddenException, RequestNotFoundException
from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.models.admin import AdminRequest, AdminRequestIn, AdminUser
from projectboard.services.auth_service import AuthProvider
from projectboard.services.project_service import format_timestamp, generate_id, utcnow

logger = get_logger(__name__)

ADMIN_USERS_KEY = "admin_users"
ADMIN_REQUESTS_KEY = "admin_requests"
SYSTEM_APPROVER = "system"


def _same_email(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


def list_admin_users(store: KeyValueStore) -> List[AdminUser]:
    return [AdminUser.model_validate(u) for u in store.get(ADMIN_USERS_KEY) or []]


def find_admin(store: KeyValueStore, email: Optional[str]) -> Optional[AdminUser]:
    for raw in store.get(ADMIN_USERS_KEY) or []:
        if _same_email(raw.get("email"), email) and raw.get("approved"):
            return AdminUser.model_validate(raw)
    return None


def _append_admin_user(store: KeyValueStore, user: AdminUser) -> Tuple[AdminUser, bool]:
    """Append ``user`` unless an admin with the same email exists. Returns (admin, created)."""
    record = user.model_dump(mode="json", by_alias=True)
    outcome = {"created": False}

    def _append(current):
        users = list(current or [])
        for existing in users:
            if _same_email(existing.get("email"), user.email):
                outcome["existing"] = existing
                return users
        users.append(record)
        outcome["created"] = True
        return users

    store.update(ADMIN_USERS_KEY, _append)
    if outcome["created"]:
        return user, True
    return AdminUser.model_validate(outcome["existing"]), False


def seed_admin_user(
    store: KeyValueStore,
    email: str,
    name: str,
    approved_by: str = SYSTEM_APPROVER,
) -> Tuple[AdminUser, bool]:
    """Bootstrap an approved admin directly; no-op if the email is already an admin."""
    admin = AdminUser(email=email, name=name, approved_at=utcnow(), approved_by=approved_by)
    admin, created = _append_admin_user(store, admin)
    if created:
        logger.info("Seeded admin %s (approved by %s)", email, approved_by)
    return admin, created


# ---------- Requests ----------

async def submit_admin_request(
    store: KeyValueStore,
    provider: AuthProvider,
    body: AdminRequestIn,
) -> AdminRequest:
    # account first: a provider rejection aborts before anything is stored
    await provider.create_account(body.email, body.password, body.name)

    request = AdminRequest(
        id=generate_id("request"),
        name=body.name,
        email=body.email,
        created_at=utcnow(),
        approved=False,
    )
    record = request.model_dump(mode="json", by_alias=True)
    store.update(ADMIN_REQUESTS_KEY, lambda current: [*(current or []), record])
    logger.info("Admin access requested by %s (%s)", body.email, request.id)
    return request


def list_pending_requests(store: KeyValueStore) -> List[AdminRequest]:
    return [
        AdminRequest.model_validate(r)
        for r in store.get(ADMIN_REQUESTS_KEY) or []
        if not r.get("approved")
    ]


def approve_request(store: KeyValueStore, request_id: str, approver: AdminUser) -> AdminRequest:
    """
    Approve a request and register its email as an admin.

    Approving an already approved request keeps the first approval stamp and
    never adds a second AdminUser for the same email.
    """
    approved_at = format_timestamp(utcnow())
    found = {}

    def _flip(current):
        requests = list(current or [])
        for raw in requests:
            if raw.get("id") == request_id:
                if not raw.get("approved"):
                    raw["approved"] = True
                    raw["approvedAt"] = approved_at
                    raw["approvedBy"] = approver.email
                found["request"] = raw
                return requests
        raise RequestNotFoundException(request_id)

    store.update(ADMIN_REQUESTS_KEY, _flip)
    request = AdminRequest.model_validate(found["request"])

    _, created = _append_admin_user(
        store,
        AdminUser(
            email=request.email,
            name=request.name,
            approved_at=request.approved_at or utcnow(),
            approved_by=request.approved_by or approver.email,
        ),
    )
    if created:
        logger.info("Admin request %s approved by %s", request_id, approver.email)
    else:
        logger.info("Admin request %s already approved; %s is an admin", request_id, request.email)
    return request


# ---------- Login / bearer ----------

async def admin_login(
    store: KeyValueStore,
    provider: AuthProvider,
    email: str,
    password: str,
) -> Tuple[str, AdminUser]:
    """
    Sign in with the provider, then require an approved admin entry.

    Raises UnauthorizedException for bad credentials and ForbiddenException
    for a valid account that is not an admin.
    """
    result = await provider.sign_in(email, password)
    admin = find_admin(store, result.email)
    if admin is None:
        logger.warning("Login by non-admin account %s", result.email)
        raise ForbiddenException("Admin access not approved")
    return result.id_token, admin


async def authenticate_admin(store: KeyValueStore, provider: AuthProvider, token: str) -> AdminUser:
    identity = await provider.verify_token(token)
    admin = find_admin(store, identity.email)
    if admin is None:
        logger.warning("Token for %s does not belong to an approved admin", identity.email)
        raise ForbiddenException("Admin access required")
    return admin
