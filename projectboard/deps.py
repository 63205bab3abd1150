from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from projectboard.config import settings
from projectboard.core.exceptions import UnauthorizedException
from projectboard.core.store import FirestoreKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from projectboard.models.admin import AdminUser
from projectboard.services.admin_service import authenticate_admin
from projectboard.services.auth_service import AuthProvider, FirebaseAuthProvider

# missing header must be 401, not the 403 HTTPBearer raises by default
security = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    if settings.STORE_BACKEND == "memory":
        return InMemoryKeyValueStore()
    from projectboard.core.firebase import get_db
    return FirestoreKeyValueStore(get_db(), settings.KV_COLLECTION)


@lru_cache(maxsize=1)
def get_auth_provider() -> AuthProvider:
    return FirebaseAuthProvider()


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: KeyValueStore = Depends(get_store),
    provider: AuthProvider = Depends(get_auth_provider),
) -> AdminUser:
    """Bearer token -> verified identity -> approved AdminUser."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Unauthorized - Admin access required")
    return await authenticate_admin(store, provider, credentials.credentials)
