# projectboard/core/firebase.py
from functools import lru_cache
from pathlib import Path
import json

import firebase_admin
from firebase_admin import credentials, auth as fb_auth, firestore
from projectboard.config import settings


def _load_credentials() -> credentials.Certificate:
    # 1) From ENV JSON (hosted deployments)
    if settings.FIREBASE_SERVICE_ACCOUNT_JSON:
        try:
            sa_info = json.loads(settings.FIREBASE_SERVICE_ACCOUNT_JSON)
        except json.JSONDecodeError as e:
            raise RuntimeError(
                "FIREBASE_SERVICE_ACCOUNT_JSON is not valid JSON"
            ) from e
        return credentials.Certificate(sa_info)

    # 2) Fallback to a local file (dev)
    sa_path = Path(settings.GOOGLE_APPLICATION_CREDENTIALS)
    if not sa_path.exists():
        raise RuntimeError(
            f"Firebase service account JSON not found: {sa_path}. "
            f"Set FIREBASE_SERVICE_ACCOUNT_JSON or GOOGLE_APPLICATION_CREDENTIALS."
        )
    return credentials.Certificate(str(sa_path))


@lru_cache(maxsize=1)
def get_firebase_app() -> firebase_admin.App:
    if firebase_admin._apps:
        return firebase_admin.get_app()
    return firebase_admin.initialize_app(
        _load_credentials(),
        {"projectId": settings.FIREBASE_PROJECT_ID},
    )


@lru_cache(maxsize=1)
def get_db():
    return firestore.client(app=get_firebase_app())


def get_auth():
    get_firebase_app()
    return fb_auth
