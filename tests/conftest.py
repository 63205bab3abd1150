"""Common test fixtures: in-memory store, fake auth provider, app and clients."""

import secrets
from typing import Any, Dict, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from projectboard.core.exceptions import AccountCreationException, UnauthorizedException
from projectboard.core.store import InMemoryKeyValueStore
from projectboard.deps import get_auth_provider, get_store
from projectboard.main import create_app
from projectboard.models.auth import CreatedAccount, SignInResult, VerifiedIdentity
from projectboard.services.admin_service import seed_admin_user
from projectboard.services.auth_service import AuthProvider

ADMIN_EMAIL = "admin@school.nl"
ADMIN_PASSWORD = "secret123"
ADMIN_NAME = "Head Admin"


class FakeAuthProvider(AuthProvider):
    """Accounts and issued tokens kept in dicts."""

    def __init__(self):
        self.accounts: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}

    def add_account(self, email: str, password: str) -> None:
        self.accounts[email] = password

    def issue_token(self, email: str) -> str:
        token = f"tok-{secrets.token_hex(8)}"
        self.tokens[token] = email
        return token

    async def create_account(self, email: str, password: str, name: str) -> CreatedAccount:
        if email in self.accounts:
            raise AccountCreationException("Email already exists")
        if len(password) < 6:
            raise AccountCreationException("Failed to create user account")
        self.accounts[email] = password
        return CreatedAccount(uid=f"uid-{len(self.accounts)}", email=email, display_name=name)

    async def sign_in(self, email: str, password: str) -> SignInResult:
        if self.accounts.get(email) != password:
            raise UnauthorizedException("Invalid credentials")
        return SignInResult(id_token=self.issue_token(email), local_id=f"uid-{email}", email=email)

    async def verify_token(self, token: str) -> VerifiedIdentity:
        email = self.tokens.get(token)
        if email is None:
            raise UnauthorizedException("Invalid or expired token")
        return VerifiedIdentity(uid=f"uid-{email}", email=email)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def provider() -> FakeAuthProvider:
    fake = FakeAuthProvider()
    fake.add_account(ADMIN_EMAIL, ADMIN_PASSWORD)
    return fake


@pytest.fixture
def app(store: InMemoryKeyValueStore, provider: FakeAuthProvider) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    application.dependency_overrides[get_auth_provider] = lambda: provider
    seed_admin_user(store, ADMIN_EMAIL, ADMIN_NAME)
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_token(provider: FakeAuthProvider) -> str:
    return provider.issue_token(ADMIN_EMAIL)


@pytest.fixture
def admin_headers(admin_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def logo_project() -> Dict[str, Any]:
    return {
        "title": "Logo",
        "description": "need a logo",
        "category": "Design",
        "skills": ["Illustrator"],
        "urgency": "normal",
        "studentName": "Ana",
        "contactInfo": "ana@x.nl",
    }


def make_record(project_id: str, created_at: str, **fields: Any) -> Dict[str, Any]:
    """A stored project record as the API writes it."""
    record = {
        "id": project_id,
        "title": "",
        "description": "",
        "category": "",
        "skills": [],
        "urgency": "normal",
        "studentName": "",
        "contactInfo": "",
        "imageUrl": None,
        "deadline": None,
        "createdAt": created_at,
        "updatedAt": created_at,
    }
    record.update(fields)
    return record
