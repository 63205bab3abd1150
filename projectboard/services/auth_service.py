# projectboard/services/auth_service.py
import asyncio
from abc import ABC, abstractmethod

import httpx
from firebase_admin import auth as fb_auth
from firebase_admin import exceptions as fb_exceptions

from projectboard.config import settings
from projectboard.core.exceptions import (
    AccountCreationException,
    InternalErrorException,
    UnauthorizedException,
)
from projectboard.core.firebase import get_auth
from projectboard.core.logging_config import get_logger
from projectboard.models.auth import CreatedAccount, SignInResult, VerifiedIdentity

logger = get_logger(__name__)

# =======================
# Identity Toolkit (REST)
# =======================
IDT_BASE = "https://identitytoolkit.googleapis.com/v1"
FIREBASE_SIGNIN_URL = f"{IDT_BASE}/accounts:signInWithPassword"


class AuthProvider(ABC):
    """External identity provider: account creation, password sign-in, token checks."""

    @abstractmethod
    async def create_account(self, email: str, password: str, name: str) -> CreatedAccount:
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> SignInResult:
        ...

    @abstractmethod
    async def verify_token(self, token: str) -> VerifiedIdentity:
        ...


class FirebaseAuthProvider(AuthProvider):
    def __init__(self, api_key: str | None = None, timeout: float = 20):
        self.api_key = api_key if api_key is not None else settings.FIREBASE_API_KEY
        self.timeout = timeout

    async def create_account(self, email: str, password: str, name: str) -> CreatedAccount:
        auth = get_auth()
        loop = asyncio.get_running_loop()

        def _create():
            # no mail server: accounts are confirmed on creation
            return auth.create_user(
                email=email,
                password=password,
                display_name=name or "",
                email_verified=True,
                disabled=False,
            )

        try:
            user = await loop.run_in_executor(None, _create)
        except fb_auth.EmailAlreadyExistsError:
            logger.warning("Account creation rejected for %s: email already exists", email)
            raise AccountCreationException("Email already exists")
        except (ValueError, fb_exceptions.FirebaseError) as e:
            # includes passwords shorter than 6 characters
            logger.warning("Account creation rejected for %s: %s", email, e)
            raise AccountCreationException("Failed to create user account")
        return CreatedAccount(uid=user.uid, email=email, display_name=name)

    async def sign_in(self, email: str, password: str) -> SignInResult:
        if not self.api_key:
            raise InternalErrorException("FIREBASE_API_KEY is not set")
        params = {"key": self.api_key}
        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(FIREBASE_SIGNIN_URL, params=params, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Identity Toolkit unreachable: {e}", exc_info=True)
            raise InternalErrorException("Login failed")
        if r.status_code != 200:
            detail = r.json().get("error", {}).get("message", "LOGIN_FAILED")
            logger.warning("Admin login error for %s: %s", email, detail)
            raise UnauthorizedException("Invalid credentials")
        data = r.json()
        return SignInResult(
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken"),
            expires_in=int(data.get("expiresIn", 3600)),
            local_id=data["localId"],
            email=data["email"],
        )

    async def verify_token(self, token: str) -> VerifiedIdentity:
        auth = get_auth()
        loop = asyncio.get_running_loop()
        try:
            decoded = await loop.run_in_executor(None, auth.verify_id_token, token)
        except (ValueError, fb_auth.InvalidIdTokenError) as e:
            # expired and revoked tokens are InvalidIdTokenError subclasses
            logger.info("Token verification failed: %s", e)
            raise UnauthorizedException("Invalid or expired token")
        except fb_auth.CertificateFetchError as e:
            logger.error(f"Could not fetch token signing certificates: {e}", exc_info=True)
            raise InternalErrorException("Token verification unavailable")
        return VerifiedIdentity(uid=decoded["uid"], email=decoded.get("email"))
