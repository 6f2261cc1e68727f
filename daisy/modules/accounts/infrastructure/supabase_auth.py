# 📄 File: daisy/modules/accounts/infrastructure/supabase_auth.py
# 🧭 Purpose (Layman Explanation):
# Talks to the backend's login service: signing people in and out, creating
# accounts, and checking who is currently signed in.
# 🧪 Purpose (Technical Summary):
# Async adapter over Supabase Auth (GoTrue). Blocking SDK calls run in a worker
# thread; SDK responses are mapped to Account/Session records and SDK errors to
# the client error taxonomy.
# 🔗 Dependencies:
# - supabase (auth client and error types)
# - python-jose (unverified read of the session id claim)
# - daisy.modules.accounts.domain.models
# 🔄 Connected Modules / Calls From:
# RemoteGateway (login, register, logout, get_account, is_logged_in)

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from supabase import AuthApiError, AuthError as SupabaseAuthError, AuthSessionMissingError, Client

from daisy.modules.accounts.domain.models import Account, Session
from daisy.shared.core.exceptions import AuthError, NotAuthenticatedError, RemoteServiceError
from daisy.shared.utils.logging import get_logger

logger = get_logger(__name__)

CURRENT_SESSION_ID = "current"


def _session_id_from_token(access_token: Optional[str]) -> str:
    """Read the ``session_id`` claim of an access token without verifying it."""
    if not access_token:
        return CURRENT_SESSION_ID
    try:
        claims = jwt.get_unverified_claims(access_token)
    except JWTError:
        return CURRENT_SESSION_ID
    return str(claims.get("session_id") or CURRENT_SESSION_ID)


def to_account(user: Any) -> Account:
    """Map a Supabase user object to an Account."""
    metadata = getattr(user, "user_metadata", None) or {}
    return Account(
        id=str(user.id),
        email=user.email or "",
        name=metadata.get("name", ""),
    )


def to_session(session: Any) -> Session:
    """Map a Supabase session object to a Session."""
    expires_at = None
    if getattr(session, "expires_at", None):
        expires_at = datetime.fromtimestamp(session.expires_at, tz=timezone.utc)

    return Session(
        id=_session_id_from_token(session.access_token),
        user_id=str(session.user.id) if session.user else "",
        expires_at=expires_at,
        access_token=session.access_token,
    )


class SupabaseAuthService:
    """
    Account and session operations against Supabase Auth.

    The session itself lives in the Supabase client; this service keeps no
    state of its own.
    """

    def __init__(self, client: Client):
        self._client = client

    @property
    def _auth(self):
        return self._client.auth

    async def login(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            AuthError: If the credentials are rejected
        """
        try:
            response = await asyncio.to_thread(
                self._auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthApiError as e:
            logger.warning(f"Login rejected for {email}: {e.message}", extra={"email": email})
            raise AuthError(f"Invalid credentials: {e.message}", email=email) from e
        except SupabaseAuthError as e:
            logger.error(f"Auth service error during login: {e}")
            raise RemoteServiceError(str(e), service="auth", operation="login") from e

        if response.session is None:
            raise AuthError("Login did not return a session", email=email)

        session = to_session(response.session)
        logger.info("User logged in", extra={"user_id": session.user_id})
        return session

    async def register(self, email: str, password: str, name: str) -> Account:
        """
        Create an account; the display name is stored in user metadata.

        Raises:
            AuthError: If the email is already registered or the sign-up is refused
        """
        try:
            response = await asyncio.to_thread(
                self._auth.sign_up,
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name}},
                },
            )
        except AuthApiError as e:
            logger.warning(f"Registration rejected for {email}: {e.message}", extra={"email": email})
            raise AuthError(f"Registration failed: {e.message}", email=email) from e
        except SupabaseAuthError as e:
            logger.error(f"Auth service error during registration: {e}")
            raise RemoteServiceError(str(e), service="auth", operation="register") from e

        user = response.user
        if user is None:
            raise AuthError("Registration did not return a user", email=email)

        # With email confirmation on, an existing address comes back as a user without identities
        if user.identities is not None and len(user.identities) == 0:
            logger.warning(f"Registration attempted for existing email {email}", extra={"email": email})
            raise AuthError("Email already registered", email=email)

        account = to_account(user)
        logger.info("Account registered", extra={"user_id": account.id})
        return account

    async def logout(self) -> None:
        """
        End the current session.

        Raises:
            NotAuthenticatedError: If there is no current session
        """
        try:
            session = await asyncio.to_thread(self._auth.get_session)
            if session is None:
                raise NotAuthenticatedError("Cannot log out without a session")
            await asyncio.to_thread(self._auth.sign_out)
        except AuthSessionMissingError as e:
            raise NotAuthenticatedError("Cannot log out without a session") from e
        except SupabaseAuthError as e:
            logger.error(f"Auth service error during logout: {e}")
            raise RemoteServiceError(str(e), service="auth", operation="logout") from e

        logger.info("User logged out", extra={"user_id": str(session.user.id) if session.user else None})

    async def get_account(self) -> Account:
        """
        Fetch the signed-in user's account.

        Raises:
            NotAuthenticatedError: If nobody is signed in or the session is no longer valid
        """
        try:
            response = await asyncio.to_thread(self._auth.get_user)
        except AuthSessionMissingError as e:
            raise NotAuthenticatedError("No active session") from e
        except AuthApiError as e:
            logger.warning(f"Session rejected while fetching account: {e.message}")
            raise NotAuthenticatedError(f"Session is not valid: {e.message}") from e
        except SupabaseAuthError as e:
            logger.error(f"Auth service error while fetching account: {e}")
            raise RemoteServiceError(str(e), service="auth", operation="get_account") from e

        if response is None or response.user is None:
            raise NotAuthenticatedError("No active session")

        return to_account(response.user)

    async def get_session(self) -> Session:
        """
        Return the current session.

        Raises:
            NotAuthenticatedError: If there is no current session
        """
        try:
            session = await asyncio.to_thread(self._auth.get_session)
        except AuthSessionMissingError as e:
            raise NotAuthenticatedError("No active session") from e
        except SupabaseAuthError as e:
            logger.error(f"Auth service error while reading the session: {e}")
            raise RemoteServiceError(str(e), service="auth", operation="get_session") from e

        if session is None:
            raise NotAuthenticatedError("No active session")

        return to_session(session)
