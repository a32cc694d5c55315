"""Auth gateway over the hosted auth provider's REST API (GoTrue).

Each client instance stands for one browser tab: it keeps the session it
last obtained and notifies its own listeners of SIGNED_IN and SIGNED_OUT.
"""

import asyncio
from urllib.parse import urlencode
from uuid import uuid4

import httpx
import logfire

from simskut.adapter.error import AuthGatewayError
from simskut.config import AuthGatewaySettings
from simskut.domain.service.auth_service import AuthGateway
from simskut.domain.value import (
    AuthEventType,
    AuthIdentity,
    AuthSession,
    OAuthProvider,
    OAuthRedirect,
)

from .pkce import generate_pkce_pair


def _identity_from_user(user: dict) -> AuthIdentity:
    return AuthIdentity(
        user_id=str(user["id"]),
        email=user.get("email"),
        metadata=user.get("user_metadata") or {},
    )


def _session_from_response(data: dict) -> AuthSession:
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        identity=_identity_from_user(data["user"]),
    )


class SupabaseAuthClient(AuthGateway):
    """GoTrue REST client."""

    def __init__(self, settings: AuthGatewaySettings) -> None:
        """Initialize auth client.

        Args:
            settings: Auth provider URL, anon key and timeout
        """
        super().__init__()
        self.base_url = f"{settings.url.rstrip('/')}/auth/v1"
        self.anon_key = settings.anon_key
        self.timeout = settings.request_timeout_seconds

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self.anon_key, "Content-Type": "application/json"}
        headers["Authorization"] = f"Bearer {access_token or self.anon_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str | None = None,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """Send one request and return the decoded body.

        Raises:
            AuthGatewayError: On transport errors or non-2xx responses
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    params=params,
                    json=json,
                    headers=self._headers(access_token),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Auth provider HTTP error", path=path, error=str(e))
            raise AuthGatewayError(f"Auth provider unreachable: {e}")

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = (
                body.get("error_description")
                or body.get("msg")
                or body.get("message")
                or response.text
            )
            logfire.warn(
                "Auth provider rejected request",
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise AuthGatewayError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Register an email/password account."""
        data = await self._request(
            "POST", "/signup", json={"email": email, "password": password}
        )
        # With email confirmation off the provider returns a full session
        if "access_token" in data:
            session = _session_from_response(data)
            self._emit(AuthEventType.SIGNED_IN, session)
            return session.identity
        return _identity_from_user(data.get("user", data))

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = _session_from_response(data)
        self._emit(AuthEventType.SIGNED_IN, session)
        return session

    def authorization_url(
        self, provider: OAuthProvider, redirect_to: str
    ) -> OAuthRedirect:
        """Authorize URL for the PKCE code flow."""
        verifier, challenge = generate_pkce_pair()
        query = urlencode(
            {
                "provider": provider.value,
                "redirect_to": redirect_to,
                "code_challenge": challenge,
                "code_challenge_method": "s256",
            }
        )
        return OAuthRedirect(url=f"{self.base_url}/authorize?{query}", code_verifier=verifier)

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange the callback code for a session."""
        if not code_verifier:
            raise AuthGatewayError("Missing PKCE code verifier for code exchange")
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier},
        )
        session = _session_from_response(data)
        self._emit(AuthEventType.SIGNED_IN, session)
        return session

    async def get_session(self, access_token: str | None = None) -> AuthSession | None:
        """Validate a token with the provider, or return the current session."""
        if access_token is None:
            return self.current_session
        try:
            user = await self._request("GET", "/user", access_token=access_token)
        except AuthGatewayError as e:
            if e.status_code in (401, 403):
                return None
            raise
        session = AuthSession(access_token=access_token, identity=_identity_from_user(user))
        self.current_session = session
        return session

    async def sign_out(self, access_token: str | None = None) -> None:
        """Revoke the session."""
        token = access_token or (
            self.current_session.access_token if self.current_session else None
        )
        if token:
            await self._request("POST", "/logout", access_token=token)
        self._emit(AuthEventType.SIGNED_OUT, None)

    async def update_user(self, access_token: str, password: str) -> AuthIdentity:
        """Change the signed-in user's password."""
        user = await self._request(
            "PUT", "/user", access_token=access_token, json={"password": password}
        )
        return _identity_from_user(user)


class MockAuthDirectory:
    """Accounts, callback codes and tokens shared by mock gateway instances.

    Exchange timing is configurable so callers can exercise slow or hung
    code exchanges.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, AuthIdentity]] = {}  # email -> (password, identity)
        self.codes: dict[str, AuthIdentity] = {}
        self.tokens: dict[str, AuthIdentity] = {}
        self.exchange_delay: float = 0.0
        self.exchange_hangs: bool = False
        self.exchange_error: Exception | None = None

    def issue_session(self, identity: AuthIdentity) -> AuthSession:
        """Mint a session for an identity."""
        token = f"mock-access-{uuid4().hex}"
        self.tokens[token] = identity
        return AuthSession(
            access_token=token, refresh_token=f"mock-refresh-{uuid4().hex}", identity=identity
        )

    def register_code(self, code: str, identity: AuthIdentity) -> None:
        """Make an OAuth callback code exchangeable for `identity`."""
        self.codes[code] = identity


class MockAuthGateway(AuthGateway):
    """Mock auth gateway for testing.

    Behaves like the provider without network calls; state lives in the
    shared MockAuthDirectory.
    """

    def __init__(self, directory: MockAuthDirectory) -> None:
        super().__init__()
        self.directory = directory

    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Register an account; confirmation is not required."""
        if email in self.directory.accounts:
            raise AuthGatewayError("User already registered", status_code=422)
        identity = AuthIdentity(user_id=str(uuid4()), email=email, metadata={})
        self.directory.accounts[email] = (password, identity)
        session = self.directory.issue_session(identity)
        self._emit(AuthEventType.SIGNED_IN, session)
        return identity

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in against the registered accounts."""
        account = self.directory.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthGatewayError("Invalid login credentials", status_code=400)
        session = self.directory.issue_session(account[1])
        self._emit(AuthEventType.SIGNED_IN, session)
        return session

    def authorization_url(
        self, provider: OAuthProvider, redirect_to: str
    ) -> OAuthRedirect:
        """Mock authorize URL."""
        query = urlencode({"provider": provider.value, "redirect_to": redirect_to})
        return OAuthRedirect(
            url=f"https://auth.mock/authorize?{query}", code_verifier="mock-verifier"
        )

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange a registered code, honoring the configured timing."""
        if self.directory.exchange_hangs:
            await asyncio.Event().wait()
        if self.directory.exchange_delay:
            await asyncio.sleep(self.directory.exchange_delay)
        if self.directory.exchange_error is not None:
            raise self.directory.exchange_error
        identity = self.directory.codes.pop(code, None)
        if identity is None:
            raise AuthGatewayError("Invalid or expired code", status_code=400)
        session = self.directory.issue_session(identity)
        self._emit(AuthEventType.SIGNED_IN, session)
        return session

    async def get_session(self, access_token: str | None = None) -> AuthSession | None:
        """Resolve a minted token, or return the current session."""
        if access_token is None:
            return self.current_session
        identity = self.directory.tokens.get(access_token)
        if identity is None:
            return None
        session = AuthSession(access_token=access_token, identity=identity)
        self.current_session = session
        return session

    async def sign_out(self, access_token: str | None = None) -> None:
        """Forget the token."""
        if access_token:
            self.directory.tokens.pop(access_token, None)
        self._emit(AuthEventType.SIGNED_OUT, None)

    async def update_user(self, access_token: str, password: str) -> AuthIdentity:
        """Change the password of the token's account."""
        identity = self.directory.tokens.get(access_token)
        if identity is None:
            raise AuthGatewayError("Invalid token", status_code=401)
        if identity.email and identity.email in self.directory.accounts:
            self.directory.accounts[identity.email] = (password, identity)
        return identity
