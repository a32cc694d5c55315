"""Authentication domain service and auth gateway interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable

import logfire

from simskut.domain.error import ValidationError
from simskut.domain.value import (
    AuthEventType,
    AuthIdentity,
    AuthSession,
    OAuthProvider,
    OAuthRedirect,
)

from .base import Service

AuthListener = Callable[[AuthEventType, AuthSession | None], None]


class AuthGateway(ABC):
    """Client for the hosted auth provider.

    One instance models one client (browser tab): it holds the current
    session and its own listeners for session events.
    """

    def __init__(self) -> None:
        self._listeners: list[AuthListener] = []
        self.current_session: AuthSession | None = None

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register a session event listener.

        Args:
            listener: Called with (event, session)

        Returns:
            Function that removes the listener; safe to call twice
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)

    def _emit(self, event: AuthEventType, session: AuthSession | None) -> None:
        if event == AuthEventType.SIGNED_OUT:
            self.current_session = None
        elif session is not None:
            self.current_session = session
        for listener in list(self._listeners):
            listener(event, session)

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Register an email/password account.

        Returns:
            The new identity (a session may follow once email is confirmed)
        """
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password; emits SIGNED_IN."""
        pass

    @abstractmethod
    def authorization_url(
        self, provider: OAuthProvider, redirect_to: str
    ) -> OAuthRedirect:
        """URL that starts the provider's OAuth redirect flow, with its PKCE verifier."""
        pass

    @abstractmethod
    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange the OAuth callback code; emits SIGNED_IN."""
        pass

    @abstractmethod
    async def get_session(self, access_token: str | None = None) -> AuthSession | None:
        """Return the session for a token, or the client's current session.

        Returns None when there is no valid session.
        """
        pass

    @abstractmethod
    async def sign_out(self, access_token: str | None = None) -> None:
        """Revoke the session; emits SIGNED_OUT."""
        pass

    @abstractmethod
    async def update_user(self, access_token: str, password: str) -> AuthIdentity:
        """Change the signed-in user's password."""
        pass


class AuthService(Service):
    """Domain service for sign-up, sign-in and session retrieval."""

    def __init__(self, auth_gateway: AuthGateway) -> None:
        """Initialize auth service.

        Args:
            auth_gateway: Client for the hosted auth provider
        """
        self.auth_gateway = auth_gateway

    async def sign_up_with_email(self, email: str, password: str) -> AuthIdentity:
        """Create an email/password account.

        Args:
            email: Account email
            password: Account password

        Returns:
            The new identity

        Raises:
            AuthGatewayError: If the provider rejects the sign-up
        """
        with logfire.span("auth_service.sign_up_with_email"):
            identity = await self.auth_gateway.sign_up(email, password)
            logfire.info("Account created", user_id=identity.user_id)
            return identity

    async def sign_in_with_email(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password.

        Raises:
            AuthGatewayError: If the credentials are rejected
        """
        with logfire.span("auth_service.sign_in_with_email"):
            session = await self.auth_gateway.sign_in_with_password(email, password)
            logfire.info("Signed in with email", user_id=session.identity.user_id)
            return session

    def sign_in_with_oauth(
        self, provider: OAuthProvider, redirect_to: str
    ) -> OAuthRedirect:
        """Start an OAuth sign-in.

        Args:
            provider: discord or google
            redirect_to: Callback page the provider returns to

        Returns:
            Provider authorization URL and the PKCE verifier to keep
        """
        with logfire.span("auth_service.sign_in_with_oauth", provider=provider.value):
            return self.auth_gateway.authorization_url(provider, redirect_to)

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Complete an OAuth sign-in from the callback code."""
        with logfire.span("auth_service.exchange_code_for_session"):
            session = await self.auth_gateway.exchange_code_for_session(
                code, code_verifier
            )
            logfire.info("OAuth code exchanged", user_id=session.identity.user_id)
            return session

    async def get_session(self, access_token: str | None = None) -> AuthSession | None:
        """Read the current session without side effects."""
        with logfire.span("auth_service.get_session"):
            return await self.auth_gateway.get_session(access_token)

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to session events; returns the unsubscribe function."""
        return self.auth_gateway.on_auth_state_change(listener)

    async def sign_out(self, access_token: str | None = None) -> None:
        """Sign out of the provider."""
        with logfire.span("auth_service.sign_out"):
            await self.auth_gateway.sign_out(access_token)

    async def change_password(self, access_token: str, password: str) -> None:
        """Change the signed-in user's password.

        Raises:
            ValidationError: If the password is shorter than 8 characters
        """
        if len(password) < 8:
            raise ValidationError("Password must be at least 8 characters")
        with logfire.span("auth_service.change_password"):
            identity = await self.auth_gateway.update_user(access_token, password)
            logfire.info("Password changed", user_id=identity.user_id)
