"""OAuth callback use case."""

import asyncio

import logfire
from pydantic import BaseModel

from simskut.application.session import SessionContext
from simskut.config import AuthSettings
from simskut.domain.service import AuthService, JWTService
from simskut.domain.service.gate import resolve_route
from simskut.domain.value import AppRoute, AuthEventType, AuthSession

from .bootstrap import BootstrapRequest, BootstrapUseCase


class AuthCallbackRequest(BaseModel):
    """Parameters the provider sent back to the callback page."""

    code: str | None = None
    code_verifier: str | None = None
    access_token: str | None = None


class AuthCallbackResponse(BaseModel):
    """Where to send the user, with the API token when signed in."""

    route: AppRoute
    token: str | None = None
    user_id: str | None = None


class AuthCallbackUseCase:
    """Use case that turns an OAuth redirect into a signed-in session.

    Two signals race: an immediate session read and the SIGNED_IN event,
    which the code exchange emits. The first session wins. When neither
    arrives before the timeout the user is sent back to /login.
    """

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize auth callback use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
            bootstrap_use_case: First-login bootstrap
            session_context: Request session context
            auth_settings: Authentication settings (callback timeout)
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.bootstrap_use_case = bootstrap_use_case
        self.session_context = session_context
        self.auth_settings = auth_settings

    async def execute(self, request: AuthCallbackRequest) -> AuthCallbackResponse:
        """Execute the callback flow.

        Steps:
        1. Subscribe to SIGNED_IN and start the immediate session read
        2. Start the code exchange when a code was returned
        3. Take the first session; give up at the timeout
        4. Bootstrap the profile and issue the API token

        Args:
            request: Callback parameters

        Returns:
            Landing route; /login on timeout or failure
        """
        with logfire.span("auth_callback.execute", has_code=request.code is not None):
            session = await self._await_session(request)
            if session is None:
                return AuthCallbackResponse(route=AppRoute.LOGIN)

            result = await self.bootstrap_use_case.execute(
                BootstrapRequest(identity=session.identity)
            )
            profile = result.profile
            # Admin or approved users go straight in; others wait on /pending
            route = resolve_route(profile, result.invite)

            self.session_context.set_session(profile.id, profile, session.access_token)
            token = self.jwt_service.create_token(
                user_id=str(profile.id),
                username=profile.username.root,
                is_admin=profile.is_admin,
                provider_token=session.access_token,
            )
            return AuthCallbackResponse(
                route=route, token=token, user_id=str(profile.id)
            )

    async def _await_session(self, request: AuthCallbackRequest) -> AuthSession | None:
        loop = asyncio.get_running_loop()
        signed_in: asyncio.Future[AuthSession] = loop.create_future()

        def on_auth_event(event: AuthEventType, session: AuthSession | None) -> None:
            if event == AuthEventType.SIGNED_IN and session is not None:
                if not signed_in.done():
                    signed_in.set_result(session)

        unsubscribe = self.auth_service.on_auth_state_change(on_auth_event)
        tasks: list[asyncio.Task] = [
            asyncio.create_task(self.auth_service.get_session(request.access_token))
        ]
        if request.code:
            tasks.append(
                asyncio.create_task(
                    self.auth_service.exchange_code_for_session(
                        request.code, request.code_verifier
                    )
                )
            )

        try:
            return await self._first_session(
                signed_in, tasks, self.auth_settings.callback_timeout_seconds
            )
        finally:
            unsubscribe()
            for task in tasks:
                task.cancel()
            if not signed_in.done():
                signed_in.cancel()

    async def _first_session(
        self,
        signed_in: asyncio.Future,
        tasks: list[asyncio.Task],
        timeout: float,
    ) -> AuthSession | None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        waiting: set[asyncio.Future] = {signed_in, *tasks}

        while waiting:
            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            done, waiting = await asyncio.wait(
                waiting, timeout=remaining, return_when=asyncio.FIRST_COMPLETED
            )
            if signed_in in done:
                return signed_in.result()
            for task in done:
                if task.exception() is not None:
                    logfire.warn("Auth callback step failed", error=str(task.exception()))
                elif task.result() is not None:
                    return task.result()
            if waiting == {signed_in}:
                # Nothing left that could emit SIGNED_IN
                logfire.warn("Auth callback found no session")
                return None

        logfire.warn(
            "Auth callback timed out, redirecting to login",
            timeout_seconds=timeout,
        )
        return None
