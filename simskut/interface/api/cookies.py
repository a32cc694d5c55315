"""Auth cookie settings shared by the auth routes."""

from fastapi import Response

from simskut.config import Settings
from simskut.interface.api.auth import AUTH_COOKIE

PKCE_COOKIE = "pkce_verifier"
PKCE_MAX_AGE = 10 * 60


def _cookie_options(settings: Settings) -> dict:
    # Production (cross-subdomain): samesite="none" requires secure=True
    # Development (same-origin): samesite="lax" over plain HTTP
    is_production = settings.environment == "production"
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "none" if is_production else "lax",
        "domain": settings.auth.cookie_domain if is_production else None,
        "path": "/",
    }


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the API session cookie."""
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
        **_cookie_options(settings),
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    """Delete the API session cookie with the options it was set with."""
    options = _cookie_options(settings)
    response.delete_cookie(
        key=AUTH_COOKIE, domain=options["domain"], path=options["path"]
    )


def set_pkce_cookie(response: Response, verifier: str, settings: Settings) -> None:
    """Keep the PKCE verifier until the provider redirects back."""
    response.set_cookie(
        key=PKCE_COOKIE, value=verifier, max_age=PKCE_MAX_AGE, **_cookie_options(settings)
    )


def clear_pkce_cookie(response: Response, settings: Settings) -> None:
    """Drop the PKCE verifier once the callback has used it."""
    options = _cookie_options(settings)
    response.delete_cookie(
        key=PKCE_COOKIE, domain=options["domain"], path=options["path"]
    )
