"""PKCE helpers for the auth provider's OAuth code flow."""

import secrets
from base64 import urlsafe_b64encode
from hashlib import sha256


def generate_pkce_pair() -> tuple[str, str]:
    """Generate a PKCE (verifier, challenge) pair.

    The challenge goes into the authorize URL; the verifier stays with the
    client until it exchanges the callback code.

    Returns:
        Tuple of (verifier, S256 challenge), both base64url without padding
    """
    verifier = urlsafe_b64encode(secrets.token_bytes(48)).rstrip(b"=").decode("ascii")
    digest = sha256(verifier.encode("ascii")).digest()
    challenge = urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge
