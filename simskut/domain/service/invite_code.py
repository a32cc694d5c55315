"""Invite code generation and validation."""

import secrets

from simskut.domain.value.types import INVITE_CODE_ALPHABET, INVITE_CODE_PATTERN

INVITE_CODE_PREFIX = "SIMS"
GROUP_LENGTH = 4


def _group() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(GROUP_LENGTH))


def generate_invite_code() -> str:
    """Generate a code like SIMS-K7PQ-3MZX.

    Uniqueness is enforced by the database; callers regenerate on collision.
    """
    return f"{INVITE_CODE_PREFIX}-{_group()}-{_group()}"


def is_valid_invite_format(code: str) -> bool:
    """Check that `code` has the exact SIMS-XXXX-XXXX shape."""
    return bool(INVITE_CODE_PATTERN.match(code))
