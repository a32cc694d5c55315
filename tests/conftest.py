"""Test configuration and shared builders."""

from uuid import uuid4

from dishka import AsyncContainer

from simskut.domain.model import FeedPost, FeedPostView, Invite, Profile
from simskut.domain.model.common import utcnow
from simskut.domain.repository import InviteRepository, ProfileRepository
from simskut.domain.service import JWTService
from simskut.domain.service.invite_code import generate_invite_code
from simskut.domain.value import (
    InviteCode,
    InviteId,
    InviteStatus,
    PostId,
    UserId,
    Username,
)


def make_profile(
    username: str = "simmer", is_admin: bool = False, **overrides
) -> Profile:
    """Build a profile with a fresh id.

    Args:
        username: Full username, optionally with #tag
        is_admin: Admin flag
        **overrides: Any other Profile field

    Returns:
        Profile ready to be stored
    """
    fields = {
        "id": UserId(uuid4()),
        "username": Username(username),
        "display_name": username.split("#")[0].title(),
        "is_admin": is_admin,
        "created_at": utcnow(),
    }
    fields.update(overrides)
    return Profile(**fields)


def make_invite(
    user_id: UserId, status: InviteStatus = InviteStatus.PENDING, **overrides
) -> Invite:
    """Build an invite for `user_id` with a random code."""
    fields = {
        "id": InviteId(uuid4()),
        "code": InviteCode(generate_invite_code()),
        "used_by": user_id,
        "status": status,
        "created_at": utcnow(),
    }
    fields.update(overrides)
    return Invite(**fields)


def make_post_view(author_id: UserId | None = None, **overrides) -> FeedPostView:
    """Build a joined post for realtime buffer tests."""
    post = FeedPost(
        id=PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        content=overrides.pop("content", "Nova casa no Willow Creek"),
        created_at=overrides.pop("created_at", utcnow()),
    )
    return FeedPostView(post=post, **overrides)


async def seed_user(
    container: AsyncContainer,
    username: str,
    is_admin: bool = False,
    approved: bool = True,
) -> tuple[Profile, str]:
    """Store a user directly and mint their API token.

    Members get an approved invite unless `approved` is False.

    Returns:
        Tuple of (profile, auth token)
    """
    async with container() as scoped:
        profile_repo = await scoped.get(ProfileRepository)
        profile = await profile_repo.create(make_profile(username, is_admin=is_admin))
        if not is_admin and approved:
            invite_repo = await scoped.get(InviteRepository)
            await invite_repo.create(make_invite(profile.id, status=InviteStatus.APPROVED))
        jwt_service = await scoped.get(JWTService)
        token = jwt_service.create_token(
            user_id=str(profile.id), username=username, is_admin=is_admin
        )
    return profile, token
