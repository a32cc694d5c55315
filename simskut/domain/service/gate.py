"""Onboarding gate: who may reach the feed, and where to send everyone else."""

from simskut.domain.model import Invite, Profile
from simskut.domain.value import AppRoute, ApprovalStatus, InviteStatus


def approval_status(invite: Invite | None) -> ApprovalStatus:
    """Coarse status derived from the user's latest invite."""
    if invite is None:
        return ApprovalStatus.NONE
    return ApprovalStatus(invite.status.value)


def can_access_feed(profile: Profile | None, invite: Invite | None) -> bool:
    """Admins always pass; everyone else needs an approved latest invite."""
    if profile is not None and profile.is_admin:
        return True
    return invite is not None and invite.status == InviteStatus.APPROVED


def resolve_route(profile: Profile | None, invite: Invite | None) -> AppRoute:
    """Pick the landing route for an authenticated user."""
    if profile is not None and profile.is_admin:
        return AppRoute.ADMIN
    if can_access_feed(profile, invite):
        return AppRoute.FEED
    return AppRoute.PENDING
