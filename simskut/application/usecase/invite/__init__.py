"""Invite use cases."""

from .get_my_invite import GetMyInviteUseCase, InviteResponse
from .invite_stats import GetInviteStatsUseCase
from .list_invites import ListInvitesRequest, ListInvitesUseCase
from .review_invite import ApproveInviteUseCase, RejectInviteUseCase, ReviewInviteRequest
from .sync_approval import SyncApprovalUseCase

__all__ = [
    "ApproveInviteUseCase",
    "GetInviteStatsUseCase",
    "GetMyInviteUseCase",
    "InviteResponse",
    "ListInvitesRequest",
    "ListInvitesUseCase",
    "RejectInviteUseCase",
    "ReviewInviteRequest",
    "SyncApprovalUseCase",
]
