"""Admin routes: invite review, stats and user management."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.invite import (
    ApproveInviteUseCase,
    GetInviteStatsUseCase,
    InviteResponse,
    ListInvitesRequest,
    ListInvitesUseCase,
    RejectInviteUseCase,
    ReviewInviteRequest,
)
from simskut.application.usecase.invite.invite_stats import InviteStatsResponse
from simskut.application.usecase.invite.list_invites import ListInvitesResponse
from simskut.application.usecase.profile import (
    ListUsersRequest,
    ListUsersUseCase,
    ProfileResponse,
    SetAdminRequest,
    SetAdminUseCase,
)
from simskut.application.usecase.profile.admin_users import ListUsersResponse
from simskut.domain.value import InviteFilter, InviteId, UserId
from simskut.interface.api.auth import require_user, user_id_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


class SetAdminAPIRequest(BaseModel):
    """API request for granting or revoking admin."""

    is_admin: bool


@router.get("/invites", response_model=ListInvitesResponse)
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    status_filter: InviteFilter = Query(default=InviteFilter.ALL, alias="status"),
    review_queue: bool = False,
    auth_token: str | None = Cookie(default=None),
) -> ListInvitesResponse:
    """List invites with their owners.

    `review_queue=true` returns pending invites oldest first; otherwise the
    optional status filter applies, newest first.
    """
    user = await require_user(auth_token, get_current_user_use_case, "review invites")
    return await list_invites_use_case.execute(
        ListInvitesRequest(
            admin_id=user_id_of(user), filter=status_filter, review_queue=review_queue
        )
    )


@router.post("/invites/{invite_id}/approve", response_model=InviteResponse)
async def approve_invite(
    invite_id: UUID,
    approve_invite_use_case: FromDishka[ApproveInviteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> InviteResponse:
    """Approve a pending invite."""
    user = await require_user(auth_token, get_current_user_use_case, "approve invites")
    result = await approve_invite_use_case.execute(
        ReviewInviteRequest(invite_id=InviteId(invite_id), admin_id=user_id_of(user))
    )
    logger.info(f"Invite {invite_id} approved by {user.username}")
    return result


@router.post("/invites/{invite_id}/reject", response_model=InviteResponse)
async def reject_invite(
    invite_id: UUID,
    reject_invite_use_case: FromDishka[RejectInviteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> InviteResponse:
    """Reject a pending invite. Rejection is final."""
    user = await require_user(auth_token, get_current_user_use_case, "reject invites")
    result = await reject_invite_use_case.execute(
        ReviewInviteRequest(invite_id=InviteId(invite_id), admin_id=user_id_of(user))
    )
    logger.info(f"Invite {invite_id} rejected by {user.username}")
    return result


@router.get("/stats", response_model=InviteStatsResponse)
async def get_stats(
    get_invite_stats_use_case: FromDishka[GetInviteStatsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> InviteStatsResponse:
    """Dashboard counters."""
    user = await require_user(auth_token, get_current_user_use_case, "view stats")
    return await get_invite_stats_use_case.execute(user_id_of(user))


@router.get("/users", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListUsersResponse:
    """List all profiles, newest first."""
    user = await require_user(auth_token, get_current_user_use_case, "list users")
    return await list_users_use_case.execute(
        ListUsersRequest(admin_id=user_id_of(user), limit=limit, offset=offset)
    )


@router.put("/users/{user_id}/admin", response_model=ProfileResponse)
async def set_admin(
    user_id: UUID,
    request: SetAdminAPIRequest,
    set_admin_use_case: FromDishka[SetAdminUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Grant or revoke the admin flag."""
    user = await require_user(auth_token, get_current_user_use_case, "manage admins")
    return await set_admin_use_case.execute(
        SetAdminRequest(
            admin_id=user_id_of(user), user_id=UserId(user_id), is_admin=request.is_admin
        )
    )
